"""Build a state snapshot from a client-server ``/sync`` response body.

Only what the name resolver needs is read: room state events, the room
``summary`` block and the ``m.direct`` account data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .direct import DIRECT, DirectChatIndex
from .state import StateStore
from .types import type_key

log = logging.getLogger(__name__)

# Room sections of a sync response and the event lists holding their state,
# in application order (later events win).
_ROOM_SECTIONS = {
    "join": ("state", "timeline"),
    "invite": ("invite_state",),
    "leave": ("state", "timeline"),
}


def load_sync_response(
    body: Mapping[str, Any],
    store: StateStore | None = None,
    direct_index: DirectChatIndex | None = None,
) -> tuple[StateStore, DirectChatIndex]:
    """Apply a ``/sync`` response to *store* and *direct_index*.

    Either may be ``None`` to start from an empty snapshot.  Passing the
    objects from a previous call applies an incremental sync on top.

    Returns:
        The ``(store, direct_index)`` pair.
    """
    store = store if store is not None else StateStore()
    direct_index = direct_index if direct_index is not None else DirectChatIndex()

    for event in _events(body.get("account_data")):
        if event.get("type") == type_key(DIRECT):
            direct_index.set_content(event.get("content"))

    rooms = body.get("rooms")
    if not isinstance(rooms, Mapping):
        return store, direct_index

    for section, timelines in _ROOM_SECTIONS.items():
        section_rooms = rooms.get(section)
        if not isinstance(section_rooms, Mapping):
            continue
        for room_id, room in section_rooms.items():
            if not isinstance(room, Mapping):
                log.debug("Skipping malformed room %r in rooms.%s", room_id, section)
                continue
            applied = 0
            for timeline in timelines:
                for event in _events(room.get(timeline)):
                    applied += _apply_state_event(store, room_id, event)
            if "summary" in room:
                store.update_summary(room_id, room["summary"])
            log.debug("Loaded %d state events for %s (%s)", applied, room_id, section)

    return store, direct_index


def _events(container: Any) -> Iterable[Mapping[str, Any]]:
    """Yield the well-formed event objects of an ``{"events": [...]}`` block."""
    if not isinstance(container, Mapping):
        return ()
    events = container.get("events")
    if not isinstance(events, list):
        return ()
    return [e for e in events if isinstance(e, Mapping)]


def _apply_state_event(store: StateStore, room_id: str, event: Mapping[str, Any]) -> int:
    event_type = event.get("type")
    state_key = event.get("state_key")
    if not isinstance(event_type, str) or not isinstance(state_key, str):
        # Timeline message events have no state key.
        return 0
    sender = event.get("sender")
    store.set_state(
        room_id,
        event_type,
        state_key,
        event.get("content"),
        sender=sender if isinstance(sender, str) else None,
    )
    return 1
