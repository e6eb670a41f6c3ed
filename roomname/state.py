"""In-memory room state: latest event per ``(type, state key)`` plus hero summaries."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from mautrix.types import EventType, MemberStateEventContent, Membership

from .types import (
    ACTIVE_MEMBERSHIPS,
    HeroSummary,
    StateContent,
    parse_state_content,
    type_key,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateEntry:
    """The latest state event applied for one ``(type, state key)`` pair.

    ``content`` is ``None`` when the event content failed validation.
    """

    content: StateContent | None
    sender: str | None = None


class StateStore:
    """Room state tables keyed by room ID.

    Writing a ``(type, state key)`` pair that already exists replaces the
    previous entry; no history is kept.
    """

    def __init__(self) -> None:
        # room_id -> {(event type, state key): StateEntry}
        self._state: dict[str, dict[tuple[str, str], StateEntry]] = {}
        # room_id -> HeroSummary
        self._summaries: dict[str, HeroSummary] = {}

    # ------------------------------------------------------------------
    # Writes (sync pipeline side)
    # ------------------------------------------------------------------

    def set_state(
        self,
        room_id: str,
        event_type: EventType | str,
        state_key: str,
        content: Any,
        *,
        sender: str | None = None,
    ) -> None:
        """Apply a state event, replacing any earlier one with the same key."""
        key = (type_key(event_type), state_key)
        parsed = parse_state_content(event_type, content)
        self._state.setdefault(room_id, {})[key] = StateEntry(parsed, sender)

    def set_summary(self, room_id: str, summary: HeroSummary) -> None:
        """Replace the hero summary of *room_id*."""
        self._summaries[room_id] = summary

    def update_summary(self, room_id: str, data: Any) -> HeroSummary:
        """Merge an incremental sync ``summary`` block into the stored one."""
        summary = self.get_hero_summary(room_id).merged(HeroSummary.from_json(data))
        self._summaries[room_id] = summary
        return summary

    # ------------------------------------------------------------------
    # Reads (resolver side)
    # ------------------------------------------------------------------

    def room_ids(self) -> list[str]:
        """All rooms with state or a summary, in first-seen order."""
        return list(dict.fromkeys([*self._state, *self._summaries]))

    def get_entry(
        self, room_id: str, event_type: EventType | str, state_key: str = "",
    ) -> StateEntry | None:
        return self._state.get(room_id, {}).get((type_key(event_type), state_key))

    def get_state(
        self, room_id: str, event_type: EventType | str, state_key: str = "",
    ) -> StateContent | None:
        """Return the typed content of the latest matching event, if any."""
        entry = self.get_entry(room_id, event_type, state_key)
        return entry.content if entry else None

    def get_member(self, room_id: str, user_id: str) -> MemberStateEventContent | None:
        content = self.get_state(room_id, EventType.ROOM_MEMBER, user_id)
        if isinstance(content, MemberStateEventContent):
            return content
        return None

    def get_hero_summary(self, room_id: str) -> HeroSummary:
        return self._summaries.get(room_id, HeroSummary())

    def list_members(
        self,
        room_id: str,
        memberships: Iterable[Membership] = ACTIVE_MEMBERSHIPS,
    ) -> list[tuple[str, MemberStateEventContent]]:
        """Return ``(user_id, content)`` for members in one of *memberships*.

        Order follows the order in which each member was first applied.
        """
        wanted = set(memberships)
        member_type = type_key(EventType.ROOM_MEMBER)
        members = []
        for (event_type, state_key), entry in self._state.get(room_id, {}).items():
            if event_type != member_type:
                continue
            content = entry.content
            if isinstance(content, MemberStateEventContent) and content.membership in wanted:
                members.append((state_key, content))
        return members
