"""Account-level ``m.direct`` bookkeeping."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mautrix.types import EventType

log = logging.getLogger(__name__)

DIRECT = EventType.DIRECT


class DirectChatIndex:
    """Mapping of other user ID -> room IDs considered direct chats with them.

    Insertion order is kept: when one room is listed under several users the
    first user wins.

    Args:
        content: Optional ``m.direct`` account data content.
    """

    def __init__(self, content: Any = None) -> None:
        self._rooms_by_user: dict[str, list[str]] = {}
        if content is not None:
            self.set_content(content)

    def set_content(self, content: Any) -> None:
        """Replace the index with a new ``m.direct`` content.

        Entries whose key is not a string or whose value is not a list are
        skipped; non-string room IDs inside a list are dropped.
        """
        rooms_by_user: dict[str, list[str]] = {}
        if not isinstance(content, Mapping):
            log.debug("Ignoring non-object m.direct content: %r", content)
            content = {}
        for user_id, room_ids in content.items():
            if not isinstance(user_id, str) or not isinstance(room_ids, list):
                log.debug("Skipping malformed m.direct entry %r: %r", user_id, room_ids)
                continue
            rooms_by_user[user_id] = [r for r in room_ids if isinstance(r, str)]
        self._rooms_by_user = rooms_by_user

    def direct_chat_rooms_by_user(self) -> dict[str, list[str]]:
        """Return a copy of the ``{user_id: [room_id, ...]}`` mapping."""
        return {user: list(rooms) for user, rooms in self._rooms_by_user.items()}

    def user_for_room(self, room_id: str) -> str | None:
        """Return the first user whose direct chats include *room_id*."""
        for user_id, room_ids in self._rooms_by_user.items():
            if room_id in room_ids:
                return user_id
        return None

    def serialize(self) -> dict[str, list[str]]:
        return self.direct_chat_rooms_by_user()
