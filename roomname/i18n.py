"""Strings used when a room name has to be synthesized."""

from __future__ import annotations

from .types import localpart


class MatrixLocalizations:
    """Default English strings.  Subclass to localize."""

    def count_people(self, count: int) -> str:
        if count == 1:
            return "1 person"
        return f"{count} people"

    def empty_chat(self, room_id: str) -> str:
        return room_id

    def user_label(self, user_id: str, displayname: str | None) -> str:
        """Label for a single user: the display name, else the MXID localpart."""
        if displayname and displayname.strip():
            return displayname
        return localpart(user_id) or user_id
