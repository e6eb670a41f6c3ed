"""Room display-name resolution.

Reconciles four independently updated sources into one name:

1. The hero summary cached from sync (``m.heroes``), possibly stale.
2. Live ``m.room.member`` state events.
3. The ``io.element.functional_members`` state event, which marks bridge
   bots and other service accounts that must never show up in a name.
4. The account's ``m.direct`` data, which decides whether a room is a DM.

All operations are read-only and never raise on malformed state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mautrix.types import (
    CanonicalAliasStateEventContent,
    EventType,
    Membership,
    RoomNameStateEventContent,
)

from .i18n import MatrixLocalizations
from .types import FUNCTIONAL_MEMBERS, FunctionalMembersStateEventContent, localpart

if TYPE_CHECKING:
    from .direct import DirectChatIndex
    from .state import StateStore

log = logging.getLogger(__name__)


class RoomNameResolver:
    """Computes names and DM facts for rooms of one account.

    Args:
        own_user_id: The MXID of the logged-in account.
        state_store: Current room state.
        direct_index: The account's ``m.direct`` index.
        i18n: Default localizations for :meth:`get_localized_displayname`.
    """

    def __init__(
        self,
        own_user_id: str,
        state_store: StateStore,
        direct_index: DirectChatIndex,
        i18n: MatrixLocalizations | None = None,
    ) -> None:
        self._own_user_id = own_user_id
        self._store = state_store
        self._direct = direct_index
        self._i18n = i18n or MatrixLocalizations()

    @property
    def own_user_id(self) -> str:
        return self._own_user_id

    def room(self, room_id: str) -> Room:
        """Return a read-only view of *room_id* bound to this resolver."""
        return Room(room_id, self)

    # ------------------------------------------------------------------
    # Functional members
    # ------------------------------------------------------------------

    def functional_members(self, room_id: str) -> list[str]:
        """Service member MXIDs listed by the room's functional-members event.

        Order and duplicates are kept as sent; an absent or malformed event
        yields an empty list.
        """
        content = self._store.get_state(room_id, FUNCTIONAL_MEMBERS, "")
        if isinstance(content, FunctionalMembersStateEventContent):
            return list(content.service_members)
        return []

    # ------------------------------------------------------------------
    # Direct chats
    # ------------------------------------------------------------------

    def direct_chat_matrix_id(self, room_id: str) -> str | None:
        """The user this room is a direct chat with, or ``None``."""
        return self._direct.user_for_room(room_id)

    def is_direct_chat(self, room_id: str) -> bool:
        return self.direct_chat_matrix_id(room_id) is not None

    # ------------------------------------------------------------------
    # Display name
    # ------------------------------------------------------------------

    def get_localized_displayname(
        self, room_id: str, i18n: MatrixLocalizations | None = None,
    ) -> str:
        """Return the name to show for *room_id*.

        Precedence: explicit room name, canonical alias localpart, heroes
        (minus self and functional members), the inviter for pending invites,
        count of remaining live members, then :meth:`MatrixLocalizations.empty_chat`.
        """
        i18n = i18n or self._i18n

        name = self._store.get_state(room_id, EventType.ROOM_NAME, "")
        if isinstance(name, RoomNameStateEventContent) and isinstance(name.name, str):
            if name.name.strip():
                return name.name

        alias = self._store.get_state(room_id, EventType.ROOM_CANONICAL_ALIAS, "")
        if isinstance(alias, CanonicalAliasStateEventContent) and alias.canonical_alias:
            alias_localpart = localpart(str(alias.canonical_alias))
            if alias_localpart:
                return alias_localpart

        excluded = set(self.functional_members(room_id))
        excluded.add(self._own_user_id)

        heroes = [h for h in self._candidate_heroes(room_id) if h and h not in excluded]
        if heroes:
            return ", ".join(self._user_label(room_id, h, i18n) for h in heroes)

        # A pending invite is named after whoever sent it.
        inviter = self._inviter(room_id)
        if inviter and inviter not in excluded:
            return self._user_label(room_id, inviter, i18n)

        count = sum(
            1 for user_id, _ in self._store.list_members(room_id)
            if user_id not in excluded
        )
        if count:
            return i18n.count_people(count)

        log.debug("No participants known for %s, using placeholder", room_id)
        return i18n.empty_chat(room_id) or room_id

    def _candidate_heroes(self, room_id: str) -> list[str]:
        heroes = self._store.get_hero_summary(room_id).heroes
        if heroes is not None:
            return list(heroes)
        # No summary from the server: a DM is still named after its partner.
        partner = self.direct_chat_matrix_id(room_id)
        return [partner] if partner else []

    def _user_label(self, room_id: str, user_id: str, i18n: MatrixLocalizations) -> str:
        member = self._store.get_member(room_id, user_id)
        displayname = member.displayname if member else None
        return i18n.user_label(user_id, displayname)

    def _inviter(self, room_id: str) -> str | None:
        entry = self._store.get_entry(room_id, EventType.ROOM_MEMBER, self._own_user_id)
        if entry is None or entry.sender is None:
            return None
        content = entry.content
        if getattr(content, "membership", None) != Membership.INVITE:
            return None
        if entry.sender == self._own_user_id:
            return None
        return entry.sender


class Room:
    """Read-only view of one room through a :class:`RoomNameResolver`."""

    def __init__(self, room_id: str, resolver: RoomNameResolver) -> None:
        self.id = room_id
        self._resolver = resolver

    @property
    def functional_members(self) -> list[str]:
        return self._resolver.functional_members(self.id)

    @property
    def is_direct_chat(self) -> bool:
        return self._resolver.is_direct_chat(self.id)

    @property
    def direct_chat_matrix_id(self) -> str | None:
        return self._resolver.direct_chat_matrix_id(self.id)

    def get_localized_displayname(self, i18n: MatrixLocalizations | None = None) -> str:
        return self._resolver.get_localized_displayname(self.id, i18n)

    def __repr__(self) -> str:
        return f"Room({self.id!r})"
