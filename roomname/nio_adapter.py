"""Copy a matrix-nio room snapshot into a :class:`~roomname.state.StateStore`.

nio keeps its own member list and summary but drops state events it does not
know, so ``io.element.functional_members`` has to be applied separately with
:meth:`StateStore.set_state`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mautrix.types import EventType, Membership

from .types import HeroSummary

if TYPE_CHECKING:
    from nio import MatrixRoom

    from .state import StateStore

log = logging.getLogger(__name__)


def load_nio_room(store: StateStore, room: MatrixRoom) -> None:
    """Apply *room*'s name, alias, members and summary to *store*."""
    room_id: str = room.room_id

    if room.name:
        store.set_state(room_id, EventType.ROOM_NAME, "", {"name": room.name})
    if room.canonical_alias:
        store.set_state(
            room_id, EventType.ROOM_CANONICAL_ALIAS, "", {"alias": room.canonical_alias},
        )

    invited = set(room.invited_users)
    members = {**room.users, **room.invited_users}
    for user_id, user in members.items():
        membership = Membership.INVITE if user_id in invited else Membership.JOIN
        content = {"membership": membership.value}
        if user.display_name:
            content["displayname"] = user.display_name
        store.set_state(room_id, EventType.ROOM_MEMBER, user_id, content)

    summary = room.summary
    if summary is not None:
        store.set_summary(
            room_id,
            HeroSummary(
                heroes=tuple(summary.heroes) if summary.heroes is not None else None,
                joined_member_count=summary.joined_member_count,
                invited_member_count=summary.invited_member_count,
            ),
        )
    log.debug("Loaded nio room %s with %d members", room_id, len(members))
