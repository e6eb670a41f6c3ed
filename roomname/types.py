"""Event types and typed state contents used by the name resolver.

Contents are validated once, when they enter the :class:`~roomname.state.StateStore`,
so the resolver works against typed values instead of raw JSON dicts.
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, List, Union

import attr
from attr import dataclass
from mautrix.types import (
    CanonicalAliasStateEventContent,
    EventType,
    MemberStateEventContent,
    Membership,
    RoomNameStateEventContent,
    SerializableAttrs,
    SerializerError,
    UserID,
)

log = logging.getLogger(__name__)

# Singleton state event listing the bridge bots and other service accounts
# of a room.
FUNCTIONAL_MEMBERS = EventType.find(
    "io.element.functional_members", t_class=EventType.Class.STATE,
)

# Memberships that count as "in the room" for naming purposes.
ACTIVE_MEMBERSHIPS = (Membership.JOIN, Membership.INVITE)


@dataclass
class FunctionalMembersStateEventContent(SerializableAttrs):
    """Content of ``io.element.functional_members``."""

    service_members: List[UserID] = attr.ib(factory=list)


StateContent = Union[
    MemberStateEventContent,
    FunctionalMembersStateEventContent,
    RoomNameStateEventContent,
    CanonicalAliasStateEventContent,
    dict,
]


def type_key(event_type: EventType | str) -> str:
    """Return the wire name of *event_type* (``EventType`` or plain string)."""
    return str(event_type)


def localpart(identifier: str) -> str:
    """Strip the sigil and server name: ``@john:example.com`` -> ``john``."""
    return identifier.split(":")[0].lstrip("@#!")


def parse_state_content(event_type: EventType | str, content: Any) -> StateContent | None:
    """Validate raw *content* for *event_type* into its typed variant.

    Returns ``None`` for malformed member, room name and alias contents.
    Malformed functional-members content becomes an empty list so that a
    broken event never partially applies.  Unknown event types keep their
    raw dict.
    """
    key = type_key(event_type)
    if not isinstance(content, Mapping):
        log.debug("Ignoring non-object %s content: %r", key, content)
        if key == type_key(FUNCTIONAL_MEMBERS):
            return FunctionalMembersStateEventContent()
        return None

    if key == type_key(FUNCTIONAL_MEMBERS):
        return _parse_functional_members(content)
    if key == type_key(EventType.ROOM_MEMBER):
        return _parse_member(content)
    if key == type_key(EventType.ROOM_NAME):
        return _deserialize(RoomNameStateEventContent, content)
    if key == type_key(EventType.ROOM_CANONICAL_ALIAS):
        return _deserialize(CanonicalAliasStateEventContent, content)
    return dict(content)


def _parse_functional_members(content: Mapping) -> FunctionalMembersStateEventContent:
    members = content.get("service_members")
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        log.debug("Malformed service_members %r, treating as empty", members)
        return FunctionalMembersStateEventContent()
    return FunctionalMembersStateEventContent(service_members=list(members))


def _parse_member(content: Mapping) -> MemberStateEventContent | None:
    content = dict(content)
    if not isinstance(content.get("displayname", ""), str):
        del content["displayname"]
    return _deserialize(MemberStateEventContent, content)


def _deserialize(cls, content: Mapping):
    try:
        return cls.deserialize(dict(content))
    except (SerializerError, ValueError, TypeError) as e:
        log.debug("Failed to parse %s from %r: %s", cls.__name__, content, e)
        return None


@dataclasses.dataclass(frozen=True)
class HeroSummary:
    """The sync ``summary`` block of a room.

    ``heroes`` is ``None`` when the server never sent ``m.heroes``, which is
    different from an explicitly empty list.
    """

    heroes: tuple[str, ...] | None = None
    joined_member_count: int | None = None
    invited_member_count: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> "HeroSummary":
        """Parse ``{"m.heroes": [...], "m.joined_member_count": n, ...}``."""
        if not isinstance(data, Mapping):
            return cls()
        heroes = data.get("m.heroes")
        if isinstance(heroes, list):
            heroes = tuple(h for h in heroes if isinstance(h, str))
        else:
            heroes = None
        return cls(
            heroes=heroes,
            joined_member_count=_count(data.get("m.joined_member_count")),
            invited_member_count=_count(data.get("m.invited_member_count")),
        )

    def merged(self, update: "HeroSummary") -> "HeroSummary":
        """Return a copy with the fields *update* carries overriding ours.

        Sync summaries are incremental: omitted fields mean "unchanged".
        """
        return HeroSummary(
            heroes=update.heroes if update.heroes is not None else self.heroes,
            joined_member_count=(
                update.joined_member_count
                if update.joined_member_count is not None
                else self.joined_member_count
            ),
            invited_member_count=(
                update.invited_member_count
                if update.invited_member_count is not None
                else self.invited_member_count
            ),
        )

    def serialize(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.heroes is not None:
            data["m.heroes"] = list(self.heroes)
        if self.joined_member_count is not None:
            data["m.joined_member_count"] = self.joined_member_count
        if self.invited_member_count is not None:
            data["m.invited_member_count"] = self.invited_member_count
        return data


def _count(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value
