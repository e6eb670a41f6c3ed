"""Shared fixtures and fake types for name resolver tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from roomname.direct import DirectChatIndex
from roomname.resolver import RoomNameResolver
from roomname.state import StateStore
from roomname.types import FUNCTIONAL_MEMBERS, HeroSummary

# Canonical IDs used throughout the test suite.
ROOM_ID = "!dmroom:example.com"
OWN_USER = "@alice:fakeserver.notexisting"
JOHN = "@john:example.com"
BOT = "@signal-bot:example.com"


# ---------------------------------------------------------------------------
# Lightweight fakes for matrix-nio (clearer than unittest.mock specs)
# ---------------------------------------------------------------------------


@dataclass
class FakeUser:
    """Minimal stand-in for ``nio.MatrixUser``."""

    display_name: str | None = None


@dataclass
class FakeSummary:
    """Minimal stand-in for ``nio.rooms.RoomSummary``."""

    invited_member_count: int | None = None
    joined_member_count: int | None = None
    heroes: list[str] | None = None


@dataclass
class FakeRoom:
    """Minimal stand-in for ``nio.MatrixRoom``."""

    room_id: str
    users: dict[str, FakeUser] = field(default_factory=dict)
    invited_users: dict[str, FakeUser] = field(default_factory=dict)
    summary: FakeSummary | None = None
    name: str | None = None
    canonical_alias: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def join(store: StateStore, user_id: str, displayname: str | None = None,
         room_id: str = ROOM_ID, membership: str = "join") -> None:
    """Apply an ``m.room.member`` event for *user_id*."""
    content = {"membership": membership}
    if displayname is not None:
        content["displayname"] = displayname
    store.set_state(room_id, "m.room.member", user_id, content, sender=user_id)


def mark_functional(store: StateStore, *user_ids: str, room_id: str = ROOM_ID) -> None:
    """Apply an ``io.element.functional_members`` event listing *user_ids*."""
    store.set_state(
        room_id, FUNCTIONAL_MEMBERS, "", {"service_members": list(user_ids)},
        sender=OWN_USER,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> StateStore:
    """An empty state store."""
    return StateStore()


@pytest.fixture()
def direct_index() -> DirectChatIndex:
    """An ``m.direct`` index listing the DM room under John."""
    return DirectChatIndex({JOHN: [ROOM_ID]})


@pytest.fixture()
def resolver(store: StateStore, direct_index: DirectChatIndex) -> RoomNameResolver:
    return RoomNameResolver(OWN_USER, store, direct_index)


@pytest.fixture()
def dm_store(store: StateStore) -> StateStore:
    """The DM with John and a Signal bridge bot, without functional members."""
    store.set_summary(
        ROOM_ID,
        HeroSummary(heroes=(BOT, JOHN), joined_member_count=3, invited_member_count=0),
    )
    join(store, BOT, "Signal Bridge Bot")
    join(store, JOHN, "John Doe")
    join(store, OWN_USER, "Alice")
    return store
