"""Room display names, DM detection and service-member filtering for Matrix clients."""

from .direct import DirectChatIndex
from .i18n import MatrixLocalizations
from .resolver import Room, RoomNameResolver
from .state import StateStore
from .sync import load_sync_response
from .types import FUNCTIONAL_MEMBERS, FunctionalMembersStateEventContent, HeroSummary

__all__ = [
    "DirectChatIndex",
    "FUNCTIONAL_MEMBERS",
    "FunctionalMembersStateEventContent",
    "HeroSummary",
    "MatrixLocalizations",
    "Room",
    "RoomNameResolver",
    "StateStore",
    "load_sync_response",
]
