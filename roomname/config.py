"""Configuration parsed from environment variables."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ResolverConfig:
    """Settings for the ``python -m roomname`` inspection tool.

    Environment variables:
        ROOMNAME_USER_ID: MXID of the account the snapshot belongs to
            (e.g. ``@alice:example.com``)
        ROOMNAME_SNAPSHOT_PATH: Path to a saved ``/sync`` response (JSON)
        ROOMNAME_LOG_LEVEL: Logging level name (default: ``INFO``)
    """

    user_id: str
    snapshot_path: str
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ResolverConfig:
        """Parse configuration from environment variables.

        Exits the process if required variables are missing or invalid.
        """
        user_id = _require("ROOMNAME_USER_ID")
        if not user_id.startswith("@") or ":" not in user_id:
            log.error("ROOMNAME_USER_ID %r is not a Matrix user ID", user_id)
            sys.exit(1)
        snapshot_path = _require("ROOMNAME_SNAPSHOT_PATH")
        log_level = os.environ.get("ROOMNAME_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in _LOG_LEVELS:
            log.error("ROOMNAME_LOG_LEVEL must be one of %s", ", ".join(_LOG_LEVELS))
            sys.exit(1)

        return cls(
            user_id=user_id,
            snapshot_path=snapshot_path,
            log_level=log_level,
        )


def _require(var: str) -> str:
    """Return the stripped value of *var*, or exit if empty/missing."""
    value = os.environ.get(var, "").strip()
    if not value:
        log.error("%s is required", var)
        sys.exit(1)
    return value
