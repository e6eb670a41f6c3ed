"""Print the resolved name of every room in a saved sync response.

Usage::

    ROOMNAME_USER_ID=@alice:example.com \\
    ROOMNAME_SNAPSHOT_PATH=sync.json \\
    python -m roomname
"""

from __future__ import annotations

import json
import logging
import sys

from .config import ResolverConfig
from .resolver import RoomNameResolver
from .sync import load_sync_response

log = logging.getLogger("roomname")


def main() -> None:
    """Load the snapshot named by the environment and print one line per room."""
    config = ResolverConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )

    try:
        with open(config.snapshot_path, encoding="utf-8") as f:
            body = json.load(f)
    except (OSError, json.JSONDecodeError):
        log.exception("Failed to read snapshot %s", config.snapshot_path)
        sys.exit(1)
    if not isinstance(body, dict):
        log.error("Snapshot %s is not a sync response object", config.snapshot_path)
        sys.exit(1)

    store, direct_index = load_sync_response(body)
    resolver = RoomNameResolver(config.user_id, store, direct_index)
    log.info("Loaded %d rooms for %s", len(store.room_ids()), config.user_id)

    for room_id in store.room_ids():
        room = resolver.room(room_id)
        line = f"{room_id}\t{room.get_localized_displayname()}"
        if room.is_direct_chat:
            line += f"\tdirect:{room.direct_chat_matrix_id}"
        service = room.functional_members
        if service:
            line += f"\tservice:{','.join(service)}"
        print(line)


if __name__ == "__main__":
    main()
