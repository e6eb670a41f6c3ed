"""Tests for the ``python -m roomname`` entry point."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import pytest

from roomname.__main__ import main
from tests.conftest import BOT, JOHN, OWN_USER, ROOM_ID

SYNC_BODY = {
    "account_data": {"events": [{"type": "m.direct", "content": {JOHN: [ROOM_ID]}}]},
    "rooms": {"join": {ROOM_ID: {
        "summary": {"m.heroes": [BOT, JOHN]},
        "state": {"events": [
            {"type": "m.room.member", "state_key": BOT, "sender": BOT,
             "content": {"membership": "join", "displayname": "Signal Bridge Bot"}},
            {"type": "m.room.member", "state_key": JOHN, "sender": JOHN,
             "content": {"membership": "join", "displayname": "John Doe"}},
            {"type": "io.element.functional_members", "state_key": "", "sender": OWN_USER,
             "content": {"service_members": [BOT]}},
        ]},
    }}},
}


def _run(snapshot_path: str) -> None:
    env = {"ROOMNAME_USER_ID": OWN_USER, "ROOMNAME_SNAPSHOT_PATH": snapshot_path}
    with patch.dict(os.environ, env, clear=False):
        main()


class TestMain:

    def test_prints_room_line(self, tmp_path, capsys):
        path = tmp_path / "sync.json"
        path.write_text(json.dumps(SYNC_BODY))

        _run(str(path))

        out = capsys.readouterr().out.strip()
        assert out == f"{ROOM_ID}\tJohn Doe\tdirect:{JOHN}\tservice:{BOT}"

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            _run(str(tmp_path / "missing.json"))

    def test_invalid_json_exits(self, tmp_path):
        path = tmp_path / "sync.json"
        path.write_text("{not json")
        with pytest.raises(SystemExit):
            _run(str(path))

    def test_non_object_exits(self, tmp_path):
        path = tmp_path / "sync.json"
        path.write_text("[]")
        with pytest.raises(SystemExit):
            _run(str(path))
