from __future__ import annotations

from fastapi.testclient import TestClient

from chesscore.config import Settings
from chesscore.engine.board import STARTPOS_FEN
from chesscore.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app(Settings(search_depth=2, bot_depth=2)))


def test_undo_restores_previous_state() -> None:
    client = _client()
    gid = client.post("/api/games").json()["game_id"]
    client.post(f"/api/games/{gid}/move", json={"move": "e2e4"})
    after_first = client.get(f"/api/games/{gid}/state").json()
    client.post(f"/api/games/{gid}/move", json={"move": "e7e5"})

    r = client.post(f"/api/games/{gid}/undo")
    assert r.status_code == 200
    assert r.json() == after_first

    r = client.post(f"/api/games/{gid}/undo")
    assert r.status_code == 200
    assert r.json()["fen"] == STARTPOS_FEN


def test_undo_with_no_moves_is_400() -> None:
    client = _client()
    gid = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{gid}/undo")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["type"] == "client_error"
