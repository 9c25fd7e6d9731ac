import random
import time

from fastapi.testclient import TestClient

from spike_arena.main import create_app
from spike_arena.services.game_service import GameService


def test_tick_loop_broadcasts_snapshots() -> None:
    game = GameService(rng=random.Random(99))
    app = create_app(game_service=game)

    with TestClient(app) as client, client.websocket_connect("/ws") as ws:
        assert ws.receive_json()["type"] == "init"

        first = ws.receive_json()
        second = ws.receive_json()

    assert first["type"] == second["type"] == "update"
    assert set(first) == {"type", "players", "spike", "oxygen", "player"}
    assert first["spike"]["x"] != second["spike"]["x"]
    assert game.tick_count >= 2


def test_tick_loop_stops_on_shutdown() -> None:
    game = GameService(rng=random.Random(5))
    app = create_app(game_service=game)

    with TestClient(app):
        pass

    ticks = game.tick_count
    time.sleep(0.1)
    assert app.state.websocket_service._tick_task is None
    assert game.tick_count == ticks
