import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from spike_arena.main import create_app
from spike_arena.services.game_service import GameService


@pytest.fixture()
def game() -> GameService:
    return GameService(rng=random.Random(1234))


@pytest.fixture()
def client(game: GameService) -> Generator[TestClient, None, None]:
    """TestClient with the tick loop off so websocket traffic is deterministic."""
    app = create_app(game_service=game, start_simulation=False)
    with TestClient(app) as c:
        yield c
