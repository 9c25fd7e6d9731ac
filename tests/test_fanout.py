import asyncio

from spike_arena.services.game_service import GameService
from spike_arena.services.websocket_service import ClientConnection, WebSocketService


class _RecordingSocket:
    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send_json(self, message: dict) -> None:
        self.sent.append(message)


class _DeadSocket:
    async def send_json(self, message: dict) -> None:
        raise RuntimeError("connection reset")


def test_full_queue_keeps_newest_messages() -> None:
    connection = ClientConnection(_RecordingSocket(), "c1", queue_size=2)

    for n in range(3):
        assert connection.send({"n": n})

    kept = [connection.queue.get_nowait() for _ in range(connection.queue.qsize())]
    assert kept == [{"n": 1}, {"n": 2}]


def test_dead_connection_does_not_block_others() -> None:
    game = GameService()
    service = WebSocketService(game)

    async def scenario() -> None:
        dead = ClientConnection(_DeadSocket(), "dead")
        live_socket = _RecordingSocket()
        live = ClientConnection(live_socket, "live")
        game.registry.add_connection("dead", dead)
        game.registry.add_connection("live", live)
        dead.start()
        live.start()

        service.broadcast({"type": "update", "n": 1})
        await asyncio.sleep(0.05)

        assert dead.closed
        assert not dead.send({"type": "update"})

        service.broadcast({"type": "update", "n": 2})
        await asyncio.sleep(0.05)

        assert [m["n"] for m in live_socket.sent] == [1, 2]
        await dead.close()
        await live.close()

    asyncio.run(scenario())
