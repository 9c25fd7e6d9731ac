# spike_arena/services/websocket_service.py
"""WebSocket connection management and message handling."""

import asyncio
import json
import logging
import uuid
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect

from spike_arena.config.settings import OUTBOUND_QUEUE_SIZE, TICK_RATE
from .game_service import GameService

logger = logging.getLogger(__name__)


class ClientConnection:
    """A connected client with its own outbound queue.

    Messages are queued without waiting and written by a dedicated sender
    task, so a slow client only ever delays itself. When the queue is full
    the oldest message is dropped; every snapshot carries the full state.
    """

    def __init__(self, websocket: WebSocket, connection_id: str, queue_size: int = OUTBOUND_QUEUE_SIZE):
        self.websocket = websocket
        self.id = connection_id
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self.closed = False
        self._sender: Optional[asyncio.Task] = None

    def start(self):
        if not self._sender:
            self._sender = asyncio.create_task(self._drain())

    def send(self, message: dict) -> bool:
        """Queue a message for this client. Never blocks."""
        if self.closed:
            return False
        if self.queue.full():
            self.queue.get_nowait()
            logger.debug("Outbound queue full for %s, dropped oldest message", self.id)
        self.queue.put_nowait(message)
        return True

    async def _drain(self):
        while True:
            message = await self.queue.get()
            try:
                await self.websocket.send_json(message)
            except Exception as e:
                logger.info("Send to %s failed, closing outbound stream: %s", self.id, e)
                self.closed = True
                return

    async def close(self):
        self.closed = True
        if self._sender:
            self._sender.cancel()
            try:
                await self._sender
            except asyncio.CancelledError:
                pass
            self._sender = None


class WebSocketService:
    """Manages WebSocket connections, message routing and the tick loop."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.registry = game_service.registry
        self._tick_task: Optional[asyncio.Task] = None

    def start_background_tasks(self):
        """Start the simulation loop."""
        if not self._tick_task:
            self._tick_task = asyncio.create_task(self._tick_loop())

    async def stop_background_tasks(self):
        """Stop the simulation loop."""
        if self._tick_task:
            self._tick_task.cancel()
            try:
                await self._tick_task
            except asyncio.CancelledError:
                pass
            self._tick_task = None

    async def _tick_loop(self):
        """Advance the world TICK_RATE times per second and broadcast it."""
        loop = asyncio.get_running_loop()
        interval = 1 / TICK_RATE
        next_tick = loop.time()

        while True:
            next_tick += interval
            try:
                snapshot = self.game_service.tick()
                if self.registry.connection_count:
                    self.broadcast({"type": "update", **snapshot})
            except Exception:
                logger.exception("Tick %d failed", self.game_service.tick_count)

            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    async def handle_connection(self, websocket: WebSocket):
        """Handle a new WebSocket connection."""
        await websocket.accept()

        connection = ClientConnection(websocket, str(uuid.uuid4()))
        self.game_service.create_player(connection.id)

        # The init message is queued before the connection joins broadcasts.
        connection.send({"type": "init", **self.game_service.get_initial_state(connection.id)})
        self.registry.add_connection(connection.id, connection)
        connection.start()
        logger.info(
            "New connection %s from %s: %d connected",
            connection.id,
            websocket.client,
            self.registry.connection_count,
        )

        try:
            await self._handle_client_messages(connection)
        except WebSocketDisconnect:
            pass
        except Exception:
            logger.exception("WebSocket error for player %s", connection.id)
        finally:
            await self._handle_disconnect(connection)

    async def _handle_client_messages(self, connection: ClientConnection):
        """Handle incoming messages from a client."""
        while True:
            message = await connection.websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            raw = message.get("text")
            if raw is None:
                logger.warning("Binary frame from %s dropped", connection.id)
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Malformed JSON from %s dropped", connection.id)
                continue
            self._process_message(connection, data)

    def _process_message(self, connection: ClientConnection, data):
        """Process a single message from a client."""
        if not isinstance(data, dict):
            logger.warning("Non-object message from %s dropped", connection.id)
            return

        message_type = data.get("type")

        if message_type == "update":
            self._handle_player_update(connection, data)
        else:
            logger.warning("Unknown message type %r from %s", message_type, connection.id)

    def _handle_player_update(self, connection: ClientConnection, data: dict):
        """Handle player position/state update."""
        if self.game_service.update_player(connection.id, data):
            self.broadcast({"type": "update", **self.game_service.get_snapshot()})

    async def _handle_disconnect(self, connection: ClientConnection):
        """Handle client disconnection."""
        self.broadcast({"type": "remove-player", "id": connection.id}, exclude=connection.id)
        self.registry.remove_connection(connection.id)
        self.game_service.remove_player(connection.id)
        logger.info(
            "Player %s disconnected: %d connected",
            connection.id,
            self.registry.connection_count,
        )
        await connection.close()

    def broadcast(self, message: dict, exclude: str = None):
        """Queue a message for every connected client."""
        for connection_id, connection in self.registry.connections().items():
            if connection_id == exclude:
                continue
            connection.send(message)
