# spike_arena/services/registry.py
"""Live players and connection handles, keyed by connection id."""

import logging
from typing import Any, Dict, List, Optional

from spike_arena.models.entities import Player
from spike_arena.utils.helpers import random_position

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Tracks one player entity per active connection.

    The registry only holds state; sending messages is the gateway's job.
    """

    def __init__(self, rng=None):
        self.rng = rng
        self.players: Dict[str, Player] = {}
        self._connections: Dict[str, Any] = {}

    def add_player(self, connection_id: str) -> Player:
        """Create and register a player at a random spawn."""
        x, y = random_position(self.rng)
        player = Player(id=connection_id, x=x, y=y)
        self.players[connection_id] = player
        return player

    def remove_player(self, connection_id: str):
        """Remove the player for a connection, if any."""
        if self.players.pop(connection_id, None) is None:
            logger.debug("No player registered for %s", connection_id)

    def get_player(self, connection_id: str) -> Optional[Player]:
        return self.players.get(connection_id)

    def all_players(self) -> List[Player]:
        """Snapshot of the players in join order."""
        return list(self.players.values())

    def add_connection(self, connection_id: str, handle: Any):
        self._connections[connection_id] = handle

    def remove_connection(self, connection_id: str):
        self._connections.pop(connection_id, None)

    def connections(self) -> Dict[str, Any]:
        """Snapshot of the live connection handles."""
        return dict(self._connections)

    @property
    def connection_count(self) -> int:
        return len(self._connections)
