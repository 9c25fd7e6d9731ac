# spike_arena/services/game_service.py
"""Core game logic and state management."""

import logging
import random
from typing import List, Optional

from pydantic import ValidationError

from spike_arena.config.settings import MAX_X, MAX_Y, MIN_X, MIN_Y
from spike_arena.models.entities import Oxygen, Player, Spike
from spike_arena.models.messages import PlayerUpdate
from spike_arena.services.registry import ConnectionRegistry
from spike_arena.utils.helpers import next_entity_id, random_position

logger = logging.getLogger(__name__)


class GameService:
    """Owns the authoritative game state: players, the spike and the oxygen."""

    def __init__(self, rng: random.Random = None):
        self.rng = rng or random.Random()
        self.registry = ConnectionRegistry(self.rng)
        self.spike: Spike = None
        self.oxygen: Oxygen = None
        self.tick_count = 0

        self._initialize_world()

    def _initialize_world(self):
        """Place the spike and the first oxygen bubble."""
        self.spike = self._spawn_spike()
        self.oxygen = self._spawn_oxygen()

    def _spawn_spike(self) -> Spike:
        x, y = random_position(self.rng)
        return Spike(id=next_entity_id(), x=x, y=y)

    def _spawn_oxygen(self) -> Oxygen:
        """Create an oxygen bubble at a random position with a fresh id."""
        x, y = random_position(self.rng)
        return Oxygen(id=next_entity_id(), x=x, y=y)

    # Players
    def create_player(self, player_id: str) -> Player:
        """Create a new player for a connection."""
        return self.registry.add_player(player_id)

    def remove_player(self, player_id: str):
        """Remove a player."""
        self.registry.remove_player(player_id)

    def update_player(self, player_id: str, data: dict) -> bool:
        """Apply a client-reported state to its player.

        Last write wins. Returns False when the payload is rejected or the
        player is gone.
        """
        player = self.registry.get_player(player_id)
        if player is None:
            logger.debug("Update for unknown player %s dropped", player_id)
            return False

        try:
            update = PlayerUpdate.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Invalid update from %s dropped: %s",
                player_id,
                e.errors(include_url=False),
            )
            return False

        player.x = update.x
        player.y = update.y
        player.score = update.score
        player.radius = update.radius
        return True

    # Simulation
    def _move_spike(self):
        """Bounce the spike off the world edges, then advance it one step."""
        spike = self.spike

        # Each axis is checked on its own so both can flip in one tick.
        if spike.x + spike.radius > MAX_X:
            spike.vx = -abs(spike.vx)
        if spike.y + spike.radius > MAX_Y:
            spike.vy = -abs(spike.vy)
        if spike.x - spike.radius <= MIN_X:
            spike.vx = abs(spike.vx)
        if spike.y - spike.radius <= MIN_Y:
            spike.vy = abs(spike.vy)

        spike.x += spike.vx
        spike.y += spike.vy

    def tick(self) -> dict:
        """Advance the world by one tick and return the resulting snapshot."""
        self._move_spike()
        changed: Optional[Player] = None

        for player in self.registry.all_players():
            if self.spike.collides_with(player):
                x, y = random_position(self.rng)
                player.respawn(x, y)
                changed = player
                logger.debug("Player %s hit the spike", player.id)

            if player.collides_with(self.oxygen):
                player.collect()
                self.oxygen = self._spawn_oxygen()
                changed = player
                logger.debug("Player %s collected oxygen (score %d)", player.id, player.score)

        self.tick_count += 1
        return self.get_snapshot(changed)

    # Snapshots
    def get_all_players(self) -> List[dict]:
        """Get all players as a list."""
        return [player.to_dict() for player in self.registry.all_players()]

    def get_snapshot(self, changed: Optional[Player] = None) -> dict:
        """Full state broadcast to every client."""
        return {
            "players": self.get_all_players(),
            "spike": self.spike.to_dict(),
            "oxygen": self.oxygen.to_dict(),
            "player": changed.to_dict() if changed else None,
        }

    def get_initial_state(self, player_id: str) -> dict:
        """State sent to a newly connected player."""
        return {
            "id": player_id,
            "players": self.get_all_players(),
            "oxygen": self.oxygen.to_dict(),
            "spike": self.spike.to_dict(),
        }

    def get_stats(self) -> dict:
        return {
            "players": len(self.registry.players),
            "connections": self.registry.connection_count,
            "ticks": self.tick_count,
        }
