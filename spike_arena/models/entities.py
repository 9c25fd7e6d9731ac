# spike_arena/models/entities.py
"""Game entity models and data classes."""

from dataclasses import asdict, dataclass

from spike_arena.config.settings import (
    OXYGEN_RADIUS,
    OXYGEN_VALUE,
    PLAYER_RADIUS,
    RADIUS_GROWTH,
    SPIKE_RADIUS,
    SPIKE_SPEED,
)
from spike_arena.utils.helpers import is_collision


class Circle:
    """Collision behaviour shared by every round entity."""

    x: float
    y: float
    radius: float

    def collides_with(self, other: "Circle") -> bool:
        """True when the two circles overlap."""
        return is_collision(self.x, self.y, self.radius, other.x, other.y, other.radius)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Player(Circle):
    """Represents a connected player, keyed by its connection id."""

    id: str
    x: float
    y: float
    radius: float = PLAYER_RADIUS
    score: int = 0

    def respawn(self, x: float, y: float):
        """Move to a fresh spawn and lose all progress."""
        self.x = x
        self.y = y
        self.score = 0
        self.radius = PLAYER_RADIUS

    def collect(self):
        """Pick up an oxygen bubble."""
        self.score += 1
        self.radius += RADIUS_GROWTH


@dataclass
class Spike(Circle):
    """Represents the bouncing hazard."""

    id: int
    x: float
    y: float
    radius: float = SPIKE_RADIUS
    vx: float = SPIKE_SPEED
    vy: float = SPIKE_SPEED


@dataclass
class Oxygen(Circle):
    """Represents the collectible oxygen bubble."""

    id: int
    x: float
    y: float
    radius: float = OXYGEN_RADIUS
    value: int = OXYGEN_VALUE
