# spike_arena/utils/helpers.py
"""Utility functions and helpers."""

import math
import random
import time
from typing import Tuple

from spike_arena.config.settings import (
    GRID_SNAP,
    MAX_X,
    MAX_Y,
    MIN_X,
    MIN_Y,
    SPAWN_MARGIN,
)

_last_entity_id = 0


def calculate_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def is_collision(
    x1: float, y1: float, r1: float, x2: float, y2: float, r2: float
) -> bool:
    """Check if two circles are colliding.

    Circles that exactly touch are not colliding.
    """
    return calculate_distance(x1, y1, x2, y2) < (r1 + r2)


def _grid_range(low: int, high: int) -> Tuple[int, int]:
    """Grid indices whose snapped coordinate lies within [low, high]."""
    return math.ceil(low / GRID_SNAP), math.floor(high / GRID_SNAP)


def random_position(rng: random.Random = None) -> Tuple[int, int]:
    """Random grid-snapped spawn position, inset from the world edges."""
    rng = rng or random
    inset = SPAWN_MARGIN // 2
    x_lo, x_hi = _grid_range(MIN_X + inset, MAX_X - inset)
    y_lo, y_hi = _grid_range(MIN_Y + inset, MAX_Y - inset)
    return rng.randint(x_lo, x_hi) * GRID_SNAP, rng.randint(y_lo, y_hi) * GRID_SNAP


def next_entity_id() -> int:
    """Millisecond timestamp id, strictly increasing within the process."""
    global _last_entity_id
    _last_entity_id = max(int(time.time() * 1000), _last_entity_id + 1)
    return _last_entity_id
