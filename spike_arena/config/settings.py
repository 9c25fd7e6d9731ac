# spike_arena/config/settings.py
"""Game configuration constants and settings."""

import os

from dotenv import load_dotenv

load_dotenv()

# World settings
MIN_X = 0
MAX_X = 800
MIN_Y = 0
MAX_Y = 600
SPAWN_MARGIN = 50  # spawns are inset by half of this from every edge
GRID_SNAP = 10

# Player settings
PLAYER_RADIUS = 30
RADIUS_GROWTH = 10

# Spike settings
SPIKE_RADIUS = 30
SPIKE_SPEED = 2  # units per tick on each axis

# Oxygen settings
OXYGEN_RADIUS = 15
OXYGEN_VALUE = 1

# Server settings
TICK_RATE = 50  # ticks per second
OUTBOUND_QUEUE_SIZE = 32  # messages buffered per connection
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


def get_game_config():
    """Get the client-facing game configuration as a dictionary."""
    return {
        "minX": MIN_X,
        "maxX": MAX_X,
        "minY": MIN_Y,
        "maxY": MAX_Y,
        "gridSnap": GRID_SNAP,
        "playerRadius": PLAYER_RADIUS,
        "radiusGrowth": RADIUS_GROWTH,
        "spikeRadius": SPIKE_RADIUS,
        "spikeSpeed": SPIKE_SPEED,
        "oxygenRadius": OXYGEN_RADIUS,
        "oxygenValue": OXYGEN_VALUE,
        "tickRate": TICK_RATE,
    }
