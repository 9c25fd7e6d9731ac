# spike_arena/api/routes.py
"""API routes for the game server."""

from fastapi import APIRouter

from spike_arena.config.settings import get_game_config
from spike_arena.services.game_service import GameService


class GameAPI:
    """API routes for game-related endpoints."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Set up all API routes."""

        @self.router.get("/")
        async def root():
            """Root endpoint."""
            return {"message": "Spike Arena Server Running"}

        @self.router.get("/api/game/config")
        async def get_game_config_endpoint():
            """Get world bounds, radii and tick rate."""
            return get_game_config()

        @self.router.get("/api/game/state")
        async def get_state():
            """Get the current snapshot."""
            return self.game_service.get_snapshot()

        @self.router.get("/api/game/players")
        async def get_players():
            """Get all current players."""
            return {"players": self.game_service.get_all_players()}

        @self.router.get("/api/game/stats")
        async def get_game_stats():
            """Get connection and tick counters."""
            return self.game_service.get_stats()
