# spike_arena/main.py
"""FastAPI application wiring the game service to HTTP and WebSocket routes."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from spike_arena.api.routes import GameAPI
from spike_arena.config.settings import CORS_ORIGINS, HOST, LOG_LEVEL, PORT, TICK_RATE
from spike_arena.services.game_service import GameService
from spike_arena.services.websocket_service import WebSocketService

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(game_service: GameService = None, start_simulation: bool = True) -> FastAPI:
    """Build the application around a single game service."""
    game_service = game_service or GameService()
    websocket_service = WebSocketService(game_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run the simulation loop for the lifetime of the app."""
        if start_simulation:
            websocket_service.start_background_tasks()
            logger.info("Simulation started at %d ticks per second", TICK_RATE)
        yield
        await websocket_service.stop_background_tasks()

    app = FastAPI(title="spike-arena", lifespan=lifespan)
    app.state.game_service = game_service
    app.state.websocket_service = websocket_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(GameAPI(game_service).router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket_service.handle_connection(websocket)

    return app


app = create_app()


def run():
    import uvicorn

    logger.info("Listening on %s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
