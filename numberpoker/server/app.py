"""
FastAPI Application Entry Point for NumberPoker.

This module creates and configures the FastAPI application with:
- HTTP routes for game management
- WebSocket endpoint for real-time play with a server-side oxygen timer
- CORS middleware for development
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from numberpoker import __version__
from numberpoker.server.routes import router
from numberpoker.server.websocket import websocket_endpoint, game_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="NumberPoker",
        description="Two-player number-guessing poker with HTTP and WebSocket APIs",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include HTTP routes
    app.include_router(router)

    # WebSocket endpoint
    app.websocket("/ws")(websocket_endpoint)

    @app.on_event("startup")
    async def startup_event():
        logger.info("NumberPoker server starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        for session in game_manager.sessions.values():
            game_manager.stop_oxygen(session)
        logger.info("NumberPoker server shutting down...")

    return app


# Create the application instance
app = create_app()
