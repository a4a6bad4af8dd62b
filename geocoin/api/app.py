"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_session_manager
from geocoin.api.routes import api_router
from geocoin.api.session_manager import SessionManager
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        set_session_manager(SessionManager(_config))
        logger.info("API server started; session ready.")
        yield
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin World Engine",
        description=(
            "Location-grid coin caches with per-cell state.\n\n"
            "## API Groups\n\n"
            "- **State** - Player, held coins, visible caches and recent events\n"
            "- **Control** - Movement, geolocation updates and session reset\n"
            "- **Caches** - Inspect a visible cache, collect from it, deposit into it\n"
            "- **Save** - Export or import the whole session as one document\n"
            "- **Config** - Read-only board and game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Everything a map view needs to draw the current frame."},
            {"name": "Control", "description": "Step the player one tile, jump to a geolocation fix, or reset the session."},
            {"name": "Caches", "description": "Coin transfer against caches in the player's visibility window. 409 for cells that are not visible caches."},
            {"name": "Save", "description": "Session snapshot as a value. Per-cache snapshots inside it use the stable cache blob format."},
            {"name": "Config", "description": "Tile width, visibility radius, spawn probability and player defaults."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
