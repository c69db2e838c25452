"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from procgen import __version__
from procgen.api.dependencies import set_generator_service
from procgen.api.routes import api_router
from procgen.api.service import GeneratorService
from procgen.config import GenerationConfig
from procgen.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GenerationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GenerationConfig()

    service = GeneratorService(config)
    set_generator_service(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(config.log_level)
        set_generator_service(service)
        logger.info("Generation API started (default seed %d).", config.seed)
        yield
        logger.info("Generation API shutting down after %d requests.", len(service.history))

    app = FastAPI(
        title="Procedural Generation Engine",
        description=(
            "Deterministic, seed-driven procedural content generation.\n\n"
            "## API Groups\n\n"
            "- **Noise**: Fractal, ridged and Worley noise maps\n"
            "- **Dungeon**: BSP, random-walk and cellular-automaton caves\n"
            "- **WFC**: Wave function collapse over caller-supplied patterns\n"
            "- **Terrain**: Height map, moisture and biome classification; name generation\n"
            "- **Config**: Service defaults and recent generation history\n"
            "- **Metadata**: Enum definitions for tiles, rooms, directions and algorithms\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Noise", "description": "Normalized 2-D noise maps. Same parameters and seed give the same map."},
            {"name": "Dungeon", "description": "Tile dungeons. Grids are RLE-encoded as [value, count, ...] pairs."},
            {"name": "WFC", "description": "Constraint-propagation tile maps. A contradiction is reported, not raised."},
            {"name": "Terrain", "description": "Biome maps built from height and moisture noise, plus fantasy names."},
            {"name": "Config", "description": "Read-only generator defaults and the recent request history."},
            {"name": "Metadata", "description": "Enum tables so clients need no hardcoded ids."},
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
