"""Versioned API route modules."""

from fastapi import APIRouter

from procgen.api.routes.config import router as config_router
from procgen.api.routes.dungeon import router as dungeon_router
from procgen.api.routes.metadata import router as metadata_router
from procgen.api.routes.noise import router as noise_router
from procgen.api.routes.terrain import router as terrain_router
from procgen.api.routes.wfc import router as wfc_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(noise_router, tags=["Noise"])
api_router.include_router(dungeon_router, tags=["Dungeon"])
api_router.include_router(wfc_router, tags=["WFC"])
api_router.include_router(terrain_router, tags=["Terrain"])
api_router.include_router(config_router, tags=["Config"])
api_router.include_router(metadata_router)

__all__ = ["api_router"]
