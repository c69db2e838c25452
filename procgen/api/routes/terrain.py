"""POST /api/v1/terrain and GET /api/v1/names."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from procgen.api.dependencies import get_generator_service
from procgen.api.routes.errors import generation_errors
from procgen.api.schemas import BiomeSchema, NamesResponse, TerrainResponse
from procgen.api.service import GeneratorService
from procgen.core.params import TerrainParams

router = APIRouter()


@router.post("/terrain", response_model=TerrainResponse)
def terrain(
    params: TerrainParams, service: GeneratorService = Depends(get_generator_service)
) -> TerrainResponse:
    with generation_errors():
        result = service.terrain(params)
    return TerrainResponse(
        width=params.width,
        height=params.height,
        seed=params.seed,
        biomes=[BiomeSchema(index=i, name=b.name, glyph=b.glyph) for i, b in enumerate(result.biomes)],
        biome_map=result.biome_map,
        height_map=result.height_map.to_lists(),
    )


@router.get("/names", response_model=NamesResponse)
def names(
    seed: int = Query(0),
    count: int = Query(10, ge=0, le=500),
    towns: int = Query(0, ge=0, le=500),
    service: GeneratorService = Depends(get_generator_service),
) -> NamesResponse:
    people, places = service.names(seed, count, towns)
    return NamesResponse(seed=seed, names=people, towns=places)
