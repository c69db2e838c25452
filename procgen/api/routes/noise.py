"""POST /api/v1/noise/*: fractal, ridged and Worley noise maps."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from procgen.api.dependencies import get_generator_service
from procgen.api.routes.errors import generation_errors
from procgen.api.schemas import NoiseMapResponse
from procgen.api.service import GeneratorService
from procgen.core.grid import NoiseMap
from procgen.core.params import FractalNoiseParams, WorleyNoiseParams

router = APIRouter(prefix="/noise")


def _to_response(noise_map: NoiseMap, seed: int) -> NoiseMapResponse:
    return NoiseMapResponse(
        width=noise_map.width,
        height=noise_map.height,
        seed=seed,
        min=noise_map.min(),
        max=noise_map.max(),
        values=noise_map.to_lists(),
    )


@router.post("/fractal", response_model=NoiseMapResponse)
def fractal(
    params: FractalNoiseParams,
    service: GeneratorService = Depends(get_generator_service),
) -> NoiseMapResponse:
    with generation_errors():
        return _to_response(service.fractal(params.model_copy(update={"kind": "fractal"})), params.seed)


@router.post("/ridged", response_model=NoiseMapResponse)
def ridged(
    params: FractalNoiseParams,
    service: GeneratorService = Depends(get_generator_service),
) -> NoiseMapResponse:
    with generation_errors():
        return _to_response(service.fractal(params.model_copy(update={"kind": "ridged"})), params.seed)


@router.post("/worley", response_model=NoiseMapResponse)
def worley(
    params: WorleyNoiseParams,
    service: GeneratorService = Depends(get_generator_service),
) -> NoiseMapResponse:
    with generation_errors():
        return _to_response(service.worley(params), params.seed)
