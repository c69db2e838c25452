"""GET /api/v1/config and /api/v1/history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from procgen.api.dependencies import get_generator_service
from procgen.api.schemas import GenerationConfigResponse, HistoryEntrySchema, HistoryResponse
from procgen.api.service import GeneratorService

router = APIRouter()


@router.get("/config", response_model=GenerationConfigResponse)
def get_config(
    service: GeneratorService = Depends(get_generator_service),
) -> GenerationConfigResponse:
    cfg = service.config
    return GenerationConfigResponse(
        seed=cfg.seed,
        width=cfg.width,
        height=cfg.height,
        noise_scale=cfg.noise_scale,
        noise_octaves=cfg.noise_octaves,
        bsp_min_room_size=cfg.bsp_min_room_size,
        bsp_max_room_size=cfg.bsp_max_room_size,
        bsp_iterations=cfg.bsp_iterations,
        walk_length=cfg.walk_length,
        num_walkers=cfg.num_walkers,
        cave_fill_probability=cfg.cave_fill_probability,
        cave_smooth_iterations=cfg.cave_smooth_iterations,
        wfc_retry_attempts=cfg.wfc_retry_attempts,
        max_grid_cells=cfg.max_grid_cells,
    )


@router.get("/history", response_model=HistoryResponse)
def get_history(
    count: int = Query(50, ge=1, le=1000),
    service: GeneratorService = Depends(get_generator_service),
) -> HistoryResponse:
    return HistoryResponse(entries=[
        HistoryEntrySchema(
            sequence=r.sequence, kind=r.kind, seed=r.seed, width=r.width, height=r.height,
            elapsed_ms=r.elapsed_ms, ok=r.ok, detail=r.detail,
        )
        for r in service.history.latest(count)
    ])
