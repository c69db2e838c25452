"""POST /api/v1/wfc: wave function collapse tile maps."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from procgen.api.dependencies import get_generator_service
from procgen.api.routes.errors import generation_errors
from procgen.api.schemas import WfcResponse
from procgen.api.service import GeneratorService
from procgen.core.params import WfcParams

router = APIRouter()


@router.post("/wfc", response_model=WfcResponse)
def wfc(params: WfcParams, service: GeneratorService = Depends(get_generator_service)) -> WfcResponse:
    with generation_errors():
        result = service.wfc(params)
    where = result.contradiction_at
    return WfcResponse(
        width=result.width,
        height=result.height,
        seed=result.seed,
        success=result.success,
        contradiction_x=where.x if where is not None else None,
        contradiction_y=where.y if where is not None else None,
        iterations=result.iterations,
        grid=[list(row) for row in result.grid],
    )
