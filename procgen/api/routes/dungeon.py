"""POST /api/v1/dungeon/*: BSP, random-walk and cave dungeons."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from procgen.api.dependencies import get_generator_service
from procgen.api.routes.errors import generation_errors
from procgen.api.schemas import DungeonResponse, RectSchema, RoomSchema
from procgen.api.service import GeneratorService
from procgen.core.params import BSPParams, CaveParams, DungeonParams, RandomWalkParams
from procgen.systems.dungeon import DungeonResult

router = APIRouter(prefix="/dungeon")


def to_response(result: DungeonResult) -> DungeonResponse:
    grid = result.grid
    return DungeonResponse(
        algorithm=result.algorithm.name.lower(),
        seed=result.seed,
        width=grid.width,
        height=grid.height,
        grid=grid.run_length_encode(),
        rooms=[
            RoomSchema(
                id=room.room_id,
                kind=room.kind.name.lower(),
                bounds=RectSchema(x=room.bounds.x, y=room.bounds.y,
                                  width=room.bounds.width, height=room.bounds.height),
                center_x=room.center.x,
                center_y=room.center.y,
                size=room.size,
                connections=list(room.connections),
            )
            for room in result.rooms
        ],
        stats=dict(result.stats),
    )


def _generate(params: DungeonParams, service: GeneratorService) -> DungeonResponse:
    with generation_errors():
        return to_response(service.dungeon(params))


@router.post("/bsp", response_model=DungeonResponse)
def bsp(params: BSPParams, service: GeneratorService = Depends(get_generator_service)) -> DungeonResponse:
    return _generate(params, service)


@router.post("/random-walk", response_model=DungeonResponse)
def random_walk(
    params: RandomWalkParams, service: GeneratorService = Depends(get_generator_service)
) -> DungeonResponse:
    return _generate(params, service)


@router.post("/cave", response_model=DungeonResponse)
def cave(params: CaveParams, service: GeneratorService = Depends(get_generator_service)) -> DungeonResponse:
    return _generate(params, service)
