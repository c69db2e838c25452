"""Metadata endpoints: enum definitions so clients need no hardcoded tables."""

from __future__ import annotations

from fastapi import APIRouter

from procgen.api.schemas import EnumEntry, EnumsResponse, TileKindEntry
from procgen.core.enums import Direction, DungeonAlgorithm, RoomKind, TileKind

router = APIRouter(prefix="/metadata", tags=["Metadata"])


@router.get("/enums", response_model=EnumsResponse)
def get_enums() -> EnumsResponse:
    return EnumsResponse(
        tile_kinds=[
            TileKindEntry(id=int(t), name=t.name.lower(), glyph=t.glyph, walkable=t.walkable)
            for t in TileKind
        ],
        room_kinds=[EnumEntry(id=int(k), name=k.name.lower()) for k in RoomKind],
        directions=[EnumEntry(id=int(d), name=d.name.lower()) for d in Direction],
        algorithms=[EnumEntry(id=int(a), name=a.name.lower()) for a in DungeonAlgorithm],
    )
