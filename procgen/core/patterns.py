"""Wave-function-collapse data model: tile patterns and solver cells."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from procgen.core.enums import Direction
from procgen.core.models import Vector2


@dataclass(frozen=True, slots=True)
class TilePattern:
    """A placeable pattern and the neighbours it tolerates on each side.

    ``allowed[d]`` lists the pattern ids that may sit in direction *d*
    of a cell holding this pattern.
    """

    pattern_id: int
    weight: float = 1.0
    name: str = ""
    allowed: dict[Direction, frozenset[int]] = field(default_factory=dict)

    def allowed_neighbors(self, direction: Direction) -> frozenset[int]:
        return self.allowed.get(direction, frozenset())

    @classmethod
    def build(
        cls,
        pattern_id: int,
        *,
        weight: float = 1.0,
        name: str = "",
        north: Iterable[int] = (),
        east: Iterable[int] = (),
        south: Iterable[int] = (),
        west: Iterable[int] = (),
    ) -> TilePattern:
        """Pattern with explicit neighbour lists; a side left empty accepts no neighbour at all."""
        return cls(
            pattern_id=pattern_id,
            weight=weight,
            name=name,
            allowed={
                Direction.NORTH: frozenset(north),
                Direction.EAST: frozenset(east),
                Direction.SOUTH: frozenset(south),
                Direction.WEST: frozenset(west),
            },
        )

    @classmethod
    def permissive(cls, pattern_id: int, all_ids: Iterable[int], weight: float = 1.0,
                   name: str = "") -> TilePattern:
        """Pattern that accepts every id in *all_ids* on all four sides."""
        ids = frozenset(all_ids)
        return cls(pattern_id=pattern_id, weight=weight, name=name,
                   allowed={d: ids for d in Direction})


@dataclass(slots=True)
class WfcCell:
    """Solver cell. ``possible`` only ever shrinks after initialisation."""

    position: Vector2
    possible: set[int]
    collapsed: int | None = None

    @property
    def entropy(self) -> int:
        return len(self.possible)

    @property
    def is_collapsed(self) -> bool:
        return self.collapsed is not None
