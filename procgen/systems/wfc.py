"""Wave function collapse over a grid of pattern possibility sets.

Loop:
  1. select    - lowest-entropy uncollapsed cell, first in row-major order on ties
  2. terminate - nothing left to collapse: success
  3. check     - selected cell has no possibilities: contradiction
  4. collapse  - weighted draw over the cell's remaining patterns
  5. propagate - stack-driven neighbour pruning until nothing shrinks

There is no backtracking. A contradiction ends the solve and is reported in
the result; callers wanting robustness can retry with another seed
(see ``solve_with_retries``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from procgen.core.enums import Direction, Domain
from procgen.core.grid import require_dimensions
from procgen.core.models import DIRECTION_OFFSETS, Vector2
from procgen.core.params import WfcParams
from procgen.core.patterns import TilePattern, WfcCell
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)


class SolveState(str, Enum):
    RUNNING = "running"
    SUCCESS = "success"
    CONTRADICTION = "contradiction"


@dataclass(frozen=True, slots=True)
class WfcResult:
    """Final grid of pattern ids; ``None`` marks cells left uncollapsed."""

    width: int
    height: int
    grid: tuple[tuple[int | None, ...], ...]
    success: bool
    contradiction_at: Vector2 | None = None
    iterations: int = 0
    seed: int = 0

    def get(self, x: int, y: int) -> int | None:
        return self.grid[y][x]


class WaveFunctionCollapseSolver:
    """Entropy-ordered propagate-and-collapse solver.

    Use ``run()`` for a full solve, or ``step()`` to advance one
    select/collapse/propagate iteration at a time.
    """

    __slots__ = ("width", "height", "_patterns", "_ids", "_cells", "_rng", "_seed",
                 "state", "contradiction_at", "iterations")

    def __init__(self, width: int, height: int, patterns: Sequence[TilePattern], seed: int) -> None:
        require_dimensions(width, height)
        if not patterns:
            raise ValueError("at least one tile pattern is required")

        by_id: dict[int, TilePattern] = {}
        for pattern in patterns:
            if pattern.pattern_id in by_id:
                raise ValueError(f"duplicate pattern id {pattern.pattern_id}")
            by_id[pattern.pattern_id] = pattern
        for pattern in patterns:
            for direction in Direction:
                unknown = pattern.allowed_neighbors(direction) - by_id.keys()
                if unknown:
                    raise ValueError(
                        f"pattern {pattern.pattern_id} allows unknown ids {sorted(unknown)} to the {direction.name}"
                    )

        self.width = width
        self.height = height
        self._patterns = by_id
        self._ids = sorted(by_id)
        self._cells = [
            WfcCell(position=Vector2(x, y), possible=set(self._ids))
            for y in range(height)
            for x in range(width)
        ]
        self._rng = RandomStream(seed, Domain.WFC)
        self._seed = seed
        self.state = SolveState.RUNNING
        self.contradiction_at: Vector2 | None = None
        self.iterations = 0

    # -- cell access --

    def cell(self, x: int, y: int) -> WfcCell:
        return self._cells[y * self.width + x]

    def entropies(self) -> list[int]:
        """Possibility-set sizes in row-major order."""
        return [c.entropy for c in self._cells]

    def _neighbor(self, cell: WfcCell, direction: Direction) -> WfcCell | None:
        pos = cell.position + DIRECTION_OFFSETS[direction]
        if 0 <= pos.x < self.width and 0 <= pos.y < self.height:
            return self._cells[pos.y * self.width + pos.x]
        return None

    # -- phases --

    def select(self) -> WfcCell | None:
        best: WfcCell | None = None
        for cell in self._cells:
            if cell.is_collapsed:
                continue
            if best is None or cell.entropy < best.entropy:
                best = cell
        return best

    def collapse(self, cell: WfcCell) -> int:
        options = sorted(cell.possible)
        choice = options[self._rng.weighted_index([self._patterns[p].weight for p in options])]
        cell.possible = {choice}
        cell.collapsed = choice
        return choice

    def propagate(self, origin: WfcCell) -> bool:
        """Prune neighbours until stable. Returns False once any cell runs out of options."""
        stack = [origin]
        while stack:
            current = stack.pop()
            for direction in Direction:
                neighbor = self._neighbor(current, direction)
                if neighbor is None:
                    continue
                allowed: set[int] = set()
                for pid in current.possible:
                    allowed |= self._patterns[pid].allowed_neighbors(direction)
                before = neighbor.entropy
                neighbor.possible &= allowed
                if neighbor.entropy == before:
                    continue
                if not neighbor.possible:
                    self.contradiction_at = neighbor.position
                    return False
                stack.append(neighbor)
        return True

    def step(self) -> SolveState:
        """Run one select/collapse/propagate iteration."""
        if self.state is not SolveState.RUNNING:
            return self.state

        cell = self.select()
        if cell is None:
            self.state = SolveState.SUCCESS
            return self.state
        if cell.entropy == 0:
            self.contradiction_at = cell.position
            self.state = SolveState.CONTRADICTION
            return self.state

        self.iterations += 1
        self.collapse(cell)
        if not self.propagate(cell):
            self.state = SolveState.CONTRADICTION
        return self.state

    def run(self) -> WfcResult:
        while self.step() is SolveState.RUNNING:
            pass
        if self.state is SolveState.CONTRADICTION:
            logger.warning("WFC contradiction at %s after %d collapses (seed=%d)",
                           self.contradiction_at, self.iterations, self._seed)
        else:
            logger.debug("WFC solved %dx%d in %d collapses", self.width, self.height, self.iterations)
        return self.result()

    def result(self) -> WfcResult:
        w = self.width
        rows = tuple(
            tuple(c.collapsed for c in self._cells[y * w:(y + 1) * w])
            for y in range(self.height)
        )
        return WfcResult(
            width=self.width,
            height=self.height,
            grid=rows,
            success=self.state is SolveState.SUCCESS,
            contradiction_at=self.contradiction_at,
            iterations=self.iterations,
            seed=self._seed,
        )


def solve(width: int, height: int, patterns: Sequence[TilePattern], seed: int) -> WfcResult:
    return WaveFunctionCollapseSolver(width, height, patterns, seed).run()


def solve_with_retries(
    width: int, height: int, patterns: Sequence[TilePattern], seed: int, attempts: int = 5
) -> WfcResult:
    """Re-run with seeds ``seed, seed + 1, ...`` until a solve succeeds."""
    result = solve(width, height, patterns, seed)
    for attempt in range(1, attempts):
        if result.success:
            break
        result = solve(width, height, patterns, seed + attempt)
    return result


def patterns_from_params(params: WfcParams) -> list[TilePattern]:
    return [
        TilePattern.build(
            spec.pattern_id,
            weight=spec.weight,
            name=spec.name,
            north=spec.north,
            east=spec.east,
            south=spec.south,
            west=spec.west,
        )
        for spec in params.patterns
    ]


def satisfies_adjacency(result: WfcResult, patterns: Sequence[TilePattern]) -> bool:
    """True when every adjacent pair of collapsed cells honours both patterns' constraints."""
    by_id = {p.pattern_id: p for p in patterns}
    for y in range(result.height):
        for x in range(result.width):
            here = result.get(x, y)
            if here is None:
                return False
            for direction in (Direction.EAST, Direction.SOUTH):
                offset = DIRECTION_OFFSETS[direction]
                nx, ny = x + offset.x, y + offset.y
                if nx >= result.width or ny >= result.height:
                    continue
                there = result.get(nx, ny)
                if there is None:
                    return False
                if there not in by_id[here].allowed_neighbors(direction):
                    return False
                if here not in by_id[there].allowed_neighbors(direction.opposite):
                    return False
    return True
