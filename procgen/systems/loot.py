"""Weighted loot-table rolls."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from procgen.core.enums import Domain
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LootEntry:
    item_id: str
    weight: float = 1.0
    min_quantity: int = 1
    max_quantity: int = 1
    min_level: int = 1
    max_level: int = 100
    rarity: float = 1.0

    def available_at(self, level: int) -> bool:
        return self.min_level <= level <= self.max_level


@dataclass(frozen=True, slots=True)
class LootTable:
    table_id: str
    entries: tuple[LootEntry, ...] = field(default_factory=tuple)
    min_drops: int = 1
    max_drops: int = 3
    nothing_chance: float = 0.1

    @property
    def total_weight(self) -> float:
        return sum(e.weight for e in self.entries)


@dataclass(frozen=True, slots=True)
class LootResult:
    item_id: str
    quantity: int


def generate_loot(table: LootTable, player_level: int, seed: int, luck_modifier: float = 1.0) -> list[LootResult]:
    """Roll *table* once. Duplicate drops are merged, first-seen order kept."""
    if luck_modifier <= 0:
        raise ValueError(f"luck_modifier must be positive, got {luck_modifier}")
    rng = RandomStream(seed, Domain.LOOT)

    if rng.random() < table.nothing_chance / luck_modifier:
        return []

    num_drops = rng.randint(table.min_drops, table.max_drops)
    valid = [e for e in table.entries if e.available_at(player_level)]
    if not valid:
        return []

    weights = [e.weight * e.rarity * luck_modifier for e in valid]
    merged: dict[str, int] = {}
    for _ in range(num_drops):
        entry = valid[rng.weighted_index(weights)]
        qty = rng.randint(entry.min_quantity, entry.max_quantity)
        merged[entry.item_id] = merged.get(entry.item_id, 0) + qty

    logger.debug("Loot from %s (level %d): %s", table.table_id, player_level, merged)
    return [LootResult(item_id=k, quantity=v) for k, v in merged.items()]
