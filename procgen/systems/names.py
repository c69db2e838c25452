"""Seeded fantasy name generation."""

from __future__ import annotations

from procgen.core.enums import Domain
from procgen.systems.rng import RandomStream

PREFIXES = (
    "Al", "Bel", "Car", "Dra", "El", "Fal", "Gor", "Hal", "Il", "Jar",
    "Kal", "Lor", "Mal", "Nor", "Or", "Pir", "Qua", "Ral", "Sar", "Tal",
    "Ul", "Val", "Wor", "Xan", "Yar", "Zar",
)
MIDDLES = (
    "an", "ar", "as", "en", "er", "es", "in", "ir", "is", "on", "or", "os",
    "un", "ur", "us", "ae", "ai", "ao", "ea", "ei", "eo", "ia", "io", "oa",
    "oi", "ua", "ue",
)
SUFFIXES = (
    "a", "ah", "ar", "as", "ax", "el", "en", "er", "ia", "iel", "ien",
    "ion", "ius", "ix", "on", "or", "os", "th", "us", "yn",
)
TOWN_PREFIXES = (
    "Black", "White", "Green", "Red", "Blue", "Gold", "Silver", "Iron", "Stone", "Wood",
    "River", "Lake", "Mountain", "Valley", "Shadow", "Sun", "Moon", "Star", "Dark", "Bright",
)
TOWN_SUFFIXES = (
    "ton", "ville", "burg", "berg", "ford", "port", "haven", "gate", "hold", "keep",
    "watch", "guard", "helm", "hollow", "vale", "dale", "wood", "field", "meadow", "shore",
)

# Give up on uniqueness after this many draws per requested name
_ATTEMPTS_PER_NAME = 50


class NameGenerator:
    """Syllable-table name generator owning its own RandomStream."""

    __slots__ = ("_rng",)

    def __init__(self, seed: int) -> None:
        self._rng = RandomStream(seed, Domain.NAMES)

    def name(self) -> str:
        """Prefix, optional middle syllable (50%), suffix."""
        rng = self._rng
        out = rng.choice(PREFIXES)
        if rng.random() > 0.5:
            out += rng.choice(MIDDLES)
        return out + rng.choice(SUFFIXES)

    def town_name(self) -> str:
        return self._rng.choice(TOWN_PREFIXES) + self._rng.choice(TOWN_SUFFIXES)

    def names(self, count: int) -> list[str]:
        """Up to *count* distinct names, in generation order."""
        seen: dict[str, None] = {}
        attempts = 0
        while len(seen) < count and attempts < count * _ATTEMPTS_PER_NAME:
            seen.setdefault(self.name())
            attempts += 1
        return list(seen)
