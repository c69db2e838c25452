"""Domain-separated deterministic RNG using xxhash.

Every generation call owns its own random source. Nothing in the package
touches a process-wide generator, so interleaved calls never disturb each
other's sequences.

Formula: RNG_Value = Hash(Seed, Domain, Key, Counter)
"""

from __future__ import annotations

import struct
from collections.abc import Sequence
from typing import TypeVar

import xxhash

from procgen.core.enums import Direction, Domain

T = TypeVar("T")

_MASK64 = (1 << 64) - 1


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, counter); there is
    no internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = _MASK64

    def __init__(self, seed: int) -> None:
        self._seed = seed & _MASK64

    @property
    def seed(self) -> int:
        return self._seed

    def hash(self, domain: Domain, key: int, counter: int) -> int:
        payload = struct.pack("<QiQQ", self._seed, domain.value, key & _MASK64, counter & _MASK64)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self.hash(domain, key, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, counter)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, counter: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, counter) < probability


class RandomStream:
    """Sequential cursor over a DeterministicRNG domain.

    Draw *n* of a stream is ``rng.next_float(domain, key, n)``; two streams
    built from the same (seed, domain, key) replay the same values.
    """

    __slots__ = ("_rng", "_domain", "_key", "_counter")

    def __init__(self, seed: int, domain: Domain, key: int = 0) -> None:
        self._rng = DeterministicRNG(seed)
        self._domain = domain
        self._key = key
        self._counter = 0

    @property
    def draws(self) -> int:
        """Number of values consumed so far."""
        return self._counter

    def fork(self, domain: Domain, key: int = 0) -> RandomStream:
        """Independent stream sharing this stream's seed."""
        return RandomStream(self._rng.seed, domain, key)

    def random(self) -> float:
        """Float in [0.0, 1.0)."""
        value = self._rng.next_float(self._domain, self._key, self._counter)
        self._counter += 1
        return value

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high] inclusive."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return low + int(self.random() * (high - low + 1))

    def randrange(self, low: int, high: int) -> int:
        """Integer in [low, high); returns *low* when the range is empty."""
        if high <= low:
            self._counter += 1
            return low
        return low + int(self.random() * (high - low))

    def chance(self, probability: float) -> bool:
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.randrange(0, len(seq))]

    def direction(self) -> Direction:
        return Direction(self.randrange(0, 4))

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Index drawn proportionally to *weights* (non-positive weights never win).

        Falls back to a uniform pick when every weight is non-positive.
        """
        total = sum(w for w in weights if w > 0.0)
        if total <= 0.0:
            return self.randrange(0, len(weights))
        roll = self.random() * total
        cumulative = 0.0
        last = 0
        for idx, w in enumerate(weights):
            if w <= 0.0:
                continue
            cumulative += w
            last = idx
            if roll < cumulative:
                return idx
        return last
