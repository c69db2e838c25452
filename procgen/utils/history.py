"""Thread-safe bounded log of generation requests served by the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GenerationRecord:
    """One served generation request."""

    sequence: int
    kind: str
    seed: int
    width: int
    height: int
    elapsed_ms: float
    ok: bool = True
    detail: str = ""


class GenerationLog:
    """Ring buffer of the most recent generation records.

    FastAPI runs sync endpoints on a thread pool, so writes are
    lock-guarded; reads return copies.
    """

    __slots__ = ("_buffer", "_lock", "_sequence")

    def __init__(self, maxlen: int = 200) -> None:
        self._buffer: deque[GenerationRecord] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._sequence = 0

    def record(self, kind: str, seed: int, width: int, height: int, elapsed_ms: float,
               ok: bool = True, detail: str = "") -> GenerationRecord:
        with self._lock:
            self._sequence += 1
            entry = GenerationRecord(self._sequence, kind, seed, width, height, elapsed_ms, ok, detail)
            self._buffer.append(entry)
        return entry

    def latest(self, count: int = 50) -> list[GenerationRecord]:
        """Return the *count* most recent records, oldest first."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
