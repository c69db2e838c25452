"""Map generator exceptions onto HTTP errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException

from procgen.api.service import GridTooLargeError


@contextmanager
def generation_errors() -> Iterator[None]:
    """413 for oversized grids, 400 for other precondition failures."""
    try:
        yield
    except GridTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
