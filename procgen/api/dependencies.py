"""Process-wide GeneratorService handle used by ``Depends`` in the routes.

``create_app`` installs the service; until then requests get a 503.
"""

from __future__ import annotations

from fastapi import HTTPException

from procgen.api.service import GeneratorService

_current: GeneratorService | None = None


def set_generator_service(service: GeneratorService | None) -> None:
    """Install *service* for every route (``None`` uninstalls it)."""
    global _current
    _current = service


def get_generator_service() -> GeneratorService:
    service = _current
    if service is None:
        raise HTTPException(status_code=503, detail="Generator service is not running.")
    return service
