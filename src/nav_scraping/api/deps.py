from __future__ import annotations

from ..core import load_settings
from ..extractors import build_extractors
from ..services import NavService

_service: NavService | None = None


def get_nav_service() -> NavService:
    global _service
    if _service is None:
        settings = load_settings()
        _service = NavService(build_extractors(settings), max_workers=settings.scrape.max_workers)
    return _service
