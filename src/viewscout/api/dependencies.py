"""FastAPI dependency injection for the shared analysis services."""

from __future__ import annotations

from functools import lru_cache

from viewscout.config import settings
from viewscout.pipeline.services import AnalysisServices, build_services


@lru_cache(maxsize=1)
def get_services() -> AnalysisServices:
    """Return the singleton service container built from the global settings."""
    return build_services(settings)
