"""FastAPI dependency injection."""

from __future__ import annotations

from islandfit.config import settings


def get_settings():
    return settings
