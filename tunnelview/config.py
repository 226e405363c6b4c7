"""
TunnelView configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # View
    VISIBLE_ENTRIES: int = int(os.environ.get("TUNNELVIEW_VISIBLE_ENTRIES", "4"))

    # Logging
    LOG_LEVEL: str = os.environ.get("TUNNELVIEW_LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.environ.get("TUNNELVIEW_LOG_FILE", "")


# Singleton instance
settings = Settings()

if settings.VISIBLE_ENTRIES < 0:
    raise RuntimeError("TUNNELVIEW_VISIBLE_ENTRIES must not be negative")
