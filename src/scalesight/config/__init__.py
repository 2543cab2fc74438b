"""Configuration package.

Usage:
    from scalesight.config import get_settings

    settings = get_settings()
    if settings.visual_matching_enabled:
        ...
"""

from .settings import ScalesightSettings, get_settings, reset_settings

__all__ = ["ScalesightSettings", "get_settings", "reset_settings"]
