"""Configuration package.

Usage:
    from zoeylocator.config import get_settings

    settings = get_settings()
    settings.threshold
"""

from .settings import LocatorSettings, get_settings, reset_settings

__all__ = ["LocatorSettings", "get_settings", "reset_settings"]
