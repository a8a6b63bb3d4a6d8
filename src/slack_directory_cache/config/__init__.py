"""
Config package export.

Keeps import sites clean and stable:
    from slack_directory_cache.config import CacheSettings, get_settings
"""

from __future__ import annotations

from .settings import CacheSettings, get_settings, load_settings

__all__ = ["CacheSettings", "get_settings", "load_settings"]
