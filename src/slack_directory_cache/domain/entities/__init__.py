"""Domain entity exports."""

from __future__ import annotations

from .cache_lookup import CacheLookup, LookupStatus
from .cache_scope import KEY_PREFIX, CacheScope, cache_key

__all__ = ["CacheLookup", "LookupStatus", "CacheScope", "KEY_PREFIX", "cache_key"]
