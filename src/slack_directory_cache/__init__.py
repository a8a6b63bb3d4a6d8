# Copyright (c)
# SPDX-License-Identifier: MIT
"""Scoped Redis cache of Slack directory users and channels.

Typical usage:
    scope = CacheScope.for_workspace(team_id, user_id, enterprise_id=enterprise_id)
    async with open_directory_cache(scope) as cache:
        lookup = await cache.get_users()
        if lookup.is_absent:
            ...  # fetch from Slack and cache.set_users(...)
"""

from __future__ import annotations

from slack_directory_cache.application.schemas.dto.directory import (
    SlackChannel,
    SlackUser,
    SlackUserProfile,
)
from slack_directory_cache.config.settings import CacheSettings, load_settings
from slack_directory_cache.domain.entities.cache_lookup import CacheLookup, LookupStatus
from slack_directory_cache.domain.entities.cache_scope import CacheScope, cache_key
from slack_directory_cache.domain.enums.cache_resource import CacheResource
from slack_directory_cache.domain.exceptions.cache import (
    CacheConfigurationError,
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    CacheStorageError,
)
from slack_directory_cache.infrastructure.caching.directory_cache import (
    ENTRY_TTL_S,
    RedisDirectoryCache,
    open_directory_cache,
)

__all__ = [
    "ENTRY_TTL_S",
    "CacheConfigurationError",
    "CacheConnectionError",
    "CacheError",
    "CacheLookup",
    "CacheResource",
    "CacheScope",
    "CacheSerializationError",
    "CacheSettings",
    "CacheStorageError",
    "LookupStatus",
    "RedisDirectoryCache",
    "SlackChannel",
    "SlackUser",
    "SlackUserProfile",
    "cache_key",
    "load_settings",
    "open_directory_cache",
]
