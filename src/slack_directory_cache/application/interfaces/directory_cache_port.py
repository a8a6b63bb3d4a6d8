# Copyright (c)
# SPDX-License-Identifier: MIT
"""Application Interface: Directory Cache Port.

Synopsis:
    Behavior expected by directory-sync code from a scoped cache of Slack
    users and channels. Enables swapping Redis for another store in tests or
    alternative deployments.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from slack_directory_cache.application.schemas.dto.directory import SlackChannel, SlackUser
from slack_directory_cache.domain.entities.cache_lookup import CacheLookup
from slack_directory_cache.domain.entities.cache_scope import CacheScope


class DirectoryCachePort(Protocol):
    """Scoped users/channels cache.

    Implementations are bound to one :class:`CacheScope` for their lifetime.
    Reads return :class:`CacheLookup` (found or absent); failures raise
    ``CacheError`` subclasses.
    """

    @property
    def scope(self) -> CacheScope:
        """Partition this cache reads and writes."""
        ...

    async def set_users(self, users: Sequence[SlackUser]) -> None:
        """Replace the cached users collection."""
        ...

    async def get_users(self) -> CacheLookup[SlackUser]:
        """Read the cached users collection."""
        ...

    async def set_channels(self, channels: Sequence[SlackChannel]) -> None:
        """Replace the cached channels collection."""
        ...

    async def get_channels(self) -> CacheLookup[SlackChannel]:
        """Read the cached channels collection."""
        ...

    async def close(self) -> None:
        """Release the store connection."""
        ...
