# Copyright (c)
# SPDX-License-Identifier: MIT
"""Async Redis client factory for the directory cache.

Design notes:
    * Provides a small Protocol (`RedisClient`) covering the commands the
      cache uses; tests substitute fakeredis or hand-written stubs.
    * Uses redis.asyncio under the hood for the concrete implementation.
    * The client is built from explicit :class:`CacheSettings`; nothing here
      reads the environment.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

# -----------------------------------------------------------------------------
# Typed alias for the concrete Redis client.
# Some redis stubs make Redis generic (e.g., Redis[str]).
# -----------------------------------------------------------------------------
if TYPE_CHECKING:
    from typing import TypeAlias

    from redis.asyncio.client import Redis as _RedisGeneric

    AioredisRedis: TypeAlias = _RedisGeneric[bytes]
else:
    from redis.asyncio.client import Redis as AioredisRedis  # type: ignore[assignment]

from slack_directory_cache.config.settings import CacheSettings

__all__ = [
    "RedisClient",
    "create_redis_client",
    "ping_with_timeout",
]


@runtime_checkable
class RedisClient(Protocol):
    """Subset of Redis commands used by the directory cache."""

    async def get(self, key: str) -> Any: ...
    async def set(
        self,
        key: str,
        value: Any,
        *,
        ex: int | None = None,
    ) -> Any: ...
    async def ping(self) -> Any: ...
    async def aclose(self) -> Any: ...


def create_redis_client(settings: CacheSettings) -> RedisClient:
    """Build the concrete asyncio Redis client.

    Connections are opened lazily by redis-py; call
    :func:`ping_with_timeout` to verify reachability.

    Args:
        settings: Directory cache settings.

    Returns:
        RedisClient: Configured client. Replies are raw ``bytes``; payloads
            are decoded by the JSON codec so that invalid UTF-8 surfaces as a
            decode error rather than inside the command.
    """
    client: AioredisRedis = aioredis.Redis(
        host=settings.host,
        port=settings.port,
        password=settings.password,
        db=settings.redis_db,
        socket_timeout=settings.socket_timeout_s,
        socket_connect_timeout=settings.socket_connect_timeout_s,
    )
    return cast(RedisClient, client)


async def ping_with_timeout(client: RedisClient, timeout_s: float) -> None:
    """Run ``PING`` bounded by ``timeout_s``.

    Args:
        client: Redis client.
        timeout_s: Upper bound in seconds.

    Raises:
        TimeoutError: If the server did not answer in time.
        RedisError: If the server refused or the connection failed.
        OSError: On socket-level failures not wrapped by redis-py.
    """
    async with asyncio.timeout(timeout_s):
        ok = await client.ping()
    if ok is False:
        raise RedisError("PING returned a falsy reply")
