# Copyright (c)
# SPDX-License-Identifier: MIT
"""Scoped Directory Cache (Redis-backed).

Synopsis:
    Adapter implementing :class:`DirectoryCachePort` on top of an async Redis
    client. One instance is bound to one :class:`CacheScope` (instance + user)
    and stores that scope's Slack users and channels as JSON arrays.

Design:
    * Key policy: ``slack:{instance_id}/{user_id}:{users|channels}``.
    * Pure JSON (utf-8) serialization through pydantic ``TypeAdapter``s. The
      client does not decode replies; invalid UTF-8 is a decode failure.
    * Every write carries a fixed 6 hour expiry; each write fully replaces
      the previous collection.
    * Reads return :class:`CacheLookup`: ``absent`` when the key does not
      exist, ``found`` (possibly empty) when it decodes. Store failures raise
      :class:`CacheStorageError`; undecodable payloads raise
      :class:`CacheSerializationError`. Neither is ever reported as a miss.
    * No retries, no locking. ``asyncio.CancelledError`` is never caught, so
      a caller's ``asyncio.timeout()`` aborts the in-flight command.

Layer:
    infrastructure/caching

See Also:
    - slack_directory_cache.infrastructure.caching.redis_client
    - slack_directory_cache.application.interfaces.directory_cache_port
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager, suppress
from types import TracebackType
from typing import Any, Final, TypeVar

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from slack_directory_cache.application.interfaces.directory_cache_port import DirectoryCachePort
from slack_directory_cache.application.schemas.dto.directory import (
    CHANNELS_ADAPTER,
    USERS_ADAPTER,
    SlackChannel,
    SlackUser,
)
from slack_directory_cache.config.settings import CacheSettings, load_settings
from slack_directory_cache.domain.entities.cache_lookup import CacheLookup
from slack_directory_cache.domain.entities.cache_scope import CacheScope
from slack_directory_cache.domain.enums.cache_resource import CacheResource
from slack_directory_cache.domain.exceptions.cache import (
    CacheConnectionError,
    CacheSerializationError,
    CacheStorageError,
)
from slack_directory_cache.infrastructure.caching.redis_client import (
    RedisClient,
    create_redis_client,
    ping_with_timeout,
)
from slack_directory_cache.infrastructure.logging.logger import get_json_logger
from slack_directory_cache.infrastructure.observability.metrics import observe_cache_operation

__all__ = ["ENTRY_TTL_S", "RedisDirectoryCache", "open_directory_cache"]

#: Expiry applied to every cache write (6 hours).
ENTRY_TTL_S: Final[int] = 6 * 60 * 60

_DEFAULT_PING_TIMEOUT_S: Final[float] = CacheSettings.model_fields["ping_timeout_s"].default

R = TypeVar("R", SlackUser, SlackChannel)


class RedisDirectoryCache(DirectoryCachePort):
    """Redis-backed users/channels cache bound to a single scope."""

    def __init__(
        self,
        client: RedisClient,
        scope: CacheScope,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        """Bind an existing client to ``scope`` without a liveness check.

        Prefer :meth:`connect`, which verifies the store is reachable.

        Args:
            client: Async Redis client (or compatible stub).
            scope: Partition this cache reads and writes.
            logger: Logger for observability records.
        """
        self._client = client
        self._scope = scope
        self._log = logger or get_json_logger(__name__)
        self._closed = False

    @classmethod
    async def connect(
        cls,
        scope: CacheScope,
        *,
        settings: CacheSettings | None = None,
        logger: logging.Logger | None = None,
        client: RedisClient | None = None,
    ) -> RedisDirectoryCache:
        """Connect to Redis, verify liveness and bind to ``scope``.

        Args:
            scope: Partition this cache reads and writes.
            settings: Connection settings; read from the environment when
                omitted and no ``client`` is given.
            logger: Logger for observability records.
            client: Pre-built client to use instead of creating one.

        Returns:
            RedisDirectoryCache: Ready-to-use cache.

        Raises:
            CacheConfigurationError: If environment settings are malformed.
            CacheConnectionError: If ``PING`` fails or does not answer within
                ``settings.ping_timeout_s``.
        """
        log = logger or get_json_logger(__name__)
        owns_client = client is None
        if client is None:
            settings = settings or load_settings()
            client = create_redis_client(settings)

        timeout_s = settings.ping_timeout_s if settings is not None else _DEFAULT_PING_TIMEOUT_S
        target = (
            {"redis_addr": settings.redis_addr, "redis_db": settings.redis_db}
            if settings is not None
            else {}
        )

        try:
            await ping_with_timeout(client, timeout_s)
        except (TimeoutError, RedisError, OSError) as exc:
            if owns_client:
                with suppress(RedisError, OSError, RuntimeError):
                    await client.aclose()
            log.error(
                "directory_cache.connect_failed",
                exc_info=exc,
                extra={"extra": {**target, "timeout_s": timeout_s}},
            )
            raise CacheConnectionError(
                f"failed to connect to Redis: {exc!r}",
                details={**target, "timeout_s": timeout_s, "error": str(exc)},
            ) from exc

        log.info("directory_cache.connected", extra={"extra": target})
        return cls(client, scope, logger=log)

    # ------------------------------------------------------------------ #
    # Scope / keys
    # ------------------------------------------------------------------ #
    @property
    def scope(self) -> CacheScope:
        """Partition this cache reads and writes."""
        return self._scope

    @property
    def closed(self) -> bool:
        """True once :meth:`close` has been called."""
        return self._closed

    def key_for(self, resource: CacheResource) -> str:
        """Return the store key for ``resource`` in this cache's scope."""
        return self._scope.key_for(resource)

    # ------------------------------------------------------------------ #
    # DirectoryCachePort implementation
    # ------------------------------------------------------------------ #
    async def set_users(self, users: Sequence[SlackUser]) -> None:
        """Replace the cached users collection.

        Raises:
            CacheSerializationError: If ``users`` cannot be encoded.
            CacheStorageError: If the write fails.
        """
        await self._store(CacheResource.USERS, USERS_ADAPTER, users)

    async def get_users(self) -> CacheLookup[SlackUser]:
        """Read the cached users collection.

        Returns:
            CacheLookup[SlackUser]: ``absent`` on a miss, else ``found``.

        Raises:
            CacheSerializationError: If the stored payload does not decode.
            CacheStorageError: If the read fails.
        """
        return await self._load(CacheResource.USERS, USERS_ADAPTER)

    async def set_channels(self, channels: Sequence[SlackChannel]) -> None:
        """Replace the cached channels collection (see :meth:`set_users`)."""
        await self._store(CacheResource.CHANNELS, CHANNELS_ADAPTER, channels)

    async def get_channels(self) -> CacheLookup[SlackChannel]:
        """Read the cached channels collection (see :meth:`get_users`)."""
        return await self._load(CacheResource.CHANNELS, CHANNELS_ADAPTER)

    async def close(self) -> None:
        """Release the store connection. Repeated calls are no-ops.

        Raises:
            CacheStorageError: If the client fails to close.
        """
        if self._closed:
            return
        self._closed = True
        try:
            await self._client.aclose()
        except (RedisError, OSError) as exc:
            raise CacheStorageError(
                f"failed to close Redis client: {exc!r}",
                details={**self._scope_details(), "error": str(exc)},
            ) from exc

    async def __aenter__(self) -> RedisDirectoryCache:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _scope_details(self) -> dict[str, Any]:
        return {"instance_id": self._scope.instance_id, "user_id": self._scope.user_id}

    def _details(self, resource: CacheResource, key: str, exc: BaseException) -> dict[str, Any]:
        return {
            **self._scope_details(),
            "resource": resource.value,
            "key": key,
            "error": str(exc),
        }

    def _ensure_open(self, resource: CacheResource, key: str) -> None:
        if self._closed:
            raise CacheStorageError(
                "directory cache is closed",
                details={**self._scope_details(), "resource": resource.value, "key": key},
            )

    async def _store(
        self,
        resource: CacheResource,
        adapter: TypeAdapter[list[R]],
        items: Sequence[R],
    ) -> None:
        key = self.key_for(resource)
        self._ensure_open(resource, key)
        start = time.perf_counter()
        outcome = "error"
        try:
            try:
                records = adapter.validate_python(list(items))
                payload = adapter.dump_json(records)
            except (ValueError, TypeError) as exc:
                # pydantic ValidationError and PydanticSerializationError are ValueErrors.
                self._log.warning(
                    "directory_cache.encode_failed",
                    extra={"extra": self._details(resource, key, exc)},
                )
                raise CacheSerializationError(
                    f"failed to encode {resource.value}: {exc}",
                    details=self._details(resource, key, exc),
                ) from exc

            try:
                await self._client.set(key, payload, ex=ENTRY_TTL_S)
            except (RedisError, OSError) as exc:
                self._log.warning(
                    "directory_cache.write_failed",
                    extra={"extra": self._details(resource, key, exc)},
                )
                raise CacheStorageError(
                    f"failed to set {resource.value} in Redis: {exc!r}",
                    details=self._details(resource, key, exc),
                ) from exc
            outcome = "stored"
        finally:
            observe_cache_operation("set", resource.value, outcome, time.perf_counter() - start)

        self._log.info(
            "directory_cache.stored",
            extra={
                "extra": {
                    **self._scope_details(),
                    "resource": resource.value,
                    "count": len(records),
                    "ttl_s": ENTRY_TTL_S,
                }
            },
        )

    async def _load(
        self,
        resource: CacheResource,
        adapter: TypeAdapter[list[R]],
    ) -> CacheLookup[R]:
        key = self.key_for(resource)
        self._ensure_open(resource, key)
        start = time.perf_counter()
        outcome = "error"
        try:
            try:
                raw = await self._client.get(key)
            except (RedisError, OSError) as exc:
                self._log.warning(
                    "directory_cache.read_failed",
                    extra={"extra": self._details(resource, key, exc)},
                )
                raise CacheStorageError(
                    f"failed to get {resource.value} from Redis: {exc!r}",
                    details=self._details(resource, key, exc),
                ) from exc

            if raw is None:
                outcome = "miss"
                self._log.debug(
                    "directory_cache.miss",
                    extra={"extra": {**self._scope_details(), "resource": resource.value}},
                )
                return CacheLookup.absent()

            try:
                records = adapter.validate_json(raw)
            except ValidationError as exc:
                self._log.warning(
                    "directory_cache.decode_failed",
                    extra={"extra": self._details(resource, key, exc)},
                )
                raise CacheSerializationError(
                    f"failed to decode {resource.value}: stored payload is not a "
                    f"valid {resource.value} array",
                    details=self._details(resource, key, exc),
                ) from exc
            outcome = "hit"
        finally:
            observe_cache_operation("get", resource.value, outcome, time.perf_counter() - start)

        self._log.info(
            "directory_cache.loaded",
            extra={
                "extra": {
                    **self._scope_details(),
                    "resource": resource.value,
                    "count": len(records),
                }
            },
        )
        return CacheLookup.found(records)


@asynccontextmanager
async def open_directory_cache(
    scope: CacheScope,
    *,
    settings: CacheSettings | None = None,
    logger: logging.Logger | None = None,
) -> AsyncIterator[RedisDirectoryCache]:
    """Connect a :class:`RedisDirectoryCache` and close it on exit.

    Args:
        scope: Partition to bind.
        settings: Connection settings; read from the environment when omitted.
        logger: Logger for observability records.

    Yields:
        RedisDirectoryCache: Connected cache.
    """
    cache = await RedisDirectoryCache.connect(scope, settings=settings, logger=logger)
    try:
        yield cache
    finally:
        await cache.close()
