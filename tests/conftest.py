# tests/conftest.py
from __future__ import annotations

from typing import Any

import fakeredis
import fakeredis.aioredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from slack_directory_cache.application.schemas.dto.directory import (
    SlackChannel,
    SlackUser,
    SlackUserProfile,
)
from slack_directory_cache.config.settings import get_settings
from slack_directory_cache.domain.entities.cache_scope import CacheScope
from slack_directory_cache.infrastructure.caching.directory_cache import RedisDirectoryCache


class RecordingRedis:
    """In-memory RedisClient that records every SET call."""

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.set_calls: list[tuple[str, Any, int | None]] = []
        self.get_calls: list[str] = []
        self.close_calls = 0

    async def get(self, key: str) -> Any:
        self.get_calls.append(key)
        return self.store.get(key)

    async def set(self, key: str, value: Any, *, ex: int | None = None) -> Any:
        self.set_calls.append((key, value, ex))
        self.store[key] = value
        return True

    async def ping(self) -> Any:
        return True

    async def aclose(self) -> None:
        self.close_calls += 1


class FailingRedis(RecordingRedis):
    """RedisClient whose commands fail as if the server went away."""

    async def get(self, key: str) -> Any:
        raise RedisConnectionError("Connection refused")

    async def set(self, key: str, value: Any, *, ex: int | None = None) -> Any:
        raise RedisConnectionError("Connection refused")

    async def ping(self) -> Any:
        raise RedisConnectionError("Connection refused")

    async def aclose(self) -> None:
        self.close_calls += 1
        raise RedisConnectionError("already closed")


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep REDIS_* from the developer's shell out of the tests."""
    for var in (
        "REDIS_ADDR",
        "REDIS_PASSWORD",
        "REDIS_DB",
        "REDIS_PING_TIMEOUT_S",
        "REDIS_SOCKET_TIMEOUT_S",
        "REDIS_SOCKET_CONNECT_TIMEOUT_S",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_redis() -> fakeredis.aioredis.FakeRedis:
    """Fresh fakeredis client backed by its own server, returning bytes like production."""
    return fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture
def recording_redis() -> RecordingRedis:
    return RecordingRedis()


@pytest.fixture
def failing_redis() -> FailingRedis:
    return FailingRedis()


@pytest.fixture
def scope() -> CacheScope:
    return CacheScope(instance_id="TEST123", user_id="U123456")


@pytest.fixture
def cache(fake_redis: fakeredis.aioredis.FakeRedis, scope: CacheScope) -> RedisDirectoryCache:
    return RedisDirectoryCache(fake_redis, scope)


@pytest.fixture
def users() -> list[SlackUser]:
    return [
        SlackUser(id="U123", name="testuser1", profile=SlackUserProfile(real_name="Test User 1")),
        SlackUser(id="U456", name="testuser2", profile=SlackUserProfile(real_name="Test User 2")),
    ]


@pytest.fixture
def channels() -> list[SlackChannel]:
    return [
        SlackChannel(
            id="C123",
            name="#general",
            topic="General discussion",
            purpose="Company-wide announcements",
            member_count=100,
        ),
        SlackChannel(
            id="C456",
            name="#random",
            topic="Random chat",
            purpose="Non-work related discussions",
            member_count=50,
        ),
    ]
