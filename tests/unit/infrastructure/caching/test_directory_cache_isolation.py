# tests/unit/infrastructure/caching/test_directory_cache_isolation.py
from __future__ import annotations

import asyncio

import pytest

from slack_directory_cache.application.schemas.dto.directory import SlackChannel, SlackUser
from slack_directory_cache.domain.entities.cache_scope import CacheScope
from slack_directory_cache.infrastructure.caching.directory_cache import RedisDirectoryCache


@pytest.mark.asyncio
async def test_enterprise_and_standalone_scopes_do_not_leak(fake_redis) -> None:
    grid = RedisDirectoryCache(fake_redis, CacheScope("E0160NTJ2PM", "U1234567890"))
    standalone = RedisDirectoryCache(fake_redis, CacheScope("TEAM123", "U9876543210"))

    users1 = [SlackUser(id="U1", name="user1")]
    channels1 = [SlackChannel(id="C1", name="#team1-general")]
    users2 = [SlackUser(id="U2", name="user2")]
    channels2 = [SlackChannel(id="C2", name="#team2-general")]

    await grid.set_users(users1)
    await grid.set_channels(channels1)
    await standalone.set_users(users2)
    await standalone.set_channels(channels2)

    assert (await grid.get_users()).items == users1
    assert (await grid.get_channels()).items == channels1
    assert (await standalone.get_users()).items == users2
    assert (await standalone.get_channels()).items == channels2

    assert sorted(await fake_redis.keys("slack:*")) == [
        "slack:E0160NTJ2PM/U1234567890:channels",
        "slack:E0160NTJ2PM/U1234567890:users",
        "slack:TEAM123/U9876543210:channels",
        "slack:TEAM123/U9876543210:users",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("other_instance", "other_user"),
    [("TEST123", "U999"), ("OTHER", "U123456"), ("OTHER", "U999")],
)
async def test_scopes_sharing_one_identifier_stay_isolated(
    fake_redis, other_instance: str, other_user: str
) -> None:
    mine = RedisDirectoryCache(fake_redis, CacheScope("TEST123", "U123456"))
    theirs = RedisDirectoryCache(fake_redis, CacheScope(other_instance, other_user))

    await mine.set_users([SlackUser(id="U1", name="mine")])
    assert (await theirs.get_users()).is_absent

    await theirs.set_users([SlackUser(id="U2", name="theirs")])
    assert (await mine.get_users()).items == [SlackUser(id="U1", name="mine")]
    assert (await theirs.get_users()).items == [SlackUser(id="U2", name="theirs")]


@pytest.mark.asyncio
async def test_concurrent_writes_last_write_wins(recording_redis, scope) -> None:
    cache = RedisDirectoryCache(recording_redis, scope)
    batches = [[SlackUser(id=f"U{i}", name=f"user{i}")] for i in range(5)]

    await asyncio.gather(*(cache.set_users(batch) for batch in batches))

    last_value = recording_redis.set_calls[-1][1]
    lookup = await cache.get_users()
    assert lookup.items[0].id in {b[0].id for b in batches}
    assert recording_redis.store["slack:TEST123/U123456:users"] == last_value
