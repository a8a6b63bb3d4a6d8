# tests/unit/config/test_cache_settings.py
from __future__ import annotations

import pytest

from slack_directory_cache.config.settings import CacheSettings, get_settings, load_settings
from slack_directory_cache.domain.exceptions.cache import CacheConfigurationError


def test_defaults_when_unset_are_sane() -> None:
    s = load_settings()
    assert s.redis_addr == "localhost:6379"
    assert (s.host, s.port) == ("localhost", 6379)
    assert s.password is None
    assert s.redis_db == 0
    assert s.ping_timeout_s == 5.0


def test_env_values_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_ADDR", "cache.internal:6380")
    monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
    monkeypatch.setenv("REDIS_DB", "4")

    s = load_settings()
    assert (s.host, s.port) == ("cache.internal", 6380)
    assert s.password == "s3cret"
    assert s.redis_db == 4
    assert "s3cret" not in repr(s)


def test_empty_env_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_ADDR", "")
    monkeypatch.setenv("REDIS_DB", "")
    s = load_settings()
    assert s.redis_addr == "localhost:6379"
    assert s.redis_db == 0


def test_addr_without_port_uses_default_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_ADDR", "redis-primary")
    s = load_settings()
    assert (s.host, s.port) == ("redis-primary", 6379)


def test_non_numeric_db_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_DB", "one")
    with pytest.raises(CacheConfigurationError) as ei:
        load_settings()
    assert ei.value.code == "CACHE_MISCONFIGURED"
    assert ei.value.details["fields"]


def test_non_numeric_port_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_ADDR", "localhost:redis")
    with pytest.raises(CacheConfigurationError):
        load_settings()


def test_overrides_take_precedence_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_DB", "3")
    s = load_settings(redis_db=7, ping_timeout_s=0.5)
    assert s.redis_db == 7
    assert s.ping_timeout_s == 0.5


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("REDIS_DB", "9")
    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings().redis_db == 9


def test_settings_can_be_built_explicitly() -> None:
    s = CacheSettings(redis_addr="10.0.0.5:7000", redis_db=2)
    assert (s.host, s.port, s.redis_db) == ("10.0.0.5", 7000, 2)


@pytest.mark.parametrize(
    ("addr", "expected"),
    [("[::1]:6380", ("::1", 6380)), ("[fd00::5]", ("fd00::5", 6379))],
)
def test_bracketed_ipv6_addr_is_unwrapped(addr: str, expected: tuple[str, int]) -> None:
    s = CacheSettings(redis_addr=addr)
    assert (s.host, s.port) == expected


@pytest.mark.parametrize("addr", ["::1", "fd00::5:6379", "[::1", "[::1]6379", "[]:6379"])
def test_ambiguous_or_malformed_ipv6_addr_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch, addr: str
) -> None:
    monkeypatch.setenv("REDIS_ADDR", addr)
    with pytest.raises(CacheConfigurationError):
        load_settings()
