# Copyright (c)
# SPDX-License-Identifier: MIT
"""Directory Cache Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated Redis connection settings for the directory cache. Only
    :func:`load_settings` / :func:`get_settings` read the process
    environment; everything else receives a :class:`CacheSettings` instance
    explicitly.

Environment:
    REDIS_ADDR                      ``host:port`` (default ``localhost:6379``).
    REDIS_PASSWORD                  Credential; empty means no AUTH.
    REDIS_DB                        Database index (default 0).
    REDIS_PING_TIMEOUT_S            Liveness check bound at connect (default 5).
    REDIS_SOCKET_TIMEOUT_S          Per-command socket timeout (default 3).
    REDIS_SOCKET_CONNECT_TIMEOUT_S  TCP connect timeout (default 3).
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slack_directory_cache.domain.exceptions.cache import CacheConfigurationError

logger = logging.getLogger(__name__)

__all__ = ["CacheSettings", "load_settings", "get_settings", "DEFAULT_REDIS_ADDR"]

DEFAULT_REDIS_ADDR = "localhost:6379"
_DEFAULT_REDIS_PORT = 6379


class CacheSettings(BaseSettings):
    """Redis connection settings for the directory cache."""

    redis_addr: str = Field(
        default=DEFAULT_REDIS_ADDR,
        description="Redis address as host:port.",
        validation_alias="REDIS_ADDR",
    )
    redis_password: SecretStr = Field(
        default=SecretStr(""),
        description="Redis password; empty disables AUTH.",
        validation_alias="REDIS_PASSWORD",
    )
    redis_db: int = Field(
        default=0,
        ge=0,
        description="Redis logical database index.",
        validation_alias="REDIS_DB",
    )
    ping_timeout_s: float = Field(
        default=5.0,
        gt=0,
        le=60.0,
        description="Upper bound in seconds for the liveness check at connect time.",
        validation_alias="REDIS_PING_TIMEOUT_S",
    )
    socket_timeout_s: float = Field(
        default=3.0,
        ge=0.1,
        le=60.0,
        description="Socket timeout in seconds for Redis commands.",
        validation_alias="REDIS_SOCKET_TIMEOUT_S",
    )
    socket_connect_timeout_s: float = Field(
        default=3.0,
        ge=0.1,
        le=60.0,
        description="Socket connect timeout in seconds for Redis.",
        validation_alias="REDIS_SOCKET_CONNECT_TIMEOUT_S",
    )

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _validate_addr(self) -> CacheSettings:
        """Reject addresses with no host or a non-integer port.

        Returns:
            CacheSettings: The validated instance.

        Raises:
            ValueError: If ``REDIS_ADDR`` is empty, its port is malformed, or an
                IPv6 host is not bracketed.
        """
        host, port = _split_addr(self.redis_addr)
        if not host:
            raise ValueError(f"REDIS_ADDR has no host: {self.redis_addr!r}")
        if port is not None and not port.isdigit():
            raise ValueError(f"REDIS_ADDR port must be numeric: {self.redis_addr!r}")
        return self

    @property
    def host(self) -> str:
        """Host part of ``REDIS_ADDR``."""
        return _split_addr(self.redis_addr)[0]

    @property
    def port(self) -> int:
        """Port part of ``REDIS_ADDR`` (6379 when omitted)."""
        port = _split_addr(self.redis_addr)[1]
        return int(port) if port else _DEFAULT_REDIS_PORT

    @property
    def password(self) -> str | None:
        """Plain password, or ``None`` when no credential is configured."""
        return self.redis_password.get_secret_value() or None


def _split_addr(addr: str) -> tuple[str, str | None]:
    """Split ``host[:port]``; IPv6 hosts must be bracketed (``[::1]:6379``).

    Raises:
        ValueError: If an IPv6 literal is unbracketed or its brackets are unbalanced.
    """
    addr = addr.strip()
    if addr.startswith("["):
        host, sep, rest = addr[1:].partition("]")
        if not sep:
            raise ValueError(f"REDIS_ADDR has an unclosed bracket: {addr!r}")
        if not rest:
            return host, None
        if not rest.startswith(":"):
            raise ValueError(f"REDIS_ADDR has unexpected text after the bracketed host: {addr!r}")
        return host, rest[1:]
    if addr.count(":") > 1:
        raise ValueError(f"REDIS_ADDR IPv6 hosts must be bracketed, e.g. [::1]:6379: {addr!r}")
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, None
    return host, port


def load_settings(**overrides: object) -> CacheSettings:
    """Build settings from the environment plus explicit overrides.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        CacheSettings: Validated settings.

    Raises:
        CacheConfigurationError: If any setting is malformed (for example a
            non-numeric ``REDIS_DB``).
    """
    try:
        settings = CacheSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(p) for p in err["loc"]) or "__root__" for err in exc.errors()}
        )
        raise CacheConfigurationError(
            f"invalid directory cache configuration: {', '.join(fields) or exc}",
            details={"fields": fields},
        ) from exc

    logger.debug(
        "Cache settings initialized",
        extra={
            "extra": {
                "redis_addr": settings.redis_addr,
                "redis_db": settings.redis_db,
                "redis_password_set": settings.password is not None,
            }
        },
    )
    return settings


@lru_cache(maxsize=1)
def get_settings() -> CacheSettings:
    """Return a cached singleton :class:`CacheSettings` read from the environment.

    Raises:
        CacheConfigurationError: If configuration is invalid.
    """
    return load_settings()
