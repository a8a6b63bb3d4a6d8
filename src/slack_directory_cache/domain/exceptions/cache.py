# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Directory Cache Exceptions

Purpose:
    Failure kinds surfaced by the scoped directory cache. A cache miss is not
    an error and is never represented by one of these.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class CacheError(DomainError):
    """Base class for directory cache failures."""

    code = "CACHE_ERROR"


class CacheConnectionError(CacheError):
    """Store unreachable, or liveness check timed out, at construction time."""

    code = "CACHE_UNAVAILABLE"


class CacheConfigurationError(CacheError):
    """Environment-sourced store configuration is malformed."""

    code = "CACHE_MISCONFIGURED"


class CacheStorageError(CacheError):
    """A store command failed for a reason other than a missing key."""

    code = "CACHE_STORAGE_ERROR"


class CacheSerializationError(CacheError):
    """Payload could not be encoded on write or decoded on read."""

    code = "CACHE_SERIALIZATION_ERROR"
