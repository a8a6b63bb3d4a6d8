"""Domain exception exports."""

from __future__ import annotations

from .base import DomainError
from .cache import (
    CacheConfigurationError,
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    CacheStorageError,
)

__all__ = [
    "DomainError",
    "CacheError",
    "CacheConnectionError",
    "CacheConfigurationError",
    "CacheStorageError",
    "CacheSerializationError",
]
