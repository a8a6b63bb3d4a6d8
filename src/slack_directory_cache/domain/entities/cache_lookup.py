# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Cache Lookup Result

Purpose:
    Tagged result of a cache read. Distinguishes a miss (``absent``) from a
    hit that holds an empty collection. Failures are raised as
    :class:`~slack_directory_cache.domain.exceptions.cache.CacheError`
    subclasses and never produce a lookup.

Layer: domain/entities
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

__all__ = ["CacheLookup", "LookupStatus"]


class LookupStatus(str, Enum):
    """Outcome of a read that did not fail."""

    FOUND = "found"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class CacheLookup(Generic[T]):
    """Result of reading one collection from the cache.

    Use :meth:`found` and :meth:`absent` to build instances.

    Args:
        status: Whether the key existed.
        _items: Decoded records; empty tuple when absent.
    """

    status: LookupStatus
    _items: tuple[T, ...] = field(default=())

    @classmethod
    def found(cls, items: Sequence[T]) -> CacheLookup[T]:
        """Build a hit carrying ``items`` (may be empty)."""
        return cls(status=LookupStatus.FOUND, _items=tuple(items))

    @classmethod
    def absent(cls) -> CacheLookup[T]:
        """Build a miss."""
        return cls(status=LookupStatus.ABSENT)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def is_absent(self) -> bool:
        return self.status is LookupStatus.ABSENT

    @property
    def items(self) -> list[T]:
        """Decoded records of a hit.

        Raises:
            LookupError: If the lookup was a miss.
        """
        if self.is_absent:
            raise LookupError("cache lookup is absent; no items to read")
        return list(self._items)

    @property
    def count(self) -> int:
        """Number of records in a hit; 0 for a miss."""
        return len(self._items)

    def unwrap_or(self, default: list[T] | None = None) -> list[T] | None:
        """Return the items of a hit, else ``default``."""
        if self.is_absent:
            return default
        return list(self._items)
