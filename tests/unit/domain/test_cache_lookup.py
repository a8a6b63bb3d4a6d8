# tests/unit/domain/test_cache_lookup.py
from __future__ import annotations

import pytest

from slack_directory_cache.domain.entities.cache_lookup import CacheLookup, LookupStatus


def test_absent_is_distinct_from_empty_hit() -> None:
    miss: CacheLookup[str] = CacheLookup.absent()
    empty: CacheLookup[str] = CacheLookup.found([])

    assert miss.is_absent and not miss.is_found
    assert empty.is_found and not empty.is_absent
    assert empty.items == []
    assert miss != empty


def test_items_on_absent_raises_lookup_error() -> None:
    with pytest.raises(LookupError):
        _ = CacheLookup.absent().items


def test_found_preserves_order_and_count() -> None:
    lookup = CacheLookup.found(["b", "a", "c"])
    assert lookup.status is LookupStatus.FOUND
    assert lookup.items == ["b", "a", "c"]
    assert lookup.count == 3


def test_unwrap_or_returns_default_only_on_miss() -> None:
    assert CacheLookup.absent().unwrap_or() is None
    assert CacheLookup.absent().unwrap_or(["x"]) == ["x"]
    assert CacheLookup.found([]).unwrap_or(["x"]) == []


def test_items_returns_a_copy() -> None:
    lookup = CacheLookup.found([1, 2])
    lookup.items.append(3)
    assert lookup.items == [1, 2]
