# Copyright (c)
# SPDX-License-Identifier: MIT
"""Prometheus metrics for the directory cache (registry-aware).

Accessors return a *singleton* collector bound to the **current**
``prometheus_client.REGISTRY``:

- Safe under tests that swap the default registry.
- No duplicate-registration errors on re-import.
- Module cache resets automatically when the active registry changes.

Example:
    get_cache_operations_total().labels(
        operation="get", resource="users", outcome="hit"
    ).inc()
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final, TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram

__all__ = [
    "get_cache_operations_total",
    "get_cache_operation_duration_seconds",
    "observe_cache_operation",
]

_log = logging.getLogger(__name__)

_BUCKETS: Final[tuple[float, ...]] = (
    0.001,
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
    5.000,
)

_registry_id: int | None = None
_collectors: dict[str, Counter | Histogram] = {}
_lock = threading.RLock()


def _ensure_registry() -> None:
    """Drop cached collectors if the default registry was swapped."""
    global _registry_id
    with _lock:
        rid = id(prom.REGISTRY)
        if _registry_id != rid:
            _collectors.clear()
            _registry_id = rid


def _lookup_existing(name: str) -> Counter | Histogram | None:
    """Return a collector already registered under ``name``, if any."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, Counter | Histogram):
                return col
    return None


C = TypeVar("C", Counter, Histogram)


def _get_or_create(
    cls: type[C], name: str, help_text: str, labelnames: tuple[str, ...], **kwargs: object
) -> C:
    """Return the collector for ``name``, registering it on first use.

    Args:
        cls: ``Counter`` or ``Histogram``.
        name: Metric name (snake_case, without suffixes).
        help_text: Human-readable description.
        labelnames: Label names.
        **kwargs: Extra constructor arguments (e.g. ``buckets``).

    Returns:
        The collector bound to ``prom.REGISTRY``.
    """
    _ensure_registry()
    with _lock:
        cached = _collectors.get(name)
        if isinstance(cached, cls):
            return cached

        # Counters register under the un-suffixed name and "<name>_total".
        existing = _lookup_existing(name) or _lookup_existing(f"{name}_total")
        if isinstance(existing, cls):
            _collectors[name] = existing
            return existing

        try:
            col = cls(name, help_text, labelnames=labelnames, registry=prom.REGISTRY, **kwargs)
        except ValueError:
            existing = _lookup_existing(name) or _lookup_existing(f"{name}_total")
            if not isinstance(existing, cls):
                raise
            col = existing
        _collectors[name] = col
        return col


def get_cache_operations_total() -> Counter:
    """Counter of cache operations by operation, resource and outcome."""
    return _get_or_create(
        Counter,
        "directory_cache_operations",
        "Directory cache operations by outcome (stored, hit, miss, error).",
        ("operation", "resource", "outcome"),
    )


def get_cache_operation_duration_seconds() -> Histogram:
    """Histogram of cache operation latency in seconds."""
    return _get_or_create(
        Histogram,
        "directory_cache_operation_duration_seconds",
        "Latency of directory cache operations in seconds.",
        ("operation", "resource"),
        buckets=_BUCKETS,
    )


def observe_cache_operation(
    operation: str, resource: str, outcome: str, duration_s: float
) -> None:
    """Record one cache operation; never raises.

    Args:
        operation: ``get`` or ``set``.
        resource: ``users`` or ``channels``.
        outcome: ``stored``, ``hit``, ``miss`` or ``error``.
        duration_s: Elapsed wall time in seconds.
    """
    try:
        get_cache_operations_total().labels(
            operation=operation, resource=resource, outcome=outcome
        ).inc()
        get_cache_operation_duration_seconds().labels(
            operation=operation, resource=resource
        ).observe(duration_s)
    except Exception as exc:  # pragma: no cover
        _log.debug("cache metric recording failed", exc_info=exc)
