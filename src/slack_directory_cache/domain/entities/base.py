# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base Entity (Domain Layer).

Purpose:
    Mixin for immutable domain entities: frozen dataclass semantics plus a
    ``__post_init__`` hook where subclasses enforce their invariants.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BaseEntity:
    """Base mixin for domain entities.

    Subclasses declare their own fields and override :meth:`__post_init__`
    to raise ``ValueError`` when an invariant is violated.
    """

    def __post_init__(self) -> None:  # noqa: D401
        """No-op invariant hook."""
        return
