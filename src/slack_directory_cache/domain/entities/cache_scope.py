# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Cache Scope Entity

Purpose:
    Identifies one cache partition: a Slack instance (workspace, or the
    enterprise organization for Enterprise Grid installs) and the user within
    it. Owns the key derivation for every stored entry.

Key policy:
    ``slack:{instance_id}/{user_id}:{resource}``

    Identifiers may not contain the separators (``/`` and ``:``) or
    whitespace, which keeps the mapping from (instance, user, resource) to
    key injective.

Layer: domain/entities
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from slack_directory_cache.domain.entities.base import BaseEntity
from slack_directory_cache.domain.enums.cache_resource import CacheResource

__all__ = ["KEY_PREFIX", "CacheScope", "cache_key"]

KEY_PREFIX: Final[str] = "slack"

_FORBIDDEN = re.compile(r"[/:\s]")


def _check_identifier(field: str, value: str) -> None:
    if not value:
        raise ValueError(f"{field} must be non-empty")
    if _FORBIDDEN.search(value):
        raise ValueError(f"{field} must not contain '/', ':' or whitespace: {value!r}")


@dataclass(frozen=True, slots=True)
class CacheScope(BaseEntity):
    """Cache partition bound to one instance and one user.

    Args:
        instance_id: Workspace (team) ID, or enterprise ID for grid installs.
        user_id: Slack user ID of the requesting user.

    Raises:
        ValueError: If either identifier is empty or contains a key separator.
    """

    instance_id: str
    user_id: str

    def __post_init__(self) -> None:
        _check_identifier("instance_id", self.instance_id)
        _check_identifier("user_id", self.user_id)

    @classmethod
    def for_workspace(
        cls,
        team_id: str,
        user_id: str,
        *,
        enterprise_id: str | None = None,
    ) -> CacheScope:
        """Build a scope from an installation's identifiers.

        Workspaces that belong to an Enterprise Grid organization share one
        partition keyed by the enterprise ID; standalone workspaces use their
        team ID.

        Args:
            team_id: Workspace (team) ID.
            user_id: Slack user ID.
            enterprise_id: Enterprise ID when the workspace is grid-managed.

        Returns:
            CacheScope: Scope with the resolved instance identifier.
        """
        instance_id = enterprise_id or team_id
        return cls(instance_id=instance_id, user_id=user_id)

    @property
    def namespace(self) -> str:
        """Key prefix shared by every resource in this scope."""
        return f"{KEY_PREFIX}:{self.instance_id}/{self.user_id}"

    def key_for(self, resource: CacheResource | str) -> str:
        """Return the store key for ``resource`` in this scope.

        Args:
            resource: Resource kind (``users`` or ``channels``).

        Returns:
            str: Fully-qualified key.

        Raises:
            ValueError: If ``resource`` is not a known resource kind.
        """
        kind = CacheResource(resource)
        return f"{self.namespace}:{kind.value}"


def cache_key(scope: CacheScope, resource: CacheResource | str) -> str:
    """Functional alias for :meth:`CacheScope.key_for`."""
    return scope.key_for(resource)
