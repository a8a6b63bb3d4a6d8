# Copyright (c)
# SPDX-License-Identifier: MIT
"""Directory cache CLI: operational commands (ping, show).

Commands:
    ping              Check that the configured Redis answers PING.
    show users        Print a scope's cached users as JSON.
    show channels     Print a scope's cached channels as JSON.

Exit codes:
    0   Success (for ``show``: the entry exists, possibly empty).
    1   Configuration, connection or storage error.
    2   Cache miss (``show`` only).

Environment:
    REDIS_ADDR        host:port (default localhost:6379)
    REDIS_PASSWORD    Credential (default none)
    REDIS_DB          Database index (default 0)
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Annotated, Any

import typer
from redis.exceptions import RedisError

from slack_directory_cache.config.settings import load_settings
from slack_directory_cache.domain.entities.cache_lookup import CacheLookup
from slack_directory_cache.domain.entities.cache_scope import CacheScope
from slack_directory_cache.domain.enums.cache_resource import CacheResource
from slack_directory_cache.domain.exceptions.cache import CacheError
from slack_directory_cache.infrastructure.caching.directory_cache import (
    RedisDirectoryCache,
    open_directory_cache,
)
from slack_directory_cache.infrastructure.caching.redis_client import (
    create_redis_client,
    ping_with_timeout,
)
from slack_directory_cache.infrastructure.logging.logger import configure_root_logging

EXIT_ERROR = 1
EXIT_MISS = 2

app = typer.Typer(add_completion=False, no_args_is_help=True)
show_app = typer.Typer(no_args_is_help=True)
app.add_typer(show_app, name="show", help="Print a cached collection for one scope.")

InstanceOpt = Annotated[
    str, typer.Option("--instance-id", help="Workspace (team) ID of the installation.")
]
UserOpt = Annotated[str, typer.Option("--user-id", help="Slack user ID owning the entry.")]
EnterpriseOpt = Annotated[
    str | None,
    typer.Option("--enterprise-id", help="Enterprise ID; replaces --instance-id when set."),
]


@app.callback()
def _main(
    log_level: Annotated[str | None, typer.Option("--log-level", help="Root log level.")] = None,
) -> None:
    """Inspect the Slack directory cache."""
    configure_root_logging(log_level)


@app.command("ping")
def ping() -> None:
    """Check that the configured Redis answers PING."""

    async def _run() -> None:
        settings = load_settings()
        client = create_redis_client(settings)
        try:
            await ping_with_timeout(client, settings.ping_timeout_s)
        finally:
            with suppress(RedisError, OSError, RuntimeError):
                await client.aclose()
        typer.echo(f"PONG {settings.redis_addr} db={settings.redis_db}")

    try:
        asyncio.run(_run())
    except CacheError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from exc
    except (TimeoutError, RedisError, OSError) as exc:
        typer.echo(f"error: redis unreachable: {exc!r}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from exc


def _show(
    scope: CacheScope,
    resource: CacheResource,
    read: Callable[[RedisDirectoryCache], Awaitable[CacheLookup[Any]]],
) -> None:
    async def _run() -> CacheLookup[Any]:
        async with open_directory_cache(scope) as cache:
            return await read(cache)

    try:
        lookup = asyncio.run(_run())
    except CacheError as exc:
        typer.echo(f"error: [{exc.code}] {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from exc

    if lookup.is_absent:
        typer.echo(f"miss: {scope.key_for(resource)}", err=True)
        raise typer.Exit(code=EXIT_MISS)

    payload = [record.model_dump(mode="json") for record in lookup.items]
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _scope(instance_id: str, user_id: str, enterprise_id: str | None) -> CacheScope:
    try:
        return CacheScope.for_workspace(instance_id, user_id, enterprise_id=enterprise_id)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@show_app.command("users")
def show_users(
    instance_id: InstanceOpt,
    user_id: UserOpt,
    enterprise_id: EnterpriseOpt = None,
) -> None:
    """Print the cached users for a scope."""
    _show(
        _scope(instance_id, user_id, enterprise_id),
        CacheResource.USERS,
        lambda cache: cache.get_users(),
    )


@show_app.command("channels")
def show_channels(
    instance_id: InstanceOpt,
    user_id: UserOpt,
    enterprise_id: EnterpriseOpt = None,
) -> None:
    """Print the cached channels for a scope."""
    _show(
        _scope(instance_id, user_id, enterprise_id),
        CacheResource.CHANNELS,
        lambda cache: cache.get_channels(),
    )


if __name__ == "__main__":  # pragma: no cover
    app()
