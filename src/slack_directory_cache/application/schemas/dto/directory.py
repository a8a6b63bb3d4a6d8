# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Directory Record DTOs

Purpose:
    Shapes of the two cached collections (users and channels) plus the JSON
    codecs used to move them in and out of the store.

Wire format:
    JSON array of objects using Slack's field names (``id``, ``name``,
    ``profile.real_name``, ``member_count``, ``is_im`` ...).

Layer: application/schemas/dto
"""

from __future__ import annotations

from pydantic import Field, TypeAdapter

from .base import BaseRecord

__all__ = [
    "SlackUserProfile",
    "SlackUser",
    "SlackChannel",
    "USERS_ADAPTER",
    "CHANNELS_ADAPTER",
]


class SlackUserProfile(BaseRecord):
    """Nested profile block of a Slack user."""

    real_name: str = ""
    display_name: str = ""


class SlackUser(BaseRecord):
    """Directory user record.

    Attributes:
        id: Slack user ID (e.g. ``U123``).
        name: Username handle.
        profile: Profile block carrying at least ``real_name``.
    """

    id: str
    name: str = ""
    profile: SlackUserProfile = Field(default_factory=SlackUserProfile)


class SlackChannel(BaseRecord):
    """Directory channel record.

    Attributes:
        id: Slack conversation ID (e.g. ``C123``).
        name: Channel name.
        topic: Channel topic text.
        purpose: Channel purpose text.
        member_count: Number of members.
        is_im: Direct message conversation.
        is_mpim: Multi-party direct message conversation.
        is_private: Private channel.
    """

    id: str
    name: str = ""
    topic: str = ""
    purpose: str = ""
    member_count: int = 0
    is_im: bool = False
    is_mpim: bool = False
    is_private: bool = False


#: Codec for the ``users`` collection.
USERS_ADAPTER: TypeAdapter[list[SlackUser]] = TypeAdapter(list[SlackUser])

#: Codec for the ``channels`` collection.
CHANNELS_ADAPTER: TypeAdapter[list[SlackChannel]] = TypeAdapter(list[SlackChannel])
