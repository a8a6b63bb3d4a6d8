"""Application DTO exports."""

from __future__ import annotations

from .directory import CHANNELS_ADAPTER, USERS_ADAPTER, SlackChannel, SlackUser, SlackUserProfile

__all__ = ["SlackUser", "SlackUserProfile", "SlackChannel", "USERS_ADAPTER", "CHANNELS_ADAPTER"]
