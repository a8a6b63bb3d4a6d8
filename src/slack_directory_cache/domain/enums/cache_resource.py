# Copyright (c)
# SPDX-License-Identifier: MIT
"""Resource kinds stored by the directory cache."""

from __future__ import annotations

from enum import Enum


class CacheResource(str, Enum):
    """Collection kinds; the value is the literal key suffix."""

    USERS = "users"
    CHANNELS = "channels"
