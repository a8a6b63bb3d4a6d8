# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base Record DTO (Application Layer).

Purpose:
    Pydantic base for directory records stored in the cache. Records are
    opaque payloads: only a handful of fields are declared and everything
    else Slack sends is carried through untouched.

Layer: application/schemas/dto
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseRecord(BaseModel):
    """Base class for cached directory records.

    Notes:
        - ``extra='allow'`` so unknown upstream fields survive a round trip.
        - Declared fields are lenient; the cache validates container shape,
          not record contents.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )
