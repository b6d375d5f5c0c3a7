# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Todo:
    """A task record. Timestamps are owned by the store and only read here."""

    id: int
    title: str
    description: str | None
    completed: bool
    created_at: datetime | None
    updated_at: datetime | None
