# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Role:

    id: int
    name: str


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    first_name: str | None
    last_name: str | None
    enabled: bool
    created_at: datetime | None
    roles: frozenset[str] = field(default_factory=frozenset)


@dataclass(slots=True, frozen=True)
class NewUser:
    """Registration data that has not been persisted yet."""

    username: str
    email: str
    password_hash: str
    first_name: str | None
    last_name: str | None
    enabled: bool = True


@dataclass(slots=True, frozen=True)
class TokenClaims:

    subject: str
    issuer: str
    issued_at: datetime
    expires_at: datetime
    user_id: int | None
    roles: tuple[str, ...]
