# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from todoapp.application.services.tokens import JwtTokenService
from todoapp.domain.users.entities import User

TOKEN_TYPE = "Bearer"


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Public projection of a user; never carries the password hash."""

    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    enabled: bool
    roles: frozenset[str]
    created_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            enabled=user.enabled,
            roles=frozenset(user.roles),
            created_at=user.created_at,
        )


@dataclass(slots=True, frozen=True)
class AuthResult:

    access_token: str
    refresh_token: str
    token_type: str
    expires_in_millis: int
    profile: UserProfile


def issue_auth_result(user: User, tokens: JwtTokenService) -> AuthResult:
    return AuthResult(
        access_token=tokens.issue_access_token(user),
        refresh_token=tokens.issue_refresh_token(user),
        token_type=TOKEN_TYPE,
        expires_in_millis=tokens.access_expiration_ms,
        profile=UserProfile.from_user(user),
    )
