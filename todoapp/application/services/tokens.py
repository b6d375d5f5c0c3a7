# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed bearer tokens (JWT, HS256)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from todoapp.domain.users.entities import TokenClaims, User
from todoapp.domain.users.exceptions import TokenMalformedError

ACCESS_TOKEN_EXPIRATION_MS = 900_000  # 15 minutes

_ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService:
    """Issues and verifies self-contained tokens.

    Nothing is persisted: a token is valid as long as its signature checks out
    against the configured secret and its ``exp`` claim lies in the future.
    Access and refresh tokens differ only in lifetime.
    """

    def __init__(
        self,
        *,
        secret: str,
        issuer: str,
        refresh_expiration_ms: int,
        access_expiration_ms: int = ACCESS_TOKEN_EXPIRATION_MS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._access_expiration_ms = access_expiration_ms
        self._refresh_expiration_ms = refresh_expiration_ms
        self._clock = clock

    @property
    def access_expiration_ms(self) -> int:
        return self._access_expiration_ms

    def issue_access_token(self, user: User) -> str:
        return self.issue_token(user, self._access_expiration_ms)

    def issue_refresh_token(self, user: User) -> str:
        return self.issue_token(user, self._refresh_expiration_ms)

    def issue_token(self, user: User, expires_in_ms: int) -> str:
        now = self._clock()
        claims: dict[str, Any] = {
            "sub": user.username,
            "iss": self._issuer,
            "iat": now,
            "exp": now + timedelta(milliseconds=expires_in_ms),
            "userId": user.id,
            "roles": sorted(user.roles),
        }
        return jwt.encode(claims, self._secret, algorithm=_ALGORITHM)

    def decode(self, token: str) -> TokenClaims:
        """Verify signature and issuer and return the claims.

        Expiry is not enforced here; see :meth:`is_expired`.
        """

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                issuer=self._issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "iss", "iat", "exp"],
                },
            )
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError() from exc

        roles = payload.get("roles") or []
        return TokenClaims(
            subject=str(payload["sub"]),
            issuer=str(payload["iss"]),
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            user_id=payload.get("userId"),
            roles=tuple(str(role) for role in roles),
        )

    def extract_subject(self, token: str) -> str:
        return self.decode(token).subject

    def is_expired(self, token: str) -> bool:
        return self.decode(token).expires_at < self._clock()

    def is_valid(self, token: str, expected_username: str) -> bool:
        # decode errors propagate to the caller
        claims = self.decode(token)
        return claims.subject == expected_username and not claims.expires_at < self._clock()


__all__ = ["ACCESS_TOKEN_EXPIRATION_MS", "JwtTokenService"]
