# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.application.services.tokens import JwtTokenService
from todoapp.domain.users.exceptions import TokenExpiredError, TokenMalformedError
from todoapp.domain.users.repositories import UserRepository

from .results import AuthResult, issue_auth_result


class RefreshTokenUseCase:
    """Exchange a still-valid token for a fresh access/refresh pair.

    Refresh and access tokens are verified by the same rules, so an access
    token is accepted here as well.
    """

    def __init__(self, *, users: UserRepository, tokens: JwtTokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, refresh_token: str) -> AuthResult:
        subject = self._tokens.extract_subject(refresh_token)
        user = self._users.find_by_username(subject)
        if user is None or not user.enabled:
            raise TokenMalformedError()
        if not self._tokens.is_valid(refresh_token, user.username):
            raise TokenExpiredError()
        return issue_auth_result(user, self._tokens)
