# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.application.services.tokens import JwtTokenService
from todoapp.domain.users.entities import User
from todoapp.domain.users.exceptions import InvalidCredentialsError
from todoapp.domain.users.repositories import PasswordHasher, UserRepository

from .results import AuthResult, issue_auth_result


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: JwtTokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def authenticate(self, username_or_email: str, password: str) -> User:
        user = self._users.find_by_username_or_email(username_or_email)
        # unknown user, disabled user and wrong password are reported identically
        if user is None or not user.enabled:
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    def execute(self, username_or_email: str, password: str) -> tuple[User, AuthResult]:
        user = self.authenticate(username_or_email, password)
        return user, issue_auth_result(user, self._tokens)
