# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.application.services.tokens import JwtTokenService
from todoapp.domain.users.entities import NewUser
from todoapp.domain.users.exceptions import (
    DefaultRoleMissingError,
    EmailTakenError,
    UsernameTakenError,
)
from todoapp.domain.users.repositories import PasswordHasher, RoleRepository, UserRepository
from todoapp.shared.logging import logger

from .results import AuthResult, issue_auth_result


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        roles: RoleRepository,
        tokens: JwtTokenService,
        password_hasher: PasswordHasher,
        default_role: str,
    ) -> None:
        self._users = users
        self._roles = roles
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._default_role = default_role

    def execute(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResult:
        if self._users.exists_by_username(username):
            raise UsernameTakenError()
        if self._users.exists_by_email(email):
            raise EmailTakenError()

        role = self._roles.find_by_name(self._default_role)
        if role is None:
            logger.error(f"auth.register: default role missing (role={self._default_role})")
            raise DefaultRoleMissingError(self._default_role)

        new_user = NewUser(
            username=username,
            email=email,
            password_hash=self._password_hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            enabled=True,
        )
        persisted = self._users.add(new_user, [role])
        return issue_auth_result(persisted, self._tokens)
