# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.shared.errors.base import (
    AuthenticationFailedError,
    ConfigurationError,
    ConflictError,
)


class UserAlreadyExistsError(ConflictError):
    code = "user_already_exists"


class UsernameTakenError(UserAlreadyExistsError):
    code = "username_taken"


class EmailTakenError(UserAlreadyExistsError):
    code = "email_taken"


class InvalidCredentialsError(AuthenticationFailedError):
    code = "invalid_credentials"


class TokenMalformedError(AuthenticationFailedError):
    code = "invalid_token"


class TokenExpiredError(AuthenticationFailedError):
    code = "token_expired"


class DefaultRoleMissingError(ConfigurationError):
    code = "default_role_missing"

    def __init__(self, role_name: str) -> None:
        super().__init__(context={"role": role_name})
        self.role_name = role_name
