# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token request authentication.

The authenticated user lives on ``flask.g`` for the duration of one request
and is handed to views explicitly as the ``identity`` keyword argument.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Flask, current_app, g, request

from todoapp.application.services.tokens import JwtTokenService
from todoapp.domain.users.entities import User
from todoapp.domain.users.exceptions import TokenExpiredError, TokenMalformedError
from todoapp.domain.users.repositories import UserRepository
from todoapp.shared.errors.base import NotAuthenticatedError
from todoapp.shared.logging import logger

_EXTENSION_KEY = "todoapp.authenticator"
_BEARER_PREFIX = "Bearer "


class BearerTokenAuthenticator:
    def __init__(self, *, tokens: JwtTokenService, users: UserRepository) -> None:
        self._tokens = tokens
        self._users = users

    def authenticate(self, token: str) -> User:
        username = self._tokens.extract_subject(token)
        user = self._users.find_by_username(username)
        if user is None or not user.enabled:
            logger.warning("auth.bearer: subject unknown or disabled")
            raise TokenMalformedError()
        if not self._tokens.is_valid(token, user.username):
            raise TokenExpiredError()
        return user


def install_authenticator(app: Flask, authenticator: BearerTokenAuthenticator) -> None:
    app.extensions[_EXTENSION_KEY] = authenticator

    @app.teardown_request
    def _drop_identity(_exc: BaseException | None) -> None:
        clear_identity()


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if header.startswith(_BEARER_PREFIX):
        return header[len(_BEARER_PREFIX):].strip()
    return ""


def set_identity(user: User) -> None:
    g.identity = user
    g.user_id = user.id


def clear_identity() -> None:
    g.pop("identity", None)
    g.pop("user_id", None)


def auth_required(f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    def inner(*a, **kw):
        token = bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise NotAuthenticatedError()

        authenticator: BearerTokenAuthenticator = current_app.extensions[_EXTENSION_KEY]
        user = authenticator.authenticate(token)
        set_identity(user)
        logger.debug(f"Auth OK: user={user.id} {request.method} {request.path}")
        kw["identity"] = user
        return f(*a, **kw)

    return inner


__all__ = [
    "BearerTokenAuthenticator",
    "auth_required",
    "bearer_token",
    "clear_identity",
    "install_authenticator",
    "set_identity",
]
