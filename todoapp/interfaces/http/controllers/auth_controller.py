# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from todoapp.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from todoapp.application.use_cases.users.login_user import LoginUserUseCase
from todoapp.application.use_cases.users.logout_user import LogoutUserUseCase
from todoapp.application.use_cases.users.refresh_token import RefreshTokenUseCase
from todoapp.application.use_cases.users.register_user import RegisterUserUseCase
from todoapp.domain.users.entities import User
from todoapp.domain.users.exceptions import InvalidCredentialsError
from todoapp.infrastructure.auth.bearer import auth_required, clear_identity, set_identity
from todoapp.interfaces.http.dto.auth import (
    AuthResponseDTO,
    LoginRequestDTO,
    RefreshRequestDTO,
    RegisterRequestDTO,
    UserProfileDTO,
)
from todoapp.interfaces.http.dto.common import MessageDTO
from todoapp.shared.errors.validation import raise_validation_error
from todoapp.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        refresh_use_case: RefreshTokenUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._current_user_use_case = current_user_use_case
        self._refresh_use_case = refresh_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._register_use_case.execute(
            dto.username, dto.email, dto.password, dto.first_name, dto.last_name
        )

        logger.info(f"auth.register: ok user_id={result.profile.id} ip={_get_client_ip()}")
        return jsonify(AuthResponseDTO.from_result(result).to_json()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        try:
            user, result = self._login_use_case.execute(dto.username_or_email, dto.password)
        except InvalidCredentialsError:
            logger.warning(f"auth.login: failed ip={ip_address}")
            raise

        set_identity(user)
        logger.info(f"auth.login: ok user_id={user.id} ip={ip_address}")
        return jsonify(AuthResponseDTO.from_result(result).to_json()), 200

    def refresh(self) -> tuple[Response, int]:
        try:
            dto = RefreshRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._refresh_use_case.execute(dto.refresh_token)
        logger.info(f"auth.refresh: ok user_id={result.profile.id}")
        return jsonify(AuthResponseDTO.from_result(result).to_json()), 200

    @auth_required
    def me(self, identity: User) -> tuple[Response, int]:
        profile = self._current_user_use_case.execute(identity)
        return jsonify(UserProfileDTO.from_profile(profile).to_json()), 200

    @auth_required
    def logout(self, identity: User) -> tuple[Response, int]:
        self._logout_use_case.execute(identity)
        clear_identity()
        return jsonify(MessageDTO(message="Logout successful").to_json()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
