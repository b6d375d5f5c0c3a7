# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.orm import Session

from todoapp.application.services.password_hashing import WerkzeugPasswordHasher
from todoapp.application.services.tokens import JwtTokenService
from todoapp.application.use_cases.todos.create_todo import CreateTodoUseCase
from todoapp.application.use_cases.todos.delete_todo import DeleteTodoUseCase
from todoapp.application.use_cases.todos.get_todo import GetTodoUseCase
from todoapp.application.use_cases.todos.list_todos import ListTodosUseCase
from todoapp.application.use_cases.todos.toggle_todo import ToggleTodoUseCase
from todoapp.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todoapp.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from todoapp.application.use_cases.users.login_user import LoginUserUseCase
from todoapp.application.use_cases.users.logout_user import LogoutUserUseCase
from todoapp.application.use_cases.users.refresh_token import RefreshTokenUseCase
from todoapp.application.use_cases.users.register_user import RegisterUserUseCase
from todoapp.infrastructure.auth.bearer import BearerTokenAuthenticator
from todoapp.infrastructure.db import SessionLocal
from todoapp.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)
from todoapp.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyRoleRepository,
    SqlAlchemyUserRepository,
)
from todoapp.interfaces.http.controllers.auth_controller import AuthController
from todoapp.interfaces.http.controllers.todos_controller import TodosController
from todoapp.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        session_factory: Callable[[], Session] = SessionLocal,
    ) -> None:
        self._config = config or load_config()
        self._session_factory = session_factory

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def session_factory(self) -> Callable[[], Session]:
        return self._session_factory

    # Credentials and tokens

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self._config.jwt.secret,
            issuer=self._config.jwt.issuer,
            refresh_expiration_ms=self._config.jwt.refresh_expiration_ms,
        )

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self._session_factory)

    @cached_property
    def role_repository(self) -> SqlAlchemyRoleRepository:
        return SqlAlchemyRoleRepository(self._session_factory)

    @cached_property
    def todo_repository(self) -> SqlAlchemyTodoRepository:
        return SqlAlchemyTodoRepository(self._session_factory)

    @cached_property
    def bearer_authenticator(self) -> BearerTokenAuthenticator:
        return BearerTokenAuthenticator(tokens=self.token_service, users=self.user_repository)

    # Auth use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            roles=self.role_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
            default_role=self._config.auth.default_role,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase()

    @cached_property
    def refresh_token_use_case(self) -> RefreshTokenUseCase:
        return RefreshTokenUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
            refresh_use_case=self.refresh_token_use_case,
        )

    # Todo use cases

    @cached_property
    def todos_controller(self) -> TodosController:
        todos = self.todo_repository
        return TodosController(
            list_todos=ListTodosUseCase(todos=todos),
            get_todo=GetTodoUseCase(todos=todos),
            create_todo=CreateTodoUseCase(todos=todos),
            update_todo=UpdateTodoUseCase(todos=todos),
            toggle_todo=ToggleTodoUseCase(todos=todos),
            delete_todo=DeleteTodoUseCase(todos=todos),
            service_name=self._config.service_name,
            service_version=self._config.service_version,
        )


container = Container()
