# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.todos.create_todo import CreateTodoUseCase
from .use_cases.todos.delete_todo import DeleteTodoUseCase
from .use_cases.todos.get_todo import GetTodoUseCase
from .use_cases.todos.list_todos import ListTodosUseCase
from .use_cases.todos.toggle_todo import ToggleTodoUseCase
from .use_cases.todos.update_todo import UpdateTodoUseCase
from .use_cases.users.get_current_user import GetCurrentUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.refresh_token import RefreshTokenUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.results import AuthResult, UserProfile

__all__ = [
    "AuthResult",
    "CreateTodoUseCase",
    "DeleteTodoUseCase",
    "GetCurrentUserUseCase",
    "GetTodoUseCase",
    "ListTodosUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RefreshTokenUseCase",
    "RegisterUserUseCase",
    "ToggleTodoUseCase",
    "UpdateTodoUseCase",
    "UserProfile",
]
