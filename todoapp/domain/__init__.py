# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .todos.entities import Todo
from .todos.exceptions import TodoNotFoundError
from .users.entities import NewUser, Role, TokenClaims, User

__all__ = [
    "NewUser",
    "Role",
    "Todo",
    "TodoNotFoundError",
    "TokenClaims",
    "User",
]
