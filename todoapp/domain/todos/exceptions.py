# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.shared.errors.base import NotFoundError


class TodoNotFoundError(NotFoundError):
    code = "todo_not_found"

    def __init__(self, todo_id: int) -> None:
        super().__init__("Todo", todo_id)
