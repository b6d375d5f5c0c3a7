# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.todos.exceptions import TodoNotFoundError
from todoapp.domain.todos.repositories import TodoRepository
from todoapp.shared.logging import logger


class DeleteTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, todo_id: int) -> None:
        if not self._todos.delete(todo_id):
            logger.info(f"todos.delete: not_found (todo_id={todo_id})")
            raise TodoNotFoundError(todo_id)
        logger.info(f"todos.delete: ok (todo_id={todo_id})")
