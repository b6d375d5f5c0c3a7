# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.todos.entities import Todo
from todoapp.domain.todos.exceptions import TodoNotFoundError
from todoapp.domain.todos.repositories import TodoRepository
from todoapp.shared.logging import logger


class UpdateTodoUseCase:
    """Replace title and description; the completed flag is left alone."""

    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, todo_id: int, title: str, description: str | None = None) -> Todo:
        todo = self._todos.update(todo_id, title, description)
        if todo is None:
            logger.info(f"todos.update: not_found (todo_id={todo_id})")
            raise TodoNotFoundError(todo_id)
        logger.info(f"todos.update: ok (todo_id={todo_id})")
        return todo
