# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.todos.entities import Todo
from todoapp.domain.todos.exceptions import TodoNotFoundError
from todoapp.domain.todos.repositories import TodoRepository
from todoapp.shared.logging import logger


class ToggleTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, todo_id: int) -> Todo:
        todo = self._todos.toggle(todo_id)
        if todo is None:
            logger.info(f"todos.toggle: not_found (todo_id={todo_id})")
            raise TodoNotFoundError(todo_id)
        logger.info(f"todos.toggle: ok (todo_id={todo_id}, completed={int(todo.completed)})")
        return todo
