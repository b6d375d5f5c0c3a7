# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.todos.entities import Todo
from todoapp.domain.todos.repositories import TodoRepository
from todoapp.shared.logging import logger


class CreateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, title: str, description: str | None = None) -> Todo:
        todo = self._todos.add(title, description)
        logger.info(f"todos.create: ok (todo_id={todo.id})")
        return todo
