# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todoapp.domain.todos.entities import Todo
from todoapp.domain.todos.repositories import TodoRepository


class ListTodosUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self) -> list[Todo]:
        # store order; no explicit sort is promised
        return list(self._todos.list_all())
