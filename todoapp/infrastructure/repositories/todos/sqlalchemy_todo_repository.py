# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from todoapp.domain.todos.entities import Todo as DomainTodo
from todoapp.domain.todos.repositories import TodoRepository
from todoapp.infrastructure.db.models import Todo, as_utc
from todoapp.infrastructure.unit_of_work import unit_of_work_scope

# INTEGER PRIMARY KEY is a signed 64-bit value
_MAX_ID = 2**63 - 1


def _addressable(todo_id: int) -> bool:
    return 0 < todo_id <= _MAX_ID


def _to_domain(row: Todo) -> DomainTodo:
    return DomainTodo(
        id=row.id,
        title=row.title,
        description=row.description,
        completed=bool(row.completed),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyTodoRepository(TodoRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_all(self) -> Sequence[DomainTodo]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = session.scalars(select(Todo).order_by(Todo.id.asc())).all()
            return [_to_domain(row) for row in rows]

    def get(self, todo_id: int) -> DomainTodo | None:
        if not _addressable(todo_id):
            return None
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.get(Todo, todo_id)
            return _to_domain(row) if row else None

    def add(self, title: str, description: str | None) -> DomainTodo:
        with unit_of_work_scope(self._session_factory) as session:
            row = Todo(title=title, description=description, completed=False)
            session.add(row)
            session.flush()
            return _to_domain(row)

    def update(self, todo_id: int, title: str, description: str | None) -> DomainTodo | None:
        if not _addressable(todo_id):
            return None
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Todo, todo_id)
            if row is None:
                return None
            row.title = title
            row.description = description
            session.flush()
            return _to_domain(row)

    def toggle(self, todo_id: int) -> DomainTodo | None:
        if not _addressable(todo_id):
            return None
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Todo, todo_id)
            if row is None:
                return None
            row.completed = not row.completed
            session.flush()
            return _to_domain(row)

    def delete(self, todo_id: int) -> bool:
        if not _addressable(todo_id):
            return False
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Todo, todo_id)
            if row is None:
                return False
            session.delete(row)
            return True
