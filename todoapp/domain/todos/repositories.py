# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Todo


class TodoRepository(Protocol):
    """Each mutating method is a single atomic unit against the store.

    Methods that address a record by id return ``None`` (or ``False``) when
    the record does not exist instead of raising.
    """

    def list_all(self) -> Sequence[Todo]: ...
    def get(self, todo_id: int) -> Todo | None: ...
    def add(self, title: str, description: str | None) -> Todo: ...
    def update(self, todo_id: int, title: str, description: str | None) -> Todo | None: ...
    def toggle(self, todo_id: int) -> Todo | None: ...
    def delete(self, todo_id: int) -> bool: ...
