from __future__ import annotations

from datetime import datetime

from pydantic import Field

from todoapp.domain.todos.entities import Todo

from .common import CamelModel


class TodoRequestDTO(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class TodoResponseDTO(CamelModel):
    id: int
    title: str
    description: str | None
    completed: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, todo: Todo) -> TodoResponseDTO:
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            completed=todo.completed,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )


class HealthDTO(CamelModel):
    status: str = "UP"
    service: str
    timestamp: datetime
    version: str
