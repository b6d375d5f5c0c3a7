# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from __future__ import annotations

from datetime import UTC, datetime
from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from todoapp.application.use_cases.todos.create_todo import CreateTodoUseCase
from todoapp.application.use_cases.todos.delete_todo import DeleteTodoUseCase
from todoapp.application.use_cases.todos.get_todo import GetTodoUseCase
from todoapp.application.use_cases.todos.list_todos import ListTodosUseCase
from todoapp.application.use_cases.todos.toggle_todo import ToggleTodoUseCase
from todoapp.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todoapp.domain.users.entities import User
from todoapp.infrastructure.auth.bearer import auth_required
from todoapp.interfaces.http.dto.todos import HealthDTO, TodoRequestDTO, TodoResponseDTO
from todoapp.shared.errors.validation import raise_validation_error
from todoapp.shared.logging import logger


def _parse_body() -> TodoRequestDTO:
    try:
        return TodoRequestDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class TodosController:
    def __init__(
        self,
        *,
        list_todos: ListTodosUseCase,
        get_todo: GetTodoUseCase,
        create_todo: CreateTodoUseCase,
        update_todo: UpdateTodoUseCase,
        toggle_todo: ToggleTodoUseCase,
        delete_todo: DeleteTodoUseCase,
        service_name: str,
        service_version: str,
    ) -> None:
        self._list_todos = list_todos
        self._get_todo = get_todo
        self._create_todo = create_todo
        self._update_todo = update_todo
        self._toggle_todo = toggle_todo
        self._delete_todo = delete_todo
        self._service_name = service_name
        self._service_version = service_version

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("todos", __name__, url_prefix="/api/todos")
        bp.add_url_rule("", view_func=self.list_all, methods=["GET"])
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/<int:todo_id>", view_func=self.get_one, methods=["GET"])
        bp.add_url_rule("/<int:todo_id>", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/<int:todo_id>/toggle", view_func=self.toggle, methods=["PATCH"])
        bp.add_url_rule("/<int:todo_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    @auth_required
    def list_all(self, identity: User) -> tuple[Response, int]:
        t0 = perf_counter()
        items = self._list_todos.execute()
        dt = (perf_counter() - t0) * 1000
        logger.info(f"todos.list: ok (user_id={identity.id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([TodoResponseDTO.from_entity(item).to_json() for item in items]), 200

    @auth_required
    def get_one(self, todo_id: int, identity: User) -> tuple[Response, int]:
        todo = self._get_todo.execute(todo_id)
        return jsonify(TodoResponseDTO.from_entity(todo).to_json()), 200

    @auth_required
    def create(self, identity: User) -> tuple[Response, int]:
        dto = _parse_body()
        todo = self._create_todo.execute(dto.title, dto.description)
        return jsonify(TodoResponseDTO.from_entity(todo).to_json()), 201

    @auth_required
    def update(self, todo_id: int, identity: User) -> tuple[Response, int]:
        dto = _parse_body()
        todo = self._update_todo.execute(todo_id, dto.title, dto.description)
        return jsonify(TodoResponseDTO.from_entity(todo).to_json()), 200

    @auth_required
    def toggle(self, todo_id: int, identity: User) -> tuple[Response, int]:
        todo = self._toggle_todo.execute(todo_id)
        return jsonify(TodoResponseDTO.from_entity(todo).to_json()), 200

    @auth_required
    def delete(self, todo_id: int, identity: User) -> tuple[str, int]:
        self._delete_todo.execute(todo_id)
        return "", 204

    def health(self) -> tuple[Response, int]:
        payload = HealthDTO(
            service=self._service_name,
            timestamp=datetime.now(UTC),
            version=self._service_version,
        )
        return jsonify(payload.to_json()), 200
