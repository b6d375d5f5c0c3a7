# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todoapp.domain.users.entities import NewUser
from todoapp.domain.users.entities import Role as DomainRole
from todoapp.domain.users.entities import User as DomainUser
from todoapp.domain.users.exceptions import UserAlreadyExistsError
from todoapp.domain.users.repositories import RoleRepository, UserRepository
from todoapp.infrastructure.db.models import Role, User, as_utc
from todoapp.infrastructure.unit_of_work import unit_of_work_scope
from todoapp.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        enabled=bool(row.enabled),
        created_at=as_utc(row.created_at),
        roles=frozenset(role.name for role in row.roles),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _find_one(self, *criteria) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.scalars(select(User).where(*criteria)).first()
            return _to_domain(row) if row else None

    def find_by_username(self, username: str) -> DomainUser | None:
        return self._find_one(User.username == username)

    def find_by_username_or_email(self, identifier: str) -> DomainUser | None:
        return self._find_one(
            or_(User.username == identifier, func.lower(User.email) == identifier.lower())
        )

    def exists_by_username(self, username: str) -> bool:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            return bool(session.scalar(select(exists().where(User.username == username))))

    def exists_by_email(self, email: str) -> bool:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            matches = exists().where(func.lower(User.email) == email.lower())
            return bool(session.scalar(select(matches)))

    def add(self, user: NewUser, roles: list[DomainRole]) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                role_rows = [session.get_one(Role, role.id) for role in roles]
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    enabled=user.enabled,
                    roles=role_rows,
                )
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            # a concurrent registration won the unique constraint race
            logger.info(f"users.add: conflict (username={user.username})")
            raise UserAlreadyExistsError() from exc
        logger.info(f"users.add: ok (user_id={persisted.id})")
        return persisted


class SqlAlchemyRoleRepository(RoleRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_name(self, name: str) -> DomainRole | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.scalars(select(Role).where(Role.name == name)).first()
            return DomainRole(id=row.id, name=row.name) if row else None
