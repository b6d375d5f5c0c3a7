# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from todoapp.infrastructure.db.models import Role
from todoapp.infrastructure.db.session import SessionLocal
from todoapp.infrastructure.unit_of_work import unit_of_work_scope
from todoapp.shared.config import AppConfig, load_config
from todoapp.shared.logging import logger


class RoleSetup:
    """Ensures the configured roles exist; roles are never created via the API."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def ensure_roles(self, names: Iterable[str]) -> list[str]:
        wanted = list(dict.fromkeys(name for name in names if name))
        with unit_of_work_scope(self._session_factory) as session:
            existing = set(session.scalars(select(Role.name).where(Role.name.in_(wanted))))
            created = [name for name in wanted if name not in existing]
            for name in created:
                session.add(Role(name=name))

        if created:
            logger.info(f"role_setup: created roles {created}")
        else:
            logger.info("role_setup: all roles already present")
        return created


def setup_default_roles(
    session_factory: Callable[[], Session] = SessionLocal, config: AppConfig | None = None
) -> list[str]:
    config = config or load_config()
    names = [*config.auth.seed_roles]
    if config.auth.default_role not in names:
        names.append(config.auth.default_role)
    return RoleSetup(session_factory).ensure_roles(names)


__all__ = [
    "RoleSetup",
    "setup_default_roles",
]
