# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from todoapp.shared.config import DatabaseConfig, load_config
from todoapp.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _engine_options(db: DatabaseConfig) -> dict[str, Any]:
    url = make_url(db.url)
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            pool_timeout=db.pool_timeout,
        )
        return options

    # sessions are handed between Flask worker threads
    options["connect_args"] = {"check_same_thread": False, "timeout": db.pool_timeout}
    if url.database in (None, "", ":memory:"):
        return options
    options.update(pool_size=db.pool_size, max_overflow=db.max_overflow)
    return options


def build_engine(db: DatabaseConfig) -> Engine:
    engine = create_engine(db.url, **_engine_options(db))
    logger.debug(f"db.engine: created (backend={engine.url.get_backend_name()})")
    return engine


ENGINE: Engine = build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Ad-hoc transactional session for scripts and tests."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        logger.exception("db.session: rolled back")
        session.rollback()
        raise
    finally:
        SessionLocal.remove()


def init_db(session_factory: Callable[[], Session] = SessionLocal) -> None:
    from . import models  # noqa: F401  registers tables on Base.metadata

    session = session_factory()
    try:
        Base.metadata.create_all(bind=session.get_bind())
    finally:
        session.close()
    logger.info(f"db.schema: ensured tables={sorted(Base.metadata.tables)}")
