# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction boundary used by every repository call."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from todoapp.shared.logging import logger

SessionFactory = Callable[[], Session]


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """One session, one transaction.

    Leaving the block normally commits; leaving it with an exception rolls
    back. With ``read_only=True`` the transaction is always rolled back.
    """

    session_factory: SessionFactory
    read_only: bool = False
    _session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("unit of work is not active")
        return self._session

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self.session
        try:
            if exc is not None:
                logger.warning(f"uow: rolled back ({exc_type.__name__})")
                session.rollback()
            elif self.read_only:
                session.rollback()
            else:
                self._flush_and_commit(session)
        finally:
            session.close()
            self._session = None

    def _flush_and_commit(self, session: Session) -> None:
        try:
            session.commit()
        except Exception:
            logger.exception("uow: commit failed")
            session.rollback()
            raise


@contextmanager
def unit_of_work_scope(factory: SessionFactory, *, read_only: bool = False) -> Iterator[Session]:
    with SqlAlchemyUnitOfWork(factory, read_only=read_only) as uow:
        yield uow.session


__all__ = ["SessionFactory", "SqlAlchemyUnitOfWork", "unit_of_work_scope"]
