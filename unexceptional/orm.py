"""SQLAlchemy transaction facility."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .config import DATABASE_URL_VAR, load_settings
from .result import Err, Ok, Result
from .transaction import Rollback

logger = logging.getLogger(__name__)


class SQLAlchemyTransactions:
    """Facility over a SQLAlchemy ``Session``.

    Opens a top-level transaction when the session is idle, or a SAVEPOINT
    when it is already inside one, so a nested ``transaction`` call only
    undoes its own writes.

    ``engine`` is set only when the facility created the engine itself
    (``from_env``); ``close()`` then disposes it. A session passed in by the
    caller stays the caller's to manage, including its bind.
    """

    def __init__(self, session: Session, engine: Engine | None = None):
        self.session = session
        self.engine = engine

    @classmethod
    def from_env(cls) -> Result["SQLAlchemyTransactions", Exception]:
        """Creates a facility from UNEXCEPTIONAL_DATABASE_URL (or the .env file)."""
        settings = load_settings()

        match settings.database_url:
            case str(url):
                pass
            case None:
                logger.warning("%s is not set; no transaction facility", DATABASE_URL_VAR)
                return Err(ValueError(f"{DATABASE_URL_VAR} not found or empty in environment."))

        try:
            engine = create_engine(url, echo=settings.sql_echo)
        except Exception as e:
            return Err(e)
        return Ok(cls(Session(engine, expire_on_commit=False), engine=engine))

    def close(self) -> None:
        """Close the session, and dispose the engine if this facility owns it."""
        self.session.close()
        if self.engine is not None:
            self.engine.dispose()

    @contextmanager
    def atomic(self) -> Iterator[Session]:
        begin = self.session.begin_nested if self.session.in_transaction() else self.session.begin
        try:
            with begin():
                yield self.session
        except Rollback:
            pass
