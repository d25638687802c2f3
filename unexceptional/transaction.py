"""Run a Result-returning step inside a database transaction.

The step's writes are committed when it returns ``Ok`` and rolled back when
it returns ``Err``. Either way the caller gets the step's Result back.
"""

from __future__ import annotations

import itertools
import logging
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, TypeVar

from .errors import NoTransactionFacility
from .result import Err, Result, expect_result

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")


class Rollback(Exception):
    """Raised inside ``atomic()`` to undo the block's writes.

    Facilities swallow it after rolling back; it never reaches the caller
    of ``transaction``.
    """


class TransactionFacility(Protocol):
    def atomic(self) -> AbstractContextManager[object]:
        """Begin a unit of work.

        Commit on normal exit. On ``Rollback``, roll back and suppress it.
        On any other exception, roll back and let it propagate.
        """
        ...


_default_facility: TransactionFacility | None = None


def use_transactions(facility: TransactionFacility | None) -> TransactionFacility | None:
    """Set the facility ``transaction`` uses when none is passed.

    Returns the previous default so callers can restore it.
    """
    global _default_facility
    previous, _default_facility = _default_facility, facility
    return previous


def transaction(
    step: Callable[[], Result[T, E]],
    facility: TransactionFacility | None = None,
) -> Result[T, E]:
    """Call ``step`` in a transaction, rolling back if it returns ``Err``."""
    facility = facility if facility is not None else _default_facility
    if facility is None:
        raise NoTransactionFacility(
            "transaction() needs a facility: pass one or call use_transactions()"
        )

    with facility.atomic():
        result = expect_result(step(), "transaction step")
        match result:
            case Err(error):
                logger.debug("Rolling back transaction: %r", error)
                raise Rollback
        logger.debug("Committing transaction")
    return result


class SQLiteTransactions:
    """Facility over a standard-library ``sqlite3`` connection.

    Issues its own ``BEGIN``/``COMMIT``/``ROLLBACK`` when the connection is
    idle. When a transaction is already open (the caller's own writes, an
    enclosing ``transaction`` call, or ``autocommit=False``), the block runs
    in a SAVEPOINT instead: only the block's writes are undone on failure,
    and on success they stay in the enclosing transaction for its owner to
    commit. Works with any ``isolation_level`` or ``autocommit`` setting.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self._savepoint_ids = itertools.count(1)

    @contextmanager
    def atomic(self) -> Iterator[sqlite3.Connection]:
        if self.connection.in_transaction:
            name = f"unexceptional_{next(self._savepoint_ids)}"
            begin = [f"SAVEPOINT {name}"]
            commit = [f"RELEASE SAVEPOINT {name}"]
            undo = [f"ROLLBACK TO SAVEPOINT {name}", f"RELEASE SAVEPOINT {name}"]
        else:
            begin, commit, undo = ["BEGIN"], ["COMMIT"], ["ROLLBACK"]

        self._execute(begin)
        try:
            yield self.connection
        except Rollback:
            self._undo(undo)
        except BaseException:
            self._undo(undo)
            raise
        else:
            self._execute(commit)

    def _execute(self, statements: list[str]) -> None:
        # Plain statements rather than commit()/rollback(): those are no-ops
        # on autocommit connections.
        for statement in statements:
            self.connection.execute(statement)

    def _undo(self, statements: list[str]) -> None:
        # Some errors make SQLite abort the whole transaction on its own.
        if self.connection.in_transaction:
            self._execute(statements)
