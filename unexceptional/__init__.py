"""unexceptional: explicit error propagation with a Result type."""

from .errors import (
    ContractViolation,
    EmptyPipeline,
    NoActiveScope,
    NoTransactionFacility,
    UnwrapErrOnOk,
    UnwrapOnErr,
)
from .result import Err, Ok, Result, check, err, expect_result, ok
from .combinators import Scope, map_while, scope, try_
from .transaction import (
    Rollback,
    SQLiteTransactions,
    TransactionFacility,
    transaction,
    use_transactions,
)

__all__ = [
    # Result
    "Ok", "Err", "Result", "ok", "err", "check", "expect_result",
    # Combinators
    "try_", "map_while", "scope", "Scope",
    # Transactions
    "transaction", "use_transactions", "TransactionFacility", "Rollback",
    "SQLiteTransactions",
    # Errors
    "ContractViolation", "UnwrapOnErr", "UnwrapErrOnOk", "EmptyPipeline",
    "NoTransactionFacility", "NoActiveScope",
]
