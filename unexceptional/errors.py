"""Contract violations.

These signal bugs in the calling code, not runtime conditions. Domain
failures travel as ``Err`` values and never show up here.
"""

from __future__ import annotations

from typing import Any


class ContractViolation(Exception):
    """A Result API was used in a way it does not allow."""


class UnwrapOnErr(ContractViolation):
    """``unwrap()`` was called on an ``Err``."""

    def __init__(self, error: Any):
        super().__init__(f"Called unwrap on error: {error!r}")
        self.error = error


class UnwrapErrOnOk(ContractViolation):
    """``unwrap_err()`` was called on an ``Ok``."""

    def __init__(self, value: Any):
        super().__init__(f"Called unwrap_err, but Result was ok: {value!r}")
        self.value = value


class EmptyPipeline(ContractViolation):
    pass


class NoTransactionFacility(ContractViolation):
    pass


class NoActiveScope(ContractViolation):
    pass
