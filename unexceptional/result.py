"""Result type for operations that can fail."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar

from .errors import ContractViolation, UnwrapErrOnOk, UnwrapOnErr

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapErrOnOk(self.value)

    def on_ok(self, fn: Callable[[T], object]) -> Ok[T]:
        """Call ``fn`` with the value for its side effect; return self."""
        fn(self.value)
        return self

    def on_err(self, fn: Callable[[Any], object]) -> Ok[T]:
        return self

    def and_then(
        self, step: Result[U, F] | Callable[[], Result[U, F]] | None = None
    ) -> Result[U, F] | Ok[None]:
        """Continue after a success.

        ``step`` may be a Result, returned as-is; a zero-argument callable,
        called and its Result returned; or omitted, giving ``ok()``::

            ok("dropped").and_then(ok("final"))  # Ok('final')
            ok(3).and_then(lambda: ok(6))        # Ok(6)
            ok("dropped").and_then()             # Ok(None)
        """
        match step:
            case None:
                return ok()
            case Ok() | Err():
                return step
            case _ if callable(step):
                return expect_result(step(), "and_then callback")
            case _:
                raise ContractViolation(
                    f"and_then expects a Result, a callable or nothing, got {step!r}"
                )


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise UnwrapOnErr(self.error)

    def unwrap_err(self) -> E:
        return self.error

    def on_ok(self, fn: Callable[[Any], object]) -> Err[E]:
        return self

    def on_err(self, fn: Callable[[E], object]) -> Err[E]:
        """Call ``fn`` with the error for its side effect; return self."""
        fn(self.error)
        return self

    def and_then(self, step: object = None) -> Err[E]:
        """Short-circuit: ``step`` is never inspected or called."""
        return self


type Result[T, E] = Ok[T] | Err[E]


def ok(value: T = None) -> Ok[T]:  # type: ignore[assignment]
    """Build a success. With no argument the value is ``None``."""
    return Ok(value)


def err(error: E) -> Err[E]:
    return Err(error)


def check(condition: object, error: E) -> Ok[None] | Err[E]:
    """``ok()`` if ``condition`` holds, else ``err(error)``."""
    return ok() if condition else err(error)


def expect_result(value: object, where: str) -> Result[Any, Any]:
    """Return ``value`` if it is a Result, otherwise raise ContractViolation."""
    match value:
        case Ok() | Err():
            return value
        case _:
            raise ContractViolation(
                f"{where} must return a Result, but returned {value!r}"
            )
