"""Pipelines and collection mapping over Results.

``try_`` threads the value of each successful step into the next and stops
at the first ``Err``:

    try_(
        lambda _: ok(2),
        lambda v: ok(v * 3),
        lambda v: ok(v - 1),
    )
    # Ok(5)

Every step takes exactly one argument. The first step receives ``None``.
Steps that carry several values forward return a tuple and unpack it
themselves; steps that would rather name intermediate values use the
scratch scope of the running pipeline:

    try_(
        lambda _: scope().set("a", ok(2)),
        lambda _: scope().set("b", ok(scope().a * 3)),
        lambda _: ok(scope().b * 4),
    )
    # Ok(24)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextvars import ContextVar
from typing import Any, TypeVar

from .errors import EmptyPipeline, NoActiveScope
from .result import Err, Ok, Result, expect_result

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

type Step = Callable[[Any], Result[Any, Any]]


class Scope:
    """Named values shared by the steps of a single ``try_`` call.

    Values read back as attributes (``scope().total``) or by key
    (``scope()["total"]``). Names that collide with methods, such as
    ``set`` or ``get``, are only reachable by key.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def set(self, name: str, result: Result[T, E]) -> Result[T, E]:
        """Record ``name`` if ``result`` is Ok, then hand ``result`` back.

        The return value is meant to be the step's own return value, so
        recording and forwarding happen in one expression.
        """
        match expect_result(result, "Scope.set"):
            case Ok(value):
                self._values[name] = value
        return result

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"No value named {name!r} in scope") from None

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Scope({self._values!r})"


# One Scope per running try_; nested calls shadow and then restore the outer one.
_current_scope: ContextVar[Scope | None] = ContextVar("unexceptional_scope", default=None)


def scope() -> Scope:
    """Return the scratch scope of the innermost running ``try_``."""
    current = _current_scope.get()
    if current is None:
        raise NoActiveScope("scope() is only available inside a step run by try_")
    return current


def try_(*steps: Step) -> Result[Any, Any]:
    """Run ``steps`` in order, aborting on the first ``Err``.

    Returns the first ``Err`` encountered, or the last step's ``Ok``. A step
    returning anything other than a Result (``None`` included) raises
    ContractViolation.
    """
    if not steps:
        raise EmptyPipeline("try_ requires at least one step")

    token = _current_scope.set(Scope())
    try:
        value: Any = None
        result: Result[Any, Any] = Ok(None)
        for index, step in enumerate(steps, start=1):
            result = expect_result(step(value), f"try_ step {index}")
            match result:
                case Err(error):
                    logger.debug(
                        "try_ aborted at step %d of %d: %r", index, len(steps), error
                    )
                    return result
                case Ok(value):
                    pass
        return result
    finally:
        _current_scope.reset(token)


def map_while(
    items: Iterable[T], fn: Callable[[T], Result[U, E]]
) -> Result[list[U], E]:
    """Map ``fn`` over ``items`` until it returns an ``Err``.

        map_while([1, 2], lambda i: ok(i * 2))
        # Ok([2, 4])

    Items after the first failure are never passed to ``fn``.
    """
    values: list[U] = []
    for index, item in enumerate(items):
        result = expect_result(fn(item), "map_while function")
        match result:
            case Err(error):
                logger.debug("map_while aborted at item %d: %r", index, error)
                return result
            case Ok(value):
                values.append(value)
    return Ok(values)
