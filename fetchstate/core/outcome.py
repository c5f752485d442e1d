from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Generic, NoReturn, TypeVar, Union

from fetchstate.utils.exceptions import UnwrapError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Outcome of a data-producing call that completed with a value.

    The value may be None when the call has no data yet.
    """

    value: T | None = None

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T | None:
        return self.value

    def unwrap_or(self, default: Any) -> T | None:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Outcome of a data-producing call that reported a semantic error."""

    message: str

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise UnwrapError(f"Called unwrap on Failure: {self.message}")

    def unwrap_or(self, default: Any) -> Any:
        return default


Outcome = Union[Success[T], Failure]


def is_outcome(obj: Any) -> bool:
    """Return True if obj is one of the two Outcome variants."""
    return isinstance(obj, (Success, Failure))


def describe_exception(exc: BaseException) -> str:
    """Human-readable message for an exception raised by a pending fetch."""
    return str(exc) or exc.__class__.__name__


async def capture(awaitable: Awaitable[T]) -> Outcome[T]:
    """Await a plain value-producing call and classify its result.

    A returned value becomes ``Success(value)``; a raised ``Exception``
    becomes ``Failure`` carrying the exception's description. Values that
    are already outcomes are passed through unchanged.

    Args:
        awaitable: Coroutine or future producing the raw value

    Returns:
        The classified Outcome
    """
    try:
        value = await awaitable
    except Exception as e:
        return Failure(describe_exception(e))
    if is_outcome(value):
        return value
    return Success(value)
