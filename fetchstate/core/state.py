"""Immutable state snapshots threaded through the fetch machines.

Every transition builds a new snapshot with ``copy_with``; a snapshot that
has been handed to an emit callback is never changed afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from fetchstate.core.query import Query

T = TypeVar("T")


class Status(str, Enum):
    """Lifecycle labels of a single-fetch state."""

    INITIAL = "initial"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_initial(self) -> bool:
        return self is Status.INITIAL

    @property
    def is_loading(self) -> bool:
        return self is Status.LOADING

    @property
    def is_success(self) -> bool:
        return self is Status.SUCCESS

    @property
    def is_error(self) -> bool:
        return self is Status.ERROR


class PagingStatus(str, Enum):
    """Lifecycle labels of a pagination state.

    ``LOADING`` is used for the first page, ``PAGING`` for every later one.
    """

    INITIAL = "initial"
    LOADING = "loading"
    PAGING = "paging"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_initial(self) -> bool:
        return self is PagingStatus.INITIAL

    @property
    def is_loading(self) -> bool:
        return self is PagingStatus.LOADING

    @property
    def is_paging(self) -> bool:
        return self is PagingStatus.PAGING

    @property
    def is_success(self) -> bool:
        return self is PagingStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self is PagingStatus.ERROR


@dataclass(frozen=True)
class SingleState(Generic[T]):
    """Snapshot of a non-paginated fetch."""

    data: T | None = None
    status: Status = Status.INITIAL
    error_message: str | None = None

    @classmethod
    def initial(cls) -> SingleState[T]:
        return cls()

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def no_data(self) -> bool:
        return self.data is None

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    @property
    def no_error(self) -> bool:
        return self.error_message is None

    def copy_with(self, **changes: Any) -> SingleState[T]:
        """Return a new snapshot with the given fields overridden."""
        return replace(self, **changes)


@dataclass(frozen=True)
class PaginationState(Generic[T]):
    """Snapshot of a paginated fetch.

    ``items`` holds every page fetched so far in fetch order. It is stored
    as a tuple, so the snapshot is hashable and a listener cannot change
    it. ``reached_max`` is True when the last page came back with exactly
    ``query.size`` items.
    """

    items: tuple[T, ...] = ()
    status: PagingStatus = PagingStatus.INITIAL
    query: Query = field(default_factory=Query.initial)
    reached_max: bool = False
    error_message: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def initial(cls, size: int | None = None, params: Any = None) -> PaginationState[T]:
        if size is None:
            return cls(query=Query.initial(params=params))
        return cls(query=Query.initial(size=size, params=params))

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    def copy_with(self, **changes: Any) -> PaginationState[T]:
        """Return a new snapshot with the given fields overridden."""
        return replace(self, **changes)

    def reset(self) -> PaginationState[T]:
        """Fresh state at page 1, keeping the cursor's size and params."""
        return type(self)(query=self.query.first_page())
