from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, ClassVar, Generic, Sequence, TypeVar

from fetchstate.core.fetcher import blocks_continuation, run_paged_fetch, run_single_fetch
from fetchstate.core.outcome import Outcome
from fetchstate.core.query import Query
from fetchstate.core.state import PaginationState, PagingStatus, SingleState, Status
from fetchstate.utils.settings import SettingsResolver
from fetchstate.utils.types import ContinuationGuard

S = TypeVar("S")
T = TypeVar("T")

logger = logging.getLogger(__name__)


class StateHolder(Generic[S]):
    """Owns the current snapshot of one piece of fetched state.

    ``emit`` is the place of record: it swaps in the new snapshot and
    notifies listeners in registration order. Configure subclasses with an
    inner ``Settings`` class::

        class UserHolder(FetchHolder[User]):
            class Settings:
                name = "user"
                keep_history = True
    """

    _name: ClassVar[str] = ""
    _keep_history: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._name = SettingsResolver.get_name(cls)
        cls._keep_history = SettingsResolver.get_keep_history(cls)

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Callable[[S], Any]] = []
        self.history: list[S] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def name(self) -> str:
        return self._name or SettingsResolver.get_name(type(self))

    def emit(self, state: S) -> None:
        self._state = state
        if self._keep_history:
            self.history.append(state)
        for listener in list(self._listeners):
            listener(state)

    def listen(self, callback: Callable[[S], Any]) -> Callable[[], None]:
        """Register a listener for emitted snapshots.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(callback)

        def cancel() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return cancel


class FetchHolder(StateHolder[SingleState[T]]):
    """Holder for a single fetched value."""

    def __init__(self, initial: SingleState[T] | None = None) -> None:
        super().__init__(initial if initial is not None else SingleState())

    async def load(
        self,
        pending: Awaitable[Outcome[T]],
        on_status_change: Callable[[Status], Any] | None = None,
    ) -> SingleState[T]:
        """Run one single fetch against the current snapshot.

        Returns:
            The snapshot held once the fetch is back at rest
        """
        await run_single_fetch(pending, self.state, self.emit, on_status_change, name=self.name)
        return self.state


class PagedHolder(StateHolder[PaginationState[T]]):
    """Holder for a paginated list.

    ``fetch`` receives the cursor of the page to load and returns an
    awaitable Outcome carrying that page's items.
    """

    _page_size: ClassVar[int] = 0
    _guard: ClassVar[ContinuationGuard | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._page_size = SettingsResolver.get_page_size(cls)
        guard = SettingsResolver.get_guard(cls)
        cls._guard = staticmethod(guard) if guard is not None else None

    def __init__(
        self,
        fetch: Callable[[Query], Awaitable[Outcome[Sequence[T]]]],
        initial: PaginationState[T] | None = None,
        *,
        params: Any = None,
    ) -> None:
        if initial is None:
            size = self._page_size or SettingsResolver.get_page_size(type(self))
            initial = PaginationState.initial(size=size, params=params)
        super().__init__(initial)
        self._fetch = fetch

    async def refresh(
        self,
        on_status_change: Callable[[PagingStatus], Any] | None = None,
    ) -> PaginationState[T]:
        """Reload from page 1, replacing everything accumulated so far."""
        logger.info(f"Refreshing '{self.name}' from page 1")
        return await self._run(self.state.copy_with(query=self.state.query.first_page()), on_status_change)

    async def load_more(
        self,
        on_status_change: Callable[[PagingStatus], Any] | None = None,
    ) -> PaginationState[T]:
        """Fetch the page the cursor currently points at.

        On page 1 this behaves like ``refresh``. Later pages go through the
        continuation guard; when it blocks, ``fetch`` is not called and the
        snapshot is left alone.
        """
        state = self.state
        if not state.query.is_first_page and (self._guard or blocks_continuation)(state):
            logger.debug(f"'{self.name}' has no further page to load")
            return state
        return await self._run(state, on_status_change)

    async def filter(
        self,
        params: Any,
        on_status_change: Callable[[PagingStatus], Any] | None = None,
    ) -> PaginationState[T]:
        """Replace the cursor's params and reload from page 1."""
        logger.info(f"Reloading '{self.name}' with new params")
        start = self.state.copy_with(query=self.state.query.copy_with(page=1, params=params))
        return await self._run(start, on_status_change)

    def reset(self) -> None:
        """Drop accumulated items and return the cursor to page 1."""
        self.emit(self.state.reset())

    async def _run(
        self,
        start: PaginationState[T],
        on_status_change: Callable[[PagingStatus], Any] | None,
    ) -> PaginationState[T]:
        await run_paged_fetch(
            self._fetch(start.query),
            start,
            self.emit,
            on_status_change,
            guard=self._guard,
            name=self.name,
        )
        return self.state

