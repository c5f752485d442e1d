"""Fetch state machines.

Both machines take a pending Outcome, the caller's current snapshot and an
emit callback. They emit the loading (or paging) snapshot, await the
pending result, emit success or error, and always finish by emitting the
last snapshot with its status back at ``initial``. Failures never reach the
caller; they become ``error`` snapshots.

Example::

    await run_single_fetch(
        client.get_user(user_id),
        holder.state,
        holder.emit,
        on_status_change=lambda status: print(status),
    )
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from fetchstate.core.outcome import Failure, Outcome, Success, describe_exception, is_outcome
from fetchstate.core.state import PaginationState, PagingStatus, SingleState, Status
from fetchstate.lifecycle.observability import track_fetch
from fetchstate.utils.exceptions import InvalidOutcome
from fetchstate.utils.types import ContinuationGuard

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _notifier(on_status_change: Callable[[Any], Any] | None) -> Callable[[Any], None]:
    def notify(status: Any) -> None:
        if on_status_change is not None:
            on_status_change(status)

    return notify


async def _resolve(pending: Awaitable[Any]) -> Outcome[Any]:
    """Await the pending fetch and make sure it produced an Outcome."""
    result = await pending
    if not is_outcome(result):
        raise InvalidOutcome(
            f"Pending fetch resolved to {type(result).__name__}, expected Success or Failure"
        )
    return result


def _discard(pending: Awaitable[Any]) -> None:
    """Close a coroutine that will never be awaited."""
    if inspect.iscoroutine(pending):
        pending.close()


# --- Continuation guards ---


def blocks_continuation(state: PaginationState[Any]) -> bool:
    """Default guard for pages after the first.

    Blocks while a page fetch is already running and when the previous page
    came back short (``reached_max`` False), since a short page means the
    backend has nothing more to give.
    """
    return state.status.is_paging or not state.reached_max


def blocks_exhausted(state: PaginationState[Any]) -> bool:
    """Guard for callers that read ``reached_max`` as "no more data".

    Blocks while a page fetch is already running and once ``reached_max``
    is set.
    """
    return state.status.is_paging or state.reached_max


# --- Single fetch ---


async def run_single_fetch(
    pending: Awaitable[Outcome[T]],
    state: SingleState[T],
    emit: Callable[[SingleState[T]], None],
    on_status_change: Callable[[Status], Any] | None = None,
    *,
    name: str = "",
) -> None:
    """Drive a non-paginated fetch through loading, success or error, initial.

    Args:
        pending: Awaitable resolving to a Success or Failure
        state: Snapshot to start from
        emit: Receives every new snapshot, at least three times
        on_status_change: Optional observer called before each emit
        name: Label used in logs and trace events
    """
    notify = _notifier(on_status_change)

    async with track_fetch("single", name) as trace:
        notify(Status.LOADING)
        current = state.copy_with(status=Status.LOADING)
        try:
            emit(current)
            outcome = await _resolve(pending)

            match outcome:
                case Success(value=value):
                    notify(Status.SUCCESS)
                    current = current.copy_with(data=value, status=Status.SUCCESS)
                    emit(current)
                case Failure(message=message):
                    logger.debug("Fetch %s failed: %s", name or "<anonymous>", message)
                    notify(Status.ERROR)
                    current = current.copy_with(error_message=message, status=Status.ERROR)
                    emit(current)
        except Exception as e:
            message = describe_exception(e)
            logger.warning("Fetch %s raised %s: %s", name or "<anonymous>", type(e).__name__, message)
            notify(Status.ERROR)
            current = current.copy_with(error_message=message, status=Status.ERROR)
            emit(current)
        finally:
            trace["outcome_status"] = current.status.value
            trace["error_message"] = current.error_message
            notify(Status.INITIAL)
            current = current.copy_with(status=Status.INITIAL)
            emit(current)


# --- Paginated fetch ---


def _replace_items(previous: tuple[T, ...], page: Sequence[T]) -> tuple[T, ...]:
    return tuple(page)


def _append_items(previous: tuple[T, ...], page: Sequence[T]) -> tuple[T, ...]:
    return (*previous, *page)


async def run_paged_fetch(
    pending: Awaitable[Outcome[Sequence[T]]],
    state: PaginationState[T],
    emit: Callable[[PaginationState[T]], None],
    on_status_change: Callable[[PagingStatus], Any] | None = None,
    *,
    guard: ContinuationGuard | None = None,
    name: str = "",
) -> None:
    """Drive a paginated fetch for the page ``state.query`` points at.

    Page 1 replaces the accumulated items and reports ``loading``. Later
    pages append to them and report ``paging``, but only when ``guard``
    (``blocks_continuation`` by default) lets them through; a blocked call
    returns without emitting or notifying anything.

    After a successful page, ``reached_max`` is True exactly when the page
    held ``query.size`` items, and the cursor moves to the next page.

    Args:
        pending: Awaitable resolving to a Success carrying the page's items,
            or a Failure
        state: Snapshot to start from
        emit: Receives every new snapshot
        on_status_change: Optional observer called before each emit
        guard: Predicate returning True when a continuation must not run
        name: Label used in logs and trace events
    """
    if state.query.is_first_page:
        start = state.copy_with(status=PagingStatus.LOADING, query=state.query.first_page())
        merge = _replace_items
    else:
        blocked = guard or blocks_continuation
        if blocked(state):
            logger.debug(
                "Continuation %s blocked at page %d (status=%s, reached_max=%s)",
                name or "<anonymous>",
                state.query.page,
                state.status.value,
                state.reached_max,
            )
            _discard(pending)
            return
        start = state.copy_with(status=PagingStatus.PAGING)
        merge = _append_items

    notify = _notifier(on_status_change)

    async with track_fetch("paged", name, page=state.query.page) as trace:
        notify(start.status)
        current = start
        try:
            emit(current)
            outcome = await _resolve(pending)

            match outcome:
                case Success(value=value):
                    page = list(value or [])
                    trace["item_count"] = len(page)
                    notify(PagingStatus.SUCCESS)
                    current = current.copy_with(
                        items=merge(current.items, page),
                        status=PagingStatus.SUCCESS,
                        reached_max=len(page) == current.query.size,
                        query=current.query.next_page(),
                    )
                    emit(current)
                case Failure(message=message):
                    logger.debug(
                        "Page %d of %s failed: %s", current.query.page, name or "<anonymous>", message
                    )
                    notify(PagingStatus.ERROR)
                    current = current.copy_with(error_message=message, status=PagingStatus.ERROR)
                    emit(current)
        except Exception as e:
            message = describe_exception(e)
            logger.warning(
                "Page %d of %s raised %s: %s",
                current.query.page,
                name or "<anonymous>",
                type(e).__name__,
                message,
            )
            notify(PagingStatus.ERROR)
            current = current.copy_with(error_message=message, status=PagingStatus.ERROR)
            emit(current)
        finally:
            trace["outcome_status"] = current.status.value
            trace["error_message"] = current.error_message
            notify(PagingStatus.INITIAL)
            current = current.copy_with(status=PagingStatus.INITIAL)
            emit(current)
