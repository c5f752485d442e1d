from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger("fetchstate")


@dataclass(frozen=True)
class FetchEvent:
    """Represents a single machine invocation for tracing."""

    operation: str
    name: str = ""
    outcome_status: str | None = None
    duration_ms: float = 0.0
    item_count: int | None = None
    error_message: str | None = None
    page: int | None = None


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_fetch_threshold_ms: float = 1000.0
        self.listeners: list[Callable[[FetchEvent], Any]] = []
        self.events: list[FetchEvent] = []
        self.capture_events: bool = False


_state = _ObservabilityState()


def enable_tracing(slow_fetch_ms: float = 1000.0, capture_events: bool = False) -> None:
    """Enable fetch tracing and observability."""
    _state.enabled = True
    _state.slow_fetch_threshold_ms = slow_fetch_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_fetch_threshold_ms = 1000.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[FetchEvent]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[FetchEvent], Any]) -> None:
    """Register a listener that receives a FetchEvent on each invocation."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[FetchEvent], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def emit_event(event: FetchEvent) -> None:
    """Emit a fetch event: store, log slow fetches, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    if event.duration_ms > _state.slow_fetch_threshold_ms:
        logger.warning(
            "Slow fetch: %s %s took %.1fms (threshold: %.1fms)",
            event.operation,
            event.name or "<anonymous>",
            event.duration_ms,
            _state.slow_fetch_threshold_ms,
        )

    for listener in list(_state.listeners):
        try:
            listener(event)
        except Exception:
            logger.exception("Fetch listener %r failed on %s event", listener, event.operation)

    try:
        _try_emit_otel_span(event)
    except Exception:
        logger.exception("Failed to emit OpenTelemetry span for %s", event.operation)


def _try_emit_otel_span(event: FetchEvent) -> None:
    """Attempt to emit an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace

        tracer = trace.get_tracer("fetchstate")
        with tracer.start_as_current_span(f"fetchstate.{event.operation}") as span:
            span.set_attribute("fetch.name", event.name)
            if event.outcome_status:
                span.set_attribute("fetch.status", event.outcome_status)
            if event.page is not None:
                span.set_attribute("fetch.page", event.page)
            if event.item_count is not None:
                span.set_attribute("fetch.item_count", event.item_count)
            if event.duration_ms:
                span.set_attribute("fetch.duration_ms", event.duration_ms)
    except ImportError:
        pass


@asynccontextmanager
async def track_fetch(operation: str, name: str = "", page: int | None = None):
    """Context manager that times a machine invocation and emits a FetchEvent.

    The body fills ``outcome_status``, ``item_count`` and ``error_message``
    in the yielded dict as it learns them.
    """
    if not _state.enabled:
        yield {}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"outcome_status": None, "item_count": None, "error_message": None}
    try:
        yield ctx
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = FetchEvent(
            operation=operation,
            name=name,
            outcome_status=ctx.get("outcome_status"),
            duration_ms=duration_ms,
            item_count=ctx.get("item_count"),
            error_message=ctx.get("error_message"),
            page=page,
        )
        emit_event(event)
