from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger("pagewise")


@dataclass(frozen=True)
class PaginationEvent:
    """Represents a single navigation or load action for tracing."""

    action: str
    source: str
    data: dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_load_threshold_ms: float = 1000.0
        self.listeners: list[Callable[[PaginationEvent], Any]] = []
        self.events: list[PaginationEvent] = []
        self.capture_events: bool = False


_state = _ObservabilityState()


def enable_tracing(slow_load_ms: float = 1000.0, capture_events: bool = False) -> None:
    """Enable event tracing and observability."""
    _state.enabled = True
    _state.slow_load_threshold_ms = slow_load_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_load_threshold_ms = 1000.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[PaginationEvent]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[PaginationEvent], Any]) -> None:
    """Register a listener that receives a PaginationEvent on each action."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[PaginationEvent], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def emit_event(event: PaginationEvent) -> None:
    """Emit a pagination event: store, log slow loads, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    logger.debug("%s on %s: %s", event.action, event.source, event.data)

    if event.duration_ms > _state.slow_load_threshold_ms:
        logger.warning(
            "Slow load: %s on %s took %.1fms (threshold: %.1fms)",
            event.action,
            event.source,
            event.duration_ms,
            _state.slow_load_threshold_ms,
        )

    for listener in _state.listeners:
        listener(event)

    _try_emit_otel_span(event)


_SPAN_NAMESPACES = {
    "page_change": "page",
    "per_page_change": "per_page",
    "load_more": "load",
}


def span_attributes(event: PaginationEvent) -> dict[str, Any]:
    """Flatten an event into span attributes.

    Event data lands under a namespace per action, e.g. a page change from 2
    to 5 becomes ``pagewise.page.from=2`` and ``pagewise.page.to=5``; a load
    carries ``pagewise.load.chunk``, ``pagewise.load.outcome`` and
    ``pagewise.load.duration_ms``. Values that are not scalars are dropped.
    """
    namespace = f"pagewise.{_SPAN_NAMESPACES.get(event.action, event.action)}"
    attributes: dict[str, Any] = {
        "pagewise.source": event.source,
        "pagewise.action": event.action,
    }
    for key, value in event.data.items():
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, (str, bool, int, float)):
            attributes[f"{namespace}.{key}"] = value
    if event.duration_ms:
        attributes[f"{namespace}.duration_ms"] = round(event.duration_ms, 3)
    return attributes


def _try_emit_otel_span(event: PaginationEvent) -> None:
    """Attempt to emit an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace
    except ImportError:
        return

    tracer = trace.get_tracer("pagewise")
    with tracer.start_as_current_span(f"pagewise.{event.action}") as span:
        span.set_attributes(span_attributes(event))
        if event.data.get("outcome") == "failed":
            span.set_status(trace.Status(trace.StatusCode.ERROR))


@asynccontextmanager
async def track_load(source: str, **data: Any):
    """Context manager that times a load and emits a PaginationEvent."""
    if not _state.enabled:
        yield {"outcome": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"outcome": None}
    try:
        yield ctx
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = PaginationEvent(
            action="load_more",
            source=source,
            data={**data, "outcome": ctx.get("outcome")},
            duration_ms=duration_ms,
        )
        emit_event(event)
