from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger("revenuecat")

Listener = Callable[["RequestEvent"], Any]


@dataclass(frozen=True)
class RequestEvent:
    """One HTTP round trip against the API.

    ``path`` is the endpoint template (``/v2/projects/{project_id}/...``), so
    events group by operation rather than by customer. ``status_code`` is
    None when no response arrived; ``error`` is the exception class name.
    """

    operation: str
    method: str
    path: str
    status_code: int | None = None
    duration_ms: float = 0.0
    result_count: int | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def status_class(self) -> str:
        """``2xx``/``4xx``/``5xx``, or ``none`` when the request never got a response."""
        if self.status_code is None:
            return "none"
        return f"{self.status_code // 100}xx"

    def attributes(self) -> dict[str, Any]:
        """Span attributes following the OpenTelemetry HTTP conventions."""
        attrs: dict[str, Any] = {
            "http.request.method": self.method,
            "http.route": self.path,
            "revenuecat.operation": self.operation,
            "revenuecat.duration_ms": self.duration_ms,
        }
        if self.status_code is not None:
            attrs["http.response.status_code"] = self.status_code
        if self.result_count is not None:
            attrs["revenuecat.result_count"] = self.result_count
        if self.error is not None:
            attrs["error.type"] = self.error
        return attrs


@dataclass
class _Tracer:
    enabled: bool = False
    slow_request_ms: float = 1000.0
    capture: bool = False
    listeners: list[Listener] = field(default_factory=list)
    events: list[RequestEvent] = field(default_factory=list)

    def emit(self, event: RequestEvent) -> None:
        if not self.enabled:
            return
        if self.capture:
            self.events.append(event)
        if event.duration_ms > self.slow_request_ms:
            logger.warning(
                "Slow request: %s %s took %.1fms (threshold: %.1fms, status: %s)",
                event.method,
                event.path,
                event.duration_ms,
                self.slow_request_ms,
                event.status_class,
            )
        for listener in self.listeners:
            listener(event)
        _export_span(event)


_tracer = _Tracer()


def enable_tracing(slow_request_ms: float = 1000.0, capture_events: bool = False) -> None:
    """Start emitting a RequestEvent for every round trip.

    Args:
        slow_request_ms: Requests slower than this log a warning
        capture_events: Keep events in memory for :func:`get_events`
    """
    _tracer.enabled = True
    _tracer.slow_request_ms = slow_request_ms
    _tracer.capture = capture_events


def disable_tracing() -> None:
    """Stop tracing and drop listeners and captured events."""
    global _tracer
    _tracer = _Tracer()


def get_events() -> list[RequestEvent]:
    return list(_tracer.events)


def clear_events() -> None:
    _tracer.events.clear()


def add_listener(callback: Listener) -> None:
    """Register a callable that receives each RequestEvent."""
    _tracer.listeners.append(callback)


def remove_listener(callback: Listener) -> None:
    _tracer.listeners.remove(callback)


def _export_span(event: RequestEvent) -> None:
    try:
        from opentelemetry import trace
        from opentelemetry.trace import Status, StatusCode
    except ImportError:
        return

    tracer = trace.get_tracer("revenuecat")
    with tracer.start_as_current_span(f"revenuecat.{event.operation}") as span:
        span.set_attributes(event.attributes())
        if not event.succeeded:
            span.set_status(Status(StatusCode.ERROR, event.error))


@asynccontextmanager
async def track_request(operation: str, method: str, path: str):
    """Time the enclosed round trip and emit a RequestEvent for it.

    The body may set ``status_code`` and ``result_count`` on the yielded dict.
    """
    ctx: dict[str, Any] = {"status_code": None, "result_count": None}
    if not _tracer.enabled:
        yield ctx
        return

    start = time.perf_counter()
    error: str | None = None
    try:
        yield ctx
    except Exception as e:
        error = type(e).__name__
        raise
    finally:
        _tracer.emit(
            RequestEvent(
                operation=operation,
                method=method,
                path=path,
                status_code=ctx["status_code"],
                duration_ms=(time.perf_counter() - start) * 1000,
                result_count=ctx["result_count"],
                error=error,
            )
        )
