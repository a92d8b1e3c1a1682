"""Tracing helpers for service operations (OpenTelemetry API only).

The host application owns the tracer provider; without one, spans are
no-ops and these helpers cost nothing.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Only these kwarg names are copied onto spans (case-insensitive).
# Message text, emails, and form bodies never are.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "record_id", "acting_user_id", "viewing_user_id", "from_id", "to_id",
    "user_id", "event_id", "sender_id", "recipient_id", "category", "tab",
    "limit", "status",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict) -> None:
    """Set span attributes from kwargs; only allowlisted keys are recorded."""
    for key, value in kwargs.items():
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def _record_failure(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)
    error_code = getattr(exc, "error_code", None)
    if error_code:
        span.set_attribute("error.code", error_code)


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Decorator to create a span for a function (sync or async).

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional dict of attributes to set on the span.

    Returns:
        Decorated function.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        def _start(span: trace.Span, kwargs: dict) -> None:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value)
            _set_safe_span_attrs(span, kwargs)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                _start(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                _start(span, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name, attributes=attributes or {})


def get_trace_id() -> str | None:
    """Return the current trace ID as 32-char hex, or None."""
    span = trace.get_current_span()
    if span:
        ctx = span.get_span_context()
        if ctx.is_valid:
            return format(ctx.trace_id, "032x")
    return None
