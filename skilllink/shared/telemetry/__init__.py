"""Shared telemetry: logging setup and tracing helpers."""

from skilllink.shared.telemetry.logging import get_logger, setup_logging
from skilllink.shared.telemetry.tracing import add_span_event, get_trace_id, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "traced",
    "add_span_event",
    "get_trace_id",
]
