"""Correlation of log lines with the active trace.

Identifiers live in ``structlog.contextvars`` and are merged into every log
event. Lambda reuses a thawed process for the next invocation, so the whole
context is cleared when a request starts and again when it finishes.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from opentelemetry.trace import Span, format_span_id, format_trace_id

from budxray.commons.constants import LOG_SPAN_ID, LOG_TRACE_ID, LOG_XRAY_TRACE_ID

from .ids import to_xray_trace_id


def trace_log_fields(span: Span) -> dict[str, str]:
    """Log fields identifying the span, empty when its context is invalid."""
    span_context = span.get_span_context()
    if not span_context.is_valid:
        return {}

    trace_id = format_trace_id(span_context.trace_id)
    fields = {
        LOG_TRACE_ID: trace_id,
        LOG_SPAN_ID: format_span_id(span_context.span_id),
    }
    xray_trace_id = to_xray_trace_id(trace_id)
    if xray_trace_id is not None:
        fields[LOG_XRAY_TRACE_ID] = xray_trace_id
    return fields


@contextmanager
def request_log_context() -> Iterator[None]:
    """Scope a request's diagnostic context, clearing it on entry and exit."""
    structlog.contextvars.clear_contextvars()
    try:
        yield
    finally:
        structlog.contextvars.clear_contextvars()


@contextmanager
def span_log_context(span: Span) -> Iterator[dict[str, str]]:
    """Bind the span's identifiers for the duration of the block.

    Bindings that were present before are restored on exit, so a nested span
    hands the log context back to its parent.
    """
    fields = trace_log_fields(span)
    with structlog.contextvars.bound_contextvars(**fields):
        yield fields
