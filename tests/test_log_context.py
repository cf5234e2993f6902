"""Tests for trace/log correlation."""

from __future__ import annotations

import pytest
import structlog
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import format_span_id, format_trace_id

from budxray.tracing.log_context import request_log_context, span_log_context, trace_log_fields


class TestTraceLogFields:
    """Tests for trace_log_fields."""

    def test_invalid_span_has_no_fields(self) -> None:
        assert trace_log_fields(trace.INVALID_SPAN) == {}

    def test_valid_span_fields(self, spans) -> None:
        span = spans.start_span("fields", parent=Context())
        span_context = span.get_span_context()
        trace_id = format_trace_id(span_context.trace_id)

        fields = trace_log_fields(span)
        spans.end(span)

        assert fields == {
            "trace_id": trace_id,
            "span_id": format_span_id(span_context.span_id),
            "xray_trace_id": f"1-{trace_id[:8]}-{trace_id[8:]}",
        }


class TestRequestLogContext:
    """Tests for request_log_context."""

    def test_clears_stale_bindings_on_entry(self) -> None:
        structlog.contextvars.bind_contextvars(trace_id="stale")

        with request_log_context():
            assert structlog.contextvars.get_contextvars() == {}

    def test_clears_on_exit(self) -> None:
        with request_log_context():
            structlog.contextvars.bind_contextvars(trace_id="abc")

        assert structlog.contextvars.get_contextvars() == {}

    def test_clears_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with request_log_context():
                structlog.contextvars.bind_contextvars(trace_id="abc")
                raise RuntimeError("boom")

        assert structlog.contextvars.get_contextvars() == {}


class TestSpanLogContext:
    """Tests for span_log_context."""

    def test_binds_and_unbinds(self, spans) -> None:
        span = spans.start_span("bound", parent=Context())

        with request_log_context():
            with span_log_context(span) as fields:
                assert structlog.contextvars.get_contextvars() == fields
            assert structlog.contextvars.get_contextvars() == {}

        spans.end(span)

    def test_nested_span_restores_parent_fields(self, spans) -> None:
        outer = spans.start_span("outer", parent=Context())

        with request_log_context():
            with span_log_context(outer) as outer_fields, spans.activate(outer):
                inner = spans.start_span("inner")
                with span_log_context(inner) as inner_fields:
                    assert structlog.contextvars.get_contextvars()["span_id"] == inner_fields["span_id"]
                spans.end(inner)

                assert structlog.contextvars.get_contextvars() == outer_fields

        spans.end(outer)

    def test_invalid_span_binds_nothing(self) -> None:
        with request_log_context():
            with span_log_context(trace.INVALID_SPAN) as fields:
                assert fields == {}
                assert structlog.contextvars.get_contextvars() == {}
