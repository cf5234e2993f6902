"""Span lifecycle management.

Every span started here is ended exactly once, and activation is a strict
push/pop on the OTEL context stack: whatever was current before a span was
activated is current again afterwards, even when an exception unwinds the
block.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer
from opentelemetry.util.types import Attributes


class SpanLifecycleManager:
    """Starts, activates, mutates and ends spans for one tracer.

    Example:
        >>> spans = SpanLifecycleManager(tracer)
        >>> with spans.managed_span("alb-request-handler", parent=ctx, kind=SpanKind.SERVER) as span:
        ...     spans.set_attribute(span, "http.method", "GET")
    """

    def __init__(self, tracer: Tracer) -> None:
        self._tracer = tracer

    @property
    def tracer(self) -> Tracer:
        """The tracer spans are started from."""
        return self._tracer

    def start_span(
        self,
        name: str,
        parent: Context | None = None,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None,
    ) -> Span:
        """Start a span.

        Args:
            name: Span name.
            parent: Context holding the parent span. When it holds no valid
                span the new span is a root span; when None the current
                context is used.
            kind: Span kind.
            attributes: Initial attributes.

        Returns:
            The started, not yet active, span.
        """
        return self._tracer.start_span(
            name,
            context=parent,
            kind=kind,
            attributes=attributes,
            record_exception=False,
            set_status_on_exception=False,
        )

    @contextmanager
    def activate(self, span: Span) -> Iterator[Span]:
        """Make the span current for the duration of the block."""
        token = otel_context.attach(trace.set_span_in_context(span))
        try:
            yield span
        finally:
            otel_context.detach(token)

    def set_attribute(self, span: Span, key: str, value: Any) -> None:
        """Set a single attribute, skipping None values."""
        if value is None:
            return
        span.set_attribute(key, value)

    def set_status(self, span: Span, code: StatusCode, message: str | None = None) -> None:
        """Set the span status.

        OTEL only keeps a description for ERROR statuses.
        """
        description = message if code is StatusCode.ERROR else None
        span.set_status(Status(code, description))

    def record_exception(self, span: Span, error: BaseException) -> None:
        """Attach an exception event to the span."""
        span.record_exception(error)

    def end(self, span: Span) -> None:
        """End the span."""
        span.end()

    @contextmanager
    def managed_span(
        self,
        name: str,
        parent: Context | None = None,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None,
    ) -> Iterator[Span]:
        """Start a span, activate it, and end it when the block exits.

        Exceptions raised in the block propagate unchanged; the caller decides
        how they are recorded. The span is ended on every exit path.
        """
        span = self.start_span(name, parent=parent, kind=kind, attributes=attributes)
        try:
            with self.activate(span):
                yield span
        finally:
            self.end(span)
