"""Extraction of an upstream trace context from inbound request headers."""

from __future__ import annotations

from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.propagate import get_global_textmap
from opentelemetry.propagators.textmap import TextMapPropagator

from budxray.commons.logging import get_logger

from .carrier import ALB_HEADER_GETTER, HeaderCarrier


logger = get_logger(__name__)


def is_valid_context(ctx: Context | None) -> bool:
    """Check whether a context carries a valid parent span context."""
    return trace.get_current_span(ctx).get_span_context().is_valid


class TraceContextPropagator:
    """Thin wrapper over an OTEL text map propagator.

    The wire format is whatever the wrapped propagator understands; the
    service installs ``AwsXRayPropagator`` globally, so by default this
    parses ``X-Amzn-Trace-Id``.
    """

    def __init__(self, propagator: TextMapPropagator | None = None) -> None:
        self._propagator = propagator

    @property
    def propagator(self) -> TextMapPropagator:
        """The propagator in use, falling back to the global one."""
        return self._propagator or get_global_textmap()

    def extract(self, ambient: Context | None, carrier: HeaderCarrier) -> Context:
        """Extract a parent context from the carrier.

        Never raises. A missing or unparsable header leaves the ambient
        context untouched, so the next span becomes a root span.

        Args:
            ambient: Context to extend; the current context when None.
            carrier: Headers of the inbound request.

        Returns:
            The extracted context.
        """
        base = ambient if ambient is not None else otel_context.get_current()
        try:
            return self.propagator.extract(carrier, context=base, getter=ALB_HEADER_GETTER)
        except Exception as e:
            logger.warning("trace_context_extraction_failed", error=str(e))
            return base
