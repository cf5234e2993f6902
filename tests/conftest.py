"""Pytest configuration and fixtures for budxray tests."""

from typing import Any, Callable, Dict, List, Optional

import pytest
import structlog
from opentelemetry.propagators.aws import AwsXRayPropagator
from opentelemetry.sdk.extension.aws.trace import AwsXRayIdGenerator
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from budxray.handler import AlbRequestHandler
from budxray.tracing.flush import FlushCoordinator
from budxray.tracing.propagation import TraceContextPropagator
from budxray.tracing.spans import SpanLifecycleManager


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """In-memory exporter receiving every ended span."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> TracerProvider:
    """Private SDK provider; never installed globally."""
    provider = TracerProvider(id_generator=AwsXRayIdGenerator())
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider: TracerProvider):
    return tracer_provider.get_tracer("budxray.tests")


@pytest.fixture
def spans(tracer) -> SpanLifecycleManager:
    return SpanLifecycleManager(tracer)


@pytest.fixture
def propagator() -> TraceContextPropagator:
    return TraceContextPropagator(AwsXRayPropagator())


@pytest.fixture
def handler(spans, propagator, tracer_provider) -> AlbRequestHandler:
    """Request handler wired to the in-memory tracer."""
    return AlbRequestHandler(spans, propagator, FlushCoordinator(tracer_provider, timeout_millis=1000))


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Factory for ALB request events."""

    def _make_event(
        method: str = "GET",
        path: str = "/api/hello",
        headers: Optional[Dict[str, str]] = None,
        multi_value_headers: Optional[Dict[str, List[str]]] = None,
    ) -> Dict[str, Any]:
        event: Dict[str, Any] = {
            "httpMethod": method,
            "path": path,
            "headers": {"Content-Type": "application/json", **(headers or {})},
            "requestContext": {"elb": {"targetGroupArn": "arn:aws:elasticloadbalancing:test"}},
            "isBase64Encoded": False,
        }
        if multi_value_headers is not None:
            event["multiValueHeaders"] = multi_value_headers
        return event

    return _make_event


@pytest.fixture
def captured_logs():
    """Capture structlog events, including bound context variables."""
    capture = structlog.testing.LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture.entries
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
