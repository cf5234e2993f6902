"""Lambda entrypoint.

Configure the function with ``budxray.main.lambda_handler`` as its handler.
Logging and OpenTelemetry are set up once per cold start, on first use.
"""

from typing import Any, Dict, Optional

from budxray.commons.config import app_settings
from budxray.commons.logging import configure_logging, get_logger

from .handler import AlbRequestHandler
from .tracing.flush import FlushCoordinator
from .tracing.otel import otel_manager
from .tracing.propagation import TraceContextPropagator
from .tracing.spans import SpanLifecycleManager


logger = get_logger(__name__)

_handler: Optional[AlbRequestHandler] = None


def get_handler() -> AlbRequestHandler:
    """Get the process-wide request handler, creating it on first access."""
    global _handler
    if _handler is None:
        configure_logging(app_settings.log_level, app_settings.debug)
        otel_manager.configure(app_settings)
        _handler = AlbRequestHandler(
            spans=SpanLifecycleManager(otel_manager.get_tracer(__name__)),
            propagator=TraceContextPropagator(otel_manager.propagator),
            flusher=FlushCoordinator(otel_manager.flushable, app_settings.flush_timeout_millis),
        )
        logger.info("handler_initialized", service_name=app_settings.service_name)
    return _handler


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda handler for ALB target group events."""
    return get_handler().handle(event, context)
