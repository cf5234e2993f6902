"""Hello endpoint business logic."""

from opentelemetry.trace import SpanKind, StatusCode

from budxray.commons.constants import CUSTOM_GREETING, HELLO_MESSAGE, HELLO_SPAN_NAME, SERVICE_OPERATION
from budxray.commons.logging import get_logger

from .models import HelloResponse
from .tracing.log_context import span_log_context
from .tracing.spans import SpanLifecycleManager


logger = get_logger(__name__)


class HelloService:
    """Produces the hello greeting inside its own INTERNAL span."""

    def __init__(self, spans: SpanLifecycleManager) -> None:
        self._spans = spans

    def say_hello(self) -> HelloResponse:
        """Return the greeting.

        A failure is recorded on the ``hello-operation`` span and re-raised
        for the caller to map to a response.
        """
        with self._spans.managed_span(HELLO_SPAN_NAME, kind=SpanKind.INTERNAL) as span, span_log_context(span):
            try:
                logger.info("processing_hello_request")

                self._spans.set_attribute(span, SERVICE_OPERATION, "hello")
                self._spans.set_attribute(span, CUSTOM_GREETING, HELLO_MESSAGE)

                response = HelloResponse(message=HELLO_MESSAGE)
                logger.info("returning_hello_response", timestamp=response.timestamp)
                return response
            except Exception as e:
                logger.error("hello_operation_failed", error=str(e))
                self._spans.record_exception(span, e)
                self._spans.set_status(span, StatusCode.ERROR, str(e))
                raise
