"""Request boundary of the ALB-fronted Lambda function.

Per invocation: extract the upstream trace context from the headers, run the
routed handler inside a SERVER span that is a child of that context, end the
span, flush it synchronously, and return the envelope. Nothing raised by a
route handler escapes; the platform always receives a well-formed response.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from opentelemetry.context import Context
from opentelemetry.trace import Span, SpanKind, StatusCode
from pydantic import ValidationError

from budxray.commons.constants import (
    AWS_LAMBDA_FUNCTION_NAME,
    AWS_LAMBDA_REQUEST_ID,
    FAAS_INVOCATION_ID,
    HELLO_PATH,
    HTTP_METHOD,
    HTTP_STATUS_CODE,
    HTTP_TARGET,
    HTTP_URL,
    NOT_FOUND_MESSAGE,
    REQUEST_SPAN_NAME,
    XRAY_TRACE_HEADER,
    XRAY_TRACE_ID,
)
from budxray.commons.exceptions import HandlerExecutionException
from budxray.commons.logging import get_logger

from .hello import HelloService
from .models import AlbRequest, AlbResponse
from .responses import ResponseBuilder
from .routing import Route, Router
from .tracing.carrier import HeaderCarrier
from .tracing.flush import FlushCoordinator
from .tracing.log_context import request_log_context, span_log_context
from .tracing.propagation import TraceContextPropagator, is_valid_context
from .tracing.spans import SpanLifecycleManager


logger = get_logger(__name__)


class AlbRequestHandler:
    """Handles ALB events with X-Ray trace context propagation.

    Collaborators are injected so tests can supply an in-memory tracer and a
    fake flushable; ``budxray.main`` wires the production ones.

    Example:
        >>> handler = AlbRequestHandler(SpanLifecycleManager(tracer), TraceContextPropagator(), FlushCoordinator())
        >>> handler.handle({"httpMethod": "GET", "path": "/api/hello"})["statusCode"]
        200
    """

    def __init__(
        self,
        spans: SpanLifecycleManager,
        propagator: TraceContextPropagator,
        flusher: FlushCoordinator,
        responses: ResponseBuilder | None = None,
        hello_service: HelloService | None = None,
    ) -> None:
        self._spans = spans
        self._propagator = propagator
        self._flusher = flusher
        self._responses = responses or ResponseBuilder()
        self._hello = hello_service or HelloService(spans)
        # Any method on /api/hello is served, matching the deployed behaviour.
        self._router = Router(
            [Route(HELLO_PATH, self._handle_hello)],
            fallback=self._handle_not_found,
        )

    def __call__(self, event: Any, lambda_context: Any = None) -> dict[str, Any]:
        return self.handle(event, lambda_context)

    def handle(self, event: Any, lambda_context: Any = None) -> dict[str, Any]:
        """Handle one ALB event and return the response envelope as a dict."""
        return self.handle_request(self._parse_event(event), lambda_context).to_event()

    def handle_request(self, request: AlbRequest, lambda_context: Any = None) -> AlbResponse:
        """Handle one parsed request.

        The SERVER span is ended, the spans flushed and the diagnostic
        context cleared on every path, in that order.
        """
        with request_log_context():
            carrier = HeaderCarrier(request)
            incoming_trace_header = carrier.get(XRAY_TRACE_HEADER)
            logger.info(
                "request_received",
                method=request.http_method,
                path=request.path,
                incoming_trace_header=incoming_trace_header,
            )

            extracted = self._propagator.extract(None, carrier)
            logger.info("trace_context_extracted", is_valid=is_valid_context(extracted))

            try:
                return self._traced_dispatch(request, extracted, incoming_trace_header, lambda_context)
            finally:
                self._flusher.force_flush()

    def _traced_dispatch(
        self,
        request: AlbRequest,
        parent: Context,
        incoming_trace_header: str | None,
        lambda_context: Any,
    ) -> AlbResponse:
        with self._spans.managed_span(REQUEST_SPAN_NAME, parent=parent, kind=SpanKind.SERVER) as span:
            with span_log_context(span):
                logger.info("request_span_started")
                try:
                    self._set_request_attributes(span, request, incoming_trace_header, lambda_context)
                    handler = self._router.route(request.http_method, request.path)
                    response = handler(request, span)
                    if response is None:
                        raise HandlerExecutionException(f"No response produced for {request.path}")
                except Exception as e:
                    logger.exception("request_processing_failed", error=str(e))
                    self._spans.record_exception(span, e)
                    self._spans.set_status(span, StatusCode.ERROR, str(e))
                    response = self._responses.internal_error()

                self._spans.set_attribute(span, HTTP_STATUS_CODE, response.status_code)
        logger.info("request_span_ended", status_code=response.status_code)
        return response

    def _set_request_attributes(
        self,
        span: Span,
        request: AlbRequest,
        incoming_trace_header: str | None,
        lambda_context: Any,
    ) -> None:
        self._spans.set_attribute(span, HTTP_METHOD, request.http_method)
        self._spans.set_attribute(span, HTTP_URL, request.path)
        self._spans.set_attribute(span, HTTP_TARGET, request.path)
        self._spans.set_attribute(span, XRAY_TRACE_ID, incoming_trace_header)

        if lambda_context is not None:
            request_id = getattr(lambda_context, "aws_request_id", None)
            self._spans.set_attribute(span, AWS_LAMBDA_REQUEST_ID, request_id)
            self._spans.set_attribute(span, FAAS_INVOCATION_ID, request_id)
            self._spans.set_attribute(span, AWS_LAMBDA_FUNCTION_NAME, getattr(lambda_context, "function_name", None))

    def _handle_hello(self, request: AlbRequest, span: Span) -> AlbResponse:
        response = self._responses.json(200, self._hello.say_hello())
        self._spans.set_status(span, StatusCode.OK)
        return response

    def _handle_not_found(self, request: AlbRequest, span: Span) -> AlbResponse:
        logger.info("route_not_found", method=request.http_method, path=request.path)
        self._spans.set_status(span, StatusCode.ERROR, NOT_FOUND_MESSAGE)
        return self._responses.not_found()

    def _parse_event(self, event: Any) -> AlbRequest:
        try:
            return AlbRequest.from_event(event)
        except ValidationError as e:
            logger.warning("malformed_event", errors=e.error_count())
            return AlbRequest(
                http_method=str(event.get("httpMethod") or ""),
                path=str(event.get("path") or ""),
                headers=_string_headers(event.get("headers")),
                multi_value_headers=_string_multi_value_headers(event.get("multiValueHeaders")),
            )


def _string_headers(headers: Any) -> dict[str, str] | None:
    """Keep the single-value headers whose name and value are both strings."""
    if not isinstance(headers, Mapping):
        return None
    return {name: value for name, value in headers.items() if isinstance(name, str) and isinstance(value, str)}


def _string_multi_value_headers(headers: Any) -> dict[str, list[str]] | None:
    """Keep the string values of each multi-value header, dropping headers left empty."""
    if not isinstance(headers, Mapping):
        return None
    kept = {}
    for name, values in headers.items():
        if not isinstance(name, str) or not isinstance(values, (list, tuple)):
            continue
        strings = [value for value in values if isinstance(value, str)]
        if strings:
            kept[name] = strings
    return kept
