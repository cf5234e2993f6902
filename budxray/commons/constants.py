"""Constants shared across the budxray service.

Attribute keys follow the OTEL semantic conventions where one exists; the
remainder mirror the keys the X-Ray console and the bud-stack dashboards
already expect.
"""

from __future__ import annotations

# Inbound headers
XRAY_TRACE_HEADER = "X-Amzn-Trace-Id"

# Span names
REQUEST_SPAN_NAME = "alb-request-handler"
HELLO_SPAN_NAME = "hello-operation"

# HTTP attributes
HTTP_METHOD = "http.method"
HTTP_URL = "http.url"
HTTP_TARGET = "http.target"
HTTP_STATUS_CODE = "http.status_code"

# Lambda attributes
AWS_LAMBDA_REQUEST_ID = "aws.lambda.request_id"
AWS_LAMBDA_FUNCTION_NAME = "aws.lambda.function_name"
FAAS_INVOCATION_ID = "faas.invocation_id"
XRAY_TRACE_ID = "xray.trace_id"

# Business attributes
SERVICE_OPERATION = "service.operation"
CUSTOM_GREETING = "custom.greeting"

# Diagnostic context keys bound into every log line of a request
LOG_TRACE_ID = "trace_id"
LOG_SPAN_ID = "span_id"
LOG_XRAY_TRACE_ID = "xray_trace_id"

# Routes
HELLO_PATH = "/api/hello"

# Response envelope
CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"
HELLO_MESSAGE = "Hello World"
NOT_FOUND_MESSAGE = "Not Found"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"

STATUS_DESCRIPTIONS: dict[int, str] = {
    200: "200 OK",
    404: "404 Not Found",
    500: "500 Internal Server Error",
}

DEFAULT_FLUSH_TIMEOUT_MILLIS = 10_000
