"""OpenTelemetry configuration for X-Ray compatible tracing inside Lambda."""

import os
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.aws import AwsXRayPropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.extension.aws.trace import AwsXRayIdGenerator
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from budxray.__about__ import __version__
from budxray.commons.config import AppConfig, app_settings
from budxray.commons.logging import get_logger

from .flush import Flushable, NoOpFlushable


logger = get_logger(__name__)


class OTelManager:
    """Singleton manager for OpenTelemetry tracing.

    Configures an SDK TracerProvider whose trace ids embed epoch seconds (as
    X-Ray requires) and installs the X-Ray propagator globally.

    Usage:
        from budxray.tracing.otel import otel_manager

        # At cold start
        otel_manager.configure()
        ...
        otel_manager.shutdown()
    """

    _instance: Optional["OTelManager"] = None
    _tracer_provider: Optional[TracerProvider] = None
    _propagator: Optional[TextMapPropagator] = None
    _is_configured: bool = False

    def __new__(cls) -> "OTelManager":
        """Ensure only one instance exists (Singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_configured(self) -> bool:
        """Check if OpenTelemetry has been configured."""
        return self._is_configured

    @property
    def tracer_provider(self) -> Optional[TracerProvider]:
        """Get the configured TracerProvider instance."""
        return self._tracer_provider

    @property
    def propagator(self) -> TextMapPropagator:
        """Get the propagator used to extract inbound trace headers."""
        if self._propagator is None:
            self._propagator = AwsXRayPropagator()
        return self._propagator

    @property
    def flushable(self) -> Flushable:
        """Get the object the per-request flush drains."""
        return self._tracer_provider or NoOpFlushable()

    def get_tracer(self, name: str) -> trace.Tracer:
        """Get a tracer instance for creating spans.

        Falls back to the global (no-op until configured) provider.

        Args:
            name: Name of the tracer (typically __name__ of the calling module)

        Returns:
            Tracer instance for creating spans
        """
        if self._tracer_provider is not None:
            return self._tracer_provider.get_tracer(name, __version__.split("@")[-1])
        return trace.get_tracer(name)

    def create_resource(self, settings: AppConfig) -> Resource:
        """Build the OTEL resource describing this function."""
        attributes = {
            SERVICE_NAME: settings.service_name,
            SERVICE_VERSION: settings.service_version,
            "deployment.environment": settings.environment,
            "cloud.provider": "aws",
        }
        function_name = os.environ.get("AWS_LAMBDA_FUNCTION_NAME")
        if function_name:
            attributes["faas.name"] = function_name
        region = os.environ.get("AWS_REGION")
        if region:
            attributes["cloud.region"] = region
        return Resource.create(attributes)

    def configure(self, settings: Optional[AppConfig] = None) -> None:
        """Configure OpenTelemetry tracing and X-Ray trace context propagation.

        Configuration is read from app_settings unless given explicitly:
            - OTEL_SDK_DISABLED: Whether OTEL SDK is disabled
            - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP HTTP endpoint
            - OTEL_CONSOLE_EXPORTER: Also print spans to stdout
            - OTEL_TRACES_SAMPLER_ARG: Root sampling ratio
        """
        settings = settings or app_settings

        if self._is_configured:
            logger.warning("otel_already_configured")
            return

        if settings.otel_sdk_disabled:
            logger.info("otel_sdk_disabled")
            return

        set_global_textmap(self.propagator)

        self._tracer_provider = TracerProvider(
            resource=self.create_resource(settings),
            sampler=ParentBased(TraceIdRatioBased(settings.sample_rate)),
            id_generator=AwsXRayIdGenerator(),
        )

        if settings.otel_exporter_endpoint:
            endpoint = settings.otel_exporter_endpoint.rstrip("/")
            exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")
            self._tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

        if settings.otel_console_exporter:
            self._tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._tracer_provider)

        self._is_configured = True
        logger.info(
            "otel_configured",
            service_name=settings.service_name,
            otlp_endpoint=settings.otel_exporter_endpoint,
            sample_rate=settings.sample_rate,
        )

    def shutdown(self) -> None:
        """Gracefully shutdown OpenTelemetry.

        Flushes pending spans and releases resources.
        """
        if not self._is_configured:
            return

        if self._tracer_provider:
            self._tracer_provider.shutdown()
            self._tracer_provider = None

        self._is_configured = False
        logger.info("otel_shutdown_complete")


# Module-level singleton instance
otel_manager = OTelManager()
