"""Manages application configuration, sourced from environment variables and an optional .env file."""

from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from budxray.__about__ import __version__

from .constants import DEFAULT_FLUSH_TIMEOUT_MILLIS


load_dotenv()


class AppConfig(BaseSettings):
    """Application configuration for the budxray Lambda function.

    The request-handling core never reads these values itself; they are
    handed to the handler and the OTEL bootstrap when the function starts.
    """

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    # App Info
    name: str = __version__.split("@")[0]
    version: str = __version__.split("@")[-1]
    description: str = "ALB-fronted Lambda function with X-Ray trace propagation"

    # Service identity
    service_name: str = Field(
        default="budxray",
        validation_alias=AliasChoices("OTEL_SERVICE_NAME", "AWS_LAMBDA_FUNCTION_NAME"),
    )
    service_version: str = Field(default=__version__.split("@")[-1], alias="SERVICE_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    debug: bool = Field(default=False, alias="DEBUG", description="Render logs for humans instead of JSON")

    # OpenTelemetry Configuration (standard OTEL env vars)
    otel_sdk_disabled: bool = Field(default=False, alias="OTEL_SDK_DISABLED")
    otel_exporter_endpoint: Optional[str] = Field(default=None, alias="OTEL_EXPORTER_OTLP_ENDPOINT")
    otel_console_exporter: bool = Field(default=False, alias="OTEL_CONSOLE_EXPORTER")
    sample_rate: float = Field(default=1.0, alias="OTEL_TRACES_SAMPLER_ARG", ge=0.0, le=1.0)

    # Flush
    flush_timeout_millis: int = Field(
        default=DEFAULT_FLUSH_TIMEOUT_MILLIS,
        alias="FLUSH_TIMEOUT_MILLIS",
        gt=0,
        description="Upper bound on the synchronous span flush before the handler returns",
    )


app_settings = AppConfig()
