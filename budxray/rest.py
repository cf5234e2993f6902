"""Plain REST resource for the hello endpoint.

Serves the same greeting as the Lambda handler for deployments that run the
service behind a regular ASGI server instead of ALB + Lambda.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, Depends, FastAPI

from budxray.commons.config import app_settings
from budxray.commons.logging import configure_logging, get_logger

from .hello import HelloService
from .models import HelloResponse
from .tracing.otel import otel_manager
from .tracing.spans import SpanLifecycleManager


logger = get_logger(__name__)

router = APIRouter(prefix="/api")


def get_hello_service() -> HelloService:
    """Resolve the hello service from the configured tracer."""
    return HelloService(SpanLifecycleManager(otel_manager.get_tracer(__name__)))


@router.get("/hello", response_model=HelloResponse)
def hello(service: HelloService = Depends(get_hello_service)) -> HelloResponse:
    """Return a hello world message with a timestamp."""
    return service.say_hello()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Set up logging and OpenTelemetry for the lifetime of the application.

    Spans still buffered in the batch processor are flushed by the shutdown
    on exit.
    """
    configure_logging(app_settings.log_level, app_settings.debug)
    otel_manager.configure(app_settings)
    logger.info("rest_app_started", service_name=app_settings.service_name)

    yield

    otel_manager.shutdown()


def create_app() -> FastAPI:
    """Create the FastAPI application exposing the REST resource."""
    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        description=app_settings.description,
        lifespan=lifespan,
    )
    app.include_router(router)
    return app
