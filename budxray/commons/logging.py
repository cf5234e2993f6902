"""Structured logging setup for budxray.

Every log line is rendered by structlog and carries whatever is bound in
``structlog.contextvars``; the tracing layer binds the active trace and span
identifiers there so log lines can be correlated with X-Ray traces.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(log_level: Any = "INFO", debug: bool = False) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        log_level: Level name or number for the root logger.
        debug: Render colored console output instead of JSON.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if debug:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        A structlog bound logger.
    """
    return structlog.get_logger(name)
