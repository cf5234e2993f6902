"""Synchronous, bounded span flush before the handler returns.

Lambda may freeze the execution environment as soon as the handler returns,
so spans still sitting in a batch processor would only be exported on the
next thaw, if ever. The flush blocks for at most ``timeout_millis``; the
outcome is logged and never affects the response.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from budxray.commons.constants import DEFAULT_FLUSH_TIMEOUT_MILLIS
from budxray.commons.logging import get_logger


logger = get_logger(__name__)


class Flushable(Protocol):
    """Anything that can drain buffered telemetry, e.g. an SDK ``TracerProvider``."""

    def force_flush(self, timeout_millis: int = 30000) -> bool: ...


class NoOpFlushable:
    """Flushable used when no exporting provider is configured."""

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True


class FlushOutcome(str, Enum):
    """Result of a flush attempt, for diagnostics only."""

    FLUSHED = "flushed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class FlushCoordinator:
    """Runs one bounded flush per request and absorbs any failure."""

    def __init__(
        self,
        flushable: Flushable | None = None,
        timeout_millis: int = DEFAULT_FLUSH_TIMEOUT_MILLIS,
    ) -> None:
        self._flushable = flushable or NoOpFlushable()
        self._timeout_millis = timeout_millis

    @property
    def timeout_millis(self) -> int:
        return self._timeout_millis

    def force_flush(self) -> FlushOutcome:
        """Flush buffered spans, waiting up to the configured timeout.

        Returns:
            The outcome of the attempt.
        """
        try:
            flushed = self._flushable.force_flush(self._timeout_millis)
        except Exception:
            logger.exception("span_flush_failed", timeout_millis=self._timeout_millis)
            return FlushOutcome.FAILED

        if flushed is False:
            logger.warning("span_flush_timed_out", timeout_millis=self._timeout_millis)
            return FlushOutcome.TIMED_OUT

        logger.info("span_flush_completed")
        return FlushOutcome.FLUSHED
