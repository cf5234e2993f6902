"""Trace context propagation and span lifecycle for the ALB handler."""

from .carrier import ALB_HEADER_GETTER, AlbHeaderGetter, HeaderCarrier
from .flush import Flushable, FlushCoordinator, FlushOutcome, NoOpFlushable
from .ids import from_xray_trace_id, to_xray_trace_id
from .propagation import TraceContextPropagator, is_valid_context
from .spans import SpanLifecycleManager

__all__ = [
    "ALB_HEADER_GETTER",
    "AlbHeaderGetter",
    "FlushCoordinator",
    "FlushOutcome",
    "Flushable",
    "HeaderCarrier",
    "NoOpFlushable",
    "SpanLifecycleManager",
    "TraceContextPropagator",
    "from_xray_trace_id",
    "is_valid_context",
    "to_xray_trace_id",
]
