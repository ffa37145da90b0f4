"""OpenTelemetry helpers for statement rendering spans."""

from typing import Dict, Optional

from opentelemetry import trace

from fluentsql.__version__ import __version__

__all__ = [
    "INSTRUMENTATION_NAME",
    "current_span_ids",
    "get_tracer",
]

INSTRUMENTATION_NAME = "fluentsql"


def get_tracer(name: Optional[str] = None) -> trace.Tracer:
    """Return a tracer from the active provider, versioned with the package."""
    return trace.get_tracer(name or INSTRUMENTATION_NAME, __version__)


def current_span_ids() -> Dict[str, str]:
    """Hex trace and span ids of the active span, empty outside a valid span."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": trace.format_trace_id(span_context.trace_id),
        "span_id": trace.format_span_id(span_context.span_id),
    }
