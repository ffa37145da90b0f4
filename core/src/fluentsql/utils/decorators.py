"""Tracing decorator for statement renderers."""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import SpanKind, Status, StatusCode

from fluentsql.telemetry import get_tracer

F = TypeVar('F', bound=Callable[..., Any])

AttributeGetter = Callable[..., Optional[Dict[str, Any]]]

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from fluentsql.logging import get_logger
        logger = get_logger(__name__)
    return logger


def _span_attributes(
    static: Optional[Dict[str, Any]],
    getter: Optional[AttributeGetter],
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    """Merge static and call-time attributes, dropping None values.

    Returns nothing when ``trace_rendering`` is disabled.
    """
    from fluentsql.settings import get_settings

    if not get_settings().trace_rendering:
        return {}

    merged: Dict[str, Any] = dict(static or {})
    if getter is not None:
        try:
            merged.update(getter(*args, **kwargs) or {})
        except Exception as exc:  # pragma: no cover
            _get_logger().warning("Span attribute getter %r failed: %s", getter, exc)
    return {key: value for key, value in merged.items() if value is not None}


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    attribute_getter: Optional[AttributeGetter] = None,
) -> Callable[[F], F]:
    """Run a renderer inside an OpenTelemetry span.

    String results add a ``db.statement.length`` attribute. Exceptions are
    recorded on the span, which is marked as failed, and re-raised.

    Args:
        span_name: Span name, defaults to the qualified name of the function.
        kind: Span kind, defaults to INTERNAL.
        attributes: Static span attributes.
        attribute_getter: Called with the wrapped function's arguments and
            returns extra attributes, e.g. the table name of a builder.

    Example:
        >>> @traced(attribute_getter=lambda builder: {"db.sql.table": builder.table_name})
        ... def build(self) -> str:
        ...     ...
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            with tracer.start_as_current_span(
                name,
                kind=kind,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                span.set_attributes(_span_attributes(attributes, attribute_getter, args, kwargs))

                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

                if isinstance(result, str):
                    span.set_attribute("db.statement.length", len(result))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
