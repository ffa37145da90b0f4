"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of log lines emitted while a statement is assembled.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

from fluentsql.__version__ import __version__

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
dialect_var: ContextVar[Optional[str]] = ContextVar("dialect", default=None)

_static_context: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Request-scoped values come from context variables. Process-wide values
    come from ``set_logging_context``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "request_id", request_id_var.get())
        setattr(record, "dialect", dialect_var.get())
        setattr(record, "sdk_name", "fluentsql")
        setattr(record, "sdk_version", __version__)

        for key, value in _static_context.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Replace the static context attached to every record.

    Args:
        environment: Deployment environment name, omitted when None
        extra: Additional static attributes
    """
    _static_context.clear()
    if environment is not None:
        _static_context["environment"] = environment
    if extra:
        _static_context.update(extra)


def set_request_context(
    request_id: Optional[str] = None,
    dialect: Optional[str] = None,
) -> None:
    """Set request context variables."""
    if request_id is not None:
        request_id_var.set(request_id)
    if dialect is not None:
        dialect_var.set(dialect)


def clear_request_context() -> None:
    """Clear all request context variables."""
    request_id_var.set(None)
    dialect_var.set(None)


@contextmanager
def request_context(
    request_id: Optional[str] = None,
    dialect: Optional[str] = None,
) -> Iterator[None]:
    """Scope request context variables to a ``with`` block.

    Example:
        >>> with request_context(request_id="req-1", dialect="mysql"):
        ...     builder.build()
    """
    tokens = [
        (request_id_var, request_id_var.set(request_id)),
        (dialect_var, dialect_var.set(dialect)),
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
