"""Structured logging for fluentsql.

Records are rendered as one JSON object per line. Attributes passed through
``extra=`` (table names, error codes, clamped values) become top-level keys,
and the ids of the active OpenTelemetry span are attached when there is one.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional

from fluentsql.telemetry import current_span_ids

_STANDARD_ATTRIBUTES: FrozenSet[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"asctime", "message"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that keeps ``extra`` attributes as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRIBUTES and key not in payload
        )
        for key, value in current_span_ids().items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _logging_config(level: str, stream: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "fluentsql_json": {"()": CustomJsonFormatter},
        },
        "filters": {
            "fluentsql_context": {"()": "fluentsql.logging.filters.ContextFilter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "fluentsql_json",
                "filters": ["fluentsql_context"],
                "stream": stream,
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: Optional[str] = None, stream: str = "ext://sys.stdout") -> None:
    """Configure JSON logging on the root logger via ``dictConfig``.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``log_level`` from the active settings.
        stream: Handler stream in ``dictConfig`` notation.
    """
    if level is None:
        from fluentsql.settings import get_settings
        level = get_settings().log_level

    logging.config.dictConfig(_logging_config(level.upper(), stream))
