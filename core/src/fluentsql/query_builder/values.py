"""SQL literal encoding.

Every value that ends up in a rendered statement goes through
``encode_value``. The result is a structured literal:

- ``RawLiteral`` for text that is emitted verbatim (``NULL``, ``TRUE``,
  ``FALSE`` and numbers).
- ``EscapableLiteral`` for caller-supplied text that the execution layer
  must escape before it reaches the database.

Escapable literals render as ``'<d>text<d>'`` where ``<d>`` is the escape
delimiter. ``escape_marked_literals`` finds those spans in rendered SQL and
hands their contents to a driver escape function.
"""

import json
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Optional

from fluentsql.common import encoding_error
from fluentsql.constants import DEFAULT_ESCAPE_DELIMITER, NULL


@dataclass(frozen=True)
class SqlLiteral:
    """A literal ready to be placed in a SQL statement."""

    text: str

    escapable = False

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class RawLiteral(SqlLiteral):
    """Literal emitted exactly as stored."""

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        return self.text


@dataclass(frozen=True)
class EscapableLiteral(SqlLiteral):
    """Quoted literal whose inner text still needs driver-level escaping."""

    escapable = True

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        """Wrap the text in ``delimiter`` markers.

        Raises:
            FluentSQLError: ENCODING_ERROR if the text contains ``delimiter``
        """
        check_delimiter(self, delimiter, "render")
        return f"'{delimiter}{self.text}{delimiter}'"


NULL_LITERAL = RawLiteral(NULL)
TRUE_LITERAL = RawLiteral("TRUE")
FALSE_LITERAL = RawLiteral("FALSE")


def is_scalar(value: Any) -> bool:
    """Return True for values that encode without serialization."""
    return value is None or isinstance(
        value, (str, bool, int, float, Decimal, date, time, SqlLiteral)
    )


def check_delimiter(literal: SqlLiteral, delimiter: str, method: str) -> SqlLiteral:
    """Reject an escapable literal whose text contains the escape delimiter.

    Such text would close the marked span early and leave the rest of it
    outside the part handed to the driver escape function.

    Raises:
        FluentSQLError: ENCODING_ERROR naming ``method``
    """
    if literal.escapable and delimiter in literal.text:
        raise encoding_error(
            method,
            literal.text,
            details={"reason": "contains the escape delimiter", "delimiter": delimiter},
        )
    return literal


def _encode_temporal(value: Any) -> EscapableLiteral:
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return EscapableLiteral(value.isoformat(sep=" "))
    return EscapableLiteral(value.isoformat())


def _encode_composite(value: Any, method: str) -> EscapableLiteral:
    try:
        text = json.dumps(value, sort_keys=True)
        restored = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise encoding_error(method, value, cause=exc)

    if restored != value:
        raise encoding_error(method, value)
    return EscapableLiteral(text)


def encode_value(
    value: Any,
    method: str = "encode_value",
    delimiter: Optional[str] = None,
) -> SqlLiteral:
    """Encode a Python value as a SQL literal.

    Args:
        value: Value to encode
        method: Name of the builder method the value was passed to. It is
            reported in the error raised for values that cannot be encoded.
        delimiter: Escape delimiter the literal will be rendered with. When
            given, text containing it is rejected right away.

    Returns:
        RawLiteral or EscapableLiteral

    Raises:
        FluentSQLError: ENCODING_ERROR if the value is not a scalar and does
            not survive a JSON round trip unchanged, or if its text contains
            ``delimiter``.

    Example:
        >>> encode_value("ciaone").render()
        "'{esc}ciaone{esc}'"
        >>> encode_value(None).render()
        'NULL'
    """
    literal = _encode(value, method)
    if delimiter is not None:
        check_delimiter(literal, delimiter, method)
    return literal


def _encode(value: Any, method: str) -> SqlLiteral:
    if isinstance(value, SqlLiteral):
        return value
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, int):
        return RawLiteral(str(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise encoding_error(method, value)
        return RawLiteral(str(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise encoding_error(method, value)
        return RawLiteral(repr(value))
    if isinstance(value, str):
        return EscapableLiteral(value)
    if isinstance(value, (date, time)):
        return _encode_temporal(value)
    if isinstance(value, (list, dict)):
        return _encode_composite(value, method)

    raise encoding_error(method, value)


def escape_marked_literals(
    sql: str,
    escape: Callable[[str], str],
    delimiter: str = DEFAULT_ESCAPE_DELIMITER,
) -> str:
    """Replace every delimiter-marked span in ``sql`` with its escaped text.

    This is the hand-off point to the driver: ``escape`` is typically the
    connection's string escaping function.

    Args:
        sql: Rendered statement
        escape: Function escaping the inner text of a literal
        delimiter: Escape delimiter used when the statement was rendered

    Returns:
        Statement with delimiters removed and literal contents escaped
    """
    marker = re.escape(delimiter)
    pattern = re.compile(f"{marker}(.*?){marker}", re.DOTALL)
    return pattern.sub(lambda match: escape(match.group(1)), sql)
