"""Column definitions.

A ``Field`` is configured with exactly one type setter plus any number of
modifiers, then read by ``Table`` to render DDL or export descriptors.

Out-of-range lengths and decimals never raise: they fall back to the
type's default and a warning is logged.
"""

import math
from decimal import Decimal
from typing import Any, Dict, Optional

from fluentsql.common import (
    encoding_error,
    logic_error,
    missing_state_error,
    type_mismatch_error,
)
from fluentsql.constants import (
    INTEGER_LENGTHS,
    MAX_STRING_LENGTH,
    NULL,
    NUMERIC_TYPES,
    REAL_LIMITS,
    REAL_TYPES,
    STRING_DEFAULT_LENGTHS,
    FieldType,
)
from fluentsql.logging import get_logger
from fluentsql.schema.descriptors import FieldDescriptor

logger = get_logger(__name__)


def _coerce_int(value: Any) -> Optional[int]:
    """Return ``value`` as an int if it is an integer or a digit string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def _render_default(value: Any) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
    return str(value)


class Field:
    """One column of a table.

    Example:
        >>> Field("price").decimal(10, 2).not_null().to_sql()
        'price DECIMAL(10,2) NOT NULL'
    """

    NULL = NULL

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise type_mismatch_error("name", name, "str")

        self._name = name
        self._type: Optional[FieldType] = None
        self._length: Optional[int] = None
        self._decimals: Optional[int] = None
        self._default: Optional[str] = None
        self._nullable = True
        self._unsigned = False
        self._auto_increment = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def field_type(self) -> Optional[FieldType]:
        return self._type

    @property
    def length(self) -> Optional[int]:
        return self._length

    @property
    def decimals(self) -> Optional[int]:
        return self._decimals

    @property
    def default_value(self) -> Optional[str]:
        """Pre-rendered default literal, ``"NULL"`` for a NULL default."""
        return self._default

    @property
    def is_nullable(self) -> bool:
        return self._nullable

    @property
    def is_unsigned(self) -> bool:
        return self._unsigned

    @property
    def is_auto_increment(self) -> bool:
        return self._auto_increment

    def get_name(self) -> str:
        return self._name

    def _clamped(self, attribute: str, requested: Any, substitute: int) -> int:
        logger.warning(
            "Field %s: %s %r is out of range for %s, using %s",
            self._name,
            attribute,
            requested,
            self._type.value,
            substitute,
            extra={
                "field": self._name,
                "field_type": self._type.value,
                "attribute": attribute,
                "requested": repr(requested),
                "substituted": substitute,
            },
        )
        return substitute

    def _set_type(self, field_type: FieldType) -> None:
        self._type = field_type
        self._length = None
        self._decimals = None
        # UNSIGNED and AUTO_INCREMENT only exist on numeric types
        if field_type not in NUMERIC_TYPES:
            self._unsigned = False
            self._auto_increment = False

    # ------------------------------------------------------------------
    # Integer types
    # ------------------------------------------------------------------

    def _set_integer_type(self, field_type: FieldType, length: Any) -> "Field":
        self._set_type(field_type)
        default_length = INTEGER_LENGTHS[field_type]
        if length is None:
            self._length = default_length
            return self

        value = _coerce_int(length)
        if value is None or not 1 <= value <= default_length:
            value = self._clamped("length", length, default_length)
        self._length = value
        return self

    def integer(self, length: Any = None) -> "Field":
        """INT, display width 1..11 (default 11)."""
        return self._set_integer_type(FieldType.INT, length)

    def tiny_integer(self, length: Any = None) -> "Field":
        """TINYINT, display width 1..4 (default 4)."""
        return self._set_integer_type(FieldType.TINYINT, length)

    def small_integer(self, length: Any = None) -> "Field":
        """SMALLINT, display width 1..5 (default 5)."""
        return self._set_integer_type(FieldType.SMALLINT, length)

    def medium_integer(self, length: Any = None) -> "Field":
        """MEDIUMINT, display width 1..9 (default 9)."""
        return self._set_integer_type(FieldType.MEDIUMINT, length)

    def big_integer(self, length: Any = None) -> "Field":
        """BIGINT, display width 1..20 (default 20)."""
        return self._set_integer_type(FieldType.BIGINT, length)

    # ------------------------------------------------------------------
    # Real types
    # ------------------------------------------------------------------

    def _set_real_type(self, field_type: FieldType, length: Any, decimals: Any) -> "Field":
        """Resolve length and decimals for FLOAT, DOUBLE and DECIMAL.

        Decimals outside ``0..max_decimals`` fall back to the default
        decimals. The length is kept only if it is within
        ``1..max_length`` and strictly greater than the decimals; otherwise
        it becomes ``max(default_length, decimals + 1)``, so the length
        always exceeds the decimals.
        """
        self._set_type(field_type)
        limits = REAL_LIMITS[field_type]

        resolved_decimals = _coerce_int(decimals)
        if resolved_decimals is None or not 0 <= resolved_decimals <= limits.max_decimals:
            resolved_decimals = limits.default_decimals
            if decimals is not None:
                self._clamped("decimals", decimals, resolved_decimals)

        resolved_length = _coerce_int(length)
        if (
            resolved_length is None
            or not 1 <= resolved_length <= limits.max_length
            or resolved_length <= resolved_decimals
        ):
            resolved_length = max(limits.default_length, resolved_decimals + 1)
            if length is not None:
                self._clamped("length", length, resolved_length)

        self._length = resolved_length
        self._decimals = resolved_decimals
        return self

    def float(self, length: Any = None, decimals: Any = None) -> "Field":
        """FLOAT, length up to 255 (default 10), decimals up to 30 (default 2)."""
        return self._set_real_type(FieldType.FLOAT, length, decimals)

    def double(self, length: Any = None, decimals: Any = None) -> "Field":
        """DOUBLE, length up to 255 (default 16), decimals up to 30 (default 4)."""
        return self._set_real_type(FieldType.DOUBLE, length, decimals)

    def decimal(self, length: Any = None, decimals: Any = None) -> "Field":
        """DECIMAL, length up to 65 (default 10), decimals up to 30 (default 0)."""
        return self._set_real_type(FieldType.DECIMAL, length, decimals)

    # ------------------------------------------------------------------
    # Date and time types
    # ------------------------------------------------------------------

    def date(self) -> "Field":
        self._set_type(FieldType.DATE)
        return self

    def datetime(self) -> "Field":
        self._set_type(FieldType.DATETIME)
        return self

    def timestamp(self) -> "Field":
        self._set_type(FieldType.TIMESTAMP)
        return self

    def time(self) -> "Field":
        self._set_type(FieldType.TIME)
        return self

    # ------------------------------------------------------------------
    # String types
    # ------------------------------------------------------------------

    def _set_string_type(self, field_type: FieldType, length: Any) -> "Field":
        self._set_type(field_type)
        default_length = STRING_DEFAULT_LENGTHS[field_type]
        if length is None:
            self._length = default_length
            return self

        value = _coerce_int(length)
        if value is None or not 1 <= value <= MAX_STRING_LENGTH:
            value = self._clamped("length", length, default_length)
        self._length = value
        return self

    def char(self, length: Any = None) -> "Field":
        """CHAR, length 1..255 (default 1)."""
        return self._set_string_type(FieldType.CHAR, length)

    def varchar(self, length: Any = None) -> "Field":
        """VARCHAR, length 1..255 (default 255)."""
        return self._set_string_type(FieldType.VARCHAR, length)

    def text(self) -> "Field":
        self._set_type(FieldType.TEXT)
        return self

    def tiny_text(self) -> "Field":
        self._set_type(FieldType.TINYTEXT)
        return self

    def medium_text(self) -> "Field":
        self._set_type(FieldType.MEDIUMTEXT)
        return self

    def long_text(self) -> "Field":
        self._set_type(FieldType.LONGTEXT)
        return self

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def default(self, value: Any) -> "Field":
        """Set the default value.

        ``Field.NULL`` (or None) declares a NULL default. Strings are
        quoted, booleans become TRUE/FALSE and numbers are kept as is.

        Raises:
            FluentSQLError: TYPE_MISMATCH for non-scalar values,
                ENCODING_ERROR for NaN or infinite numbers, LOGIC_ERROR for a
                NULL default on a NOT NULL field
        """
        if value is None or value == NULL:
            if not self._nullable:
                raise logic_error(
                    "Cannot set default value to NULL if the field is NOT NULL",
                    subject=self._name,
                )
            self._default = NULL
            return self

        if not isinstance(value, (str, bool, int, float, Decimal)):
            raise type_mismatch_error("value", value, "str, bool, int or float")
        if isinstance(value, Decimal):
            finite = value.is_finite()
        else:
            finite = not isinstance(value, float) or math.isfinite(value)
        if not finite:
            raise encoding_error("Field.default", value)

        self._default = _render_default(value)
        return self

    def not_null(self) -> "Field":
        """Declare the field NOT NULL.

        Raises:
            FluentSQLError: LOGIC_ERROR if the default is NULL
        """
        if self._default == NULL:
            raise logic_error(
                "Cannot declare the field as NOT NULL if default value is set to NULL",
                subject=self._name,
            )
        self._nullable = False
        return self

    def unsigned(self) -> "Field":
        """Declare a numeric field UNSIGNED.

        Raises:
            FluentSQLError: LOGIC_ERROR for non-numeric types
        """
        if self._type not in NUMERIC_TYPES:
            raise logic_error("The field type cannot be declared UNSIGNED", subject=self._name)
        self._unsigned = True
        return self

    def auto_increment(self) -> "Field":
        """Declare a numeric field AUTO_INCREMENT.

        Raises:
            FluentSQLError: LOGIC_ERROR for non-numeric types
        """
        if self._type not in NUMERIC_TYPES:
            raise logic_error("The field type cannot be declared AUTO_INCREMENT", subject=self._name)
        self._auto_increment = True
        return self

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _require_type(self) -> FieldType:
        if self._type is None:
            raise missing_state_error(f"Type of field {self._name!r} isn't set", state="type")
        return self._type

    def type_definition(self) -> str:
        """Return the type with its size suffix, e.g. ``DECIMAL(10,2)``."""
        field_type = self._require_type()
        if field_type in REAL_TYPES:
            return f"{field_type.value}({self._length},{self._decimals})"
        if self._length is not None:
            return f"{field_type.value}({self._length})"
        return field_type.value

    def describe(self) -> FieldDescriptor:
        """Return the structured descriptor of this field."""
        return FieldDescriptor(
            type=self.type_definition(),
            default=self._default,
            not_null=not self._nullable,
            unsigned=self._unsigned,
            auto_increment=self._auto_increment,
        )

    def get_field(self) -> Dict[str, Dict[str, Any]]:
        """Return ``{name: descriptor}`` as plain dicts.

        Raises:
            FluentSQLError: MISSING_STATE if no type was set
        """
        return {self._name: self.describe().to_dict()}

    def to_sql(self) -> str:
        """Render the column definition used in CREATE and ALTER statements."""
        parts = [self._name, self.type_definition()]
        if self._default is not None:
            parts.append(f"DEFAULT {self._default}")
        if not self._nullable:
            parts.append("NOT NULL")
        if self._unsigned:
            parts.append("UNSIGNED")
        if self._auto_increment:
            parts.append("AUTO_INCREMENT")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_sql()

    def __repr__(self) -> str:
        field_type = self._type.value if self._type else None
        return f"<Field name={self._name!r} type={field_type}>"

    # camelCase aliases
    tinyInteger = tiny_integer
    smallInteger = small_integer
    mediumInteger = medium_integer
    bigInteger = big_integer
    tinyText = tiny_text
    mediumText = medium_text
    longText = long_text
    notNull = not_null
    autoIncrement = auto_increment
    getName = get_name
    getField = get_field
