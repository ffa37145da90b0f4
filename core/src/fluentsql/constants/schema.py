"""Column type constants for the schema builder.

Every MySQL column type the ``Field`` builder can declare lives here,
together with the length/decimals defaults used when a caller passes an
out-of-range value.
"""

from enum import Enum
from typing import Dict, FrozenSet, NamedTuple


class FieldType(str, Enum):
    """MySQL column types."""

    # Integer types
    INT = "INT"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    MEDIUMINT = "MEDIUMINT"
    BIGINT = "BIGINT"

    # Real types
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"

    # Date and time types
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    TIME = "TIME"

    # String types
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"
    TINYTEXT = "TINYTEXT"
    MEDIUMTEXT = "MEDIUMTEXT"
    LONGTEXT = "LONGTEXT"


class RealTypeLimits(NamedTuple):
    """Length/decimals defaults and maxima for a real-number type."""

    default_length: int
    max_length: int
    default_decimals: int
    max_decimals: int


INTEGER_TYPES: FrozenSet[FieldType] = frozenset({
    FieldType.INT,
    FieldType.TINYINT,
    FieldType.SMALLINT,
    FieldType.MEDIUMINT,
    FieldType.BIGINT,
})

REAL_TYPES: FrozenSet[FieldType] = frozenset({
    FieldType.FLOAT,
    FieldType.DOUBLE,
    FieldType.DECIMAL,
})

# Types that may be declared UNSIGNED or AUTO_INCREMENT.
NUMERIC_TYPES: FrozenSet[FieldType] = INTEGER_TYPES | REAL_TYPES

SIZED_STRING_TYPES: FrozenSet[FieldType] = frozenset({FieldType.CHAR, FieldType.VARCHAR})

# Display width defaults; also the upper bound of the accepted range.
INTEGER_LENGTHS: Dict[FieldType, int] = {
    FieldType.INT: 11,
    FieldType.TINYINT: 4,
    FieldType.SMALLINT: 5,
    FieldType.MEDIUMINT: 9,
    FieldType.BIGINT: 20,
}

REAL_LIMITS: Dict[FieldType, RealTypeLimits] = {
    FieldType.FLOAT: RealTypeLimits(10, 255, 2, 30),
    FieldType.DOUBLE: RealTypeLimits(16, 255, 4, 30),
    FieldType.DECIMAL: RealTypeLimits(10, 65, 0, 30),
}

STRING_DEFAULT_LENGTHS: Dict[FieldType, int] = {
    FieldType.CHAR: 1,
    FieldType.VARCHAR: 255,
}

MAX_STRING_LENGTH = 255

NULL = "NULL"
