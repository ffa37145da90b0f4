"""Constants module for fluentsql.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other fluentsql modules.

Organization:
    - sql: statement kinds, join kinds, directions, modifiers, operators
    - schema: column types and their length/decimals limits
    - dialect: supported SQL dialects
"""

from fluentsql.constants.sql import (
    QueryType,
    TableMode,
    AlterAction,
    JoinType,
    SortDirection,
    DeleteModifier,
    OperatorContext,
    JOIN_OPERATORS,
    CONDITION_OPERATORS,
    BETWEEN,
    DEFAULT_ESCAPE_DELIMITER,
)

from fluentsql.constants.schema import (
    FieldType,
    RealTypeLimits,
    INTEGER_TYPES,
    REAL_TYPES,
    NUMERIC_TYPES,
    SIZED_STRING_TYPES,
    INTEGER_LENGTHS,
    REAL_LIMITS,
    STRING_DEFAULT_LENGTHS,
    MAX_STRING_LENGTH,
    NULL,
)

from fluentsql.constants.dialect import Dialect

__all__ = [
    # SQL
    "QueryType",
    "TableMode",
    "AlterAction",
    "JoinType",
    "SortDirection",
    "DeleteModifier",
    "OperatorContext",
    "JOIN_OPERATORS",
    "CONDITION_OPERATORS",
    "BETWEEN",
    "DEFAULT_ESCAPE_DELIMITER",
    # Schema
    "FieldType",
    "RealTypeLimits",
    "INTEGER_TYPES",
    "REAL_TYPES",
    "NUMERIC_TYPES",
    "SIZED_STRING_TYPES",
    "INTEGER_LENGTHS",
    "REAL_LIMITS",
    "STRING_DEFAULT_LENGTHS",
    "MAX_STRING_LENGTH",
    "NULL",
    # Dialect
    "Dialect",
]
