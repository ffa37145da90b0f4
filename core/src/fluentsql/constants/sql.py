"""SQL and statement-related constants.

This module contains the enums describing which statement a builder renders
and the keyword vocabularies the builders validate against.

These constants sit at the bottom of the package so any module can use them
without creating circular imports.
"""

from enum import Enum
from typing import FrozenSet


class QueryType(str, Enum):
    """DML statement kinds a query builder can render.

    Exactly one kind is active per builder. It is chosen by whichever of
    ``select`` (or an aggregate shorthand), ``update``, ``insert`` or
    ``delete`` was called.
    """

    SELECT = "SELECT"
    UPDATE = "UPDATE"
    INSERT = "INSERT"
    DELETE = "DELETE"


class TableMode(str, Enum):
    """DDL statement kinds a table can render."""

    CREATE = "CREATE"
    DROP = "DROP"
    ALTER = "ALTER"


class AlterAction(str, Enum):
    """Buckets of an ALTER TABLE statement, in render order."""

    ADD = "ADD"
    DROP_COLUMN = "DROP COLUMN"


class JoinType(str, Enum):
    """Join kinds accepted by ``join()``."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL_OUTER = "FULL OUTER"


class SortDirection(str, Enum):
    """ORDER BY directions."""

    ASC = "ASC"
    DESC = "DESC"


class DeleteModifier(str, Enum):
    """MySQL DELETE modifiers. ``NONE`` renders nothing."""

    NONE = ""
    LOW_PRIORITY = "LOW_PRIORITY"
    QUICK = "QUICK"
    IGNORE = "IGNORE"


class OperatorContext(str, Enum):
    """Clause context an operator is validated against."""

    WHERE = "where"
    HAVING = "having"
    JOIN = "join"


JOIN_OPERATORS: FrozenSet[str] = frozenset({"=", ">", ">=", "<", "<=", "!=", "LIKE"})

CONDITION_OPERATORS: FrozenSet[str] = JOIN_OPERATORS | {"BETWEEN"}

BETWEEN = "BETWEEN"

DEFAULT_ESCAPE_DELIMITER = "{esc}"
