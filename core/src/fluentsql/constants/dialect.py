"""Dialect constants."""

from enum import Enum


class Dialect(str, Enum):
    """SQL dialects a query builder can be created for.

    The value doubles as the sqlglot dialect name used when inspecting
    rendered statements.
    """

    MYSQL = "mysql"
