"""Query builder module for DML generation.

Query builders accumulate the clauses of one statement through chained calls
and render it as SQL text. They do NOT execute queries: the rendered text,
with escapable literals wrapped in the escape delimiter, is handed to a
driver, which escapes the marked spans (see ``escape_marked_literals``).

Architecture:
    - values.py: Value encoder and structured literals
    - operators.py: Comparison operator validation
    - clauses.py: WHERE/HAVING clause types and argument parsing
    - base.py: Dialect-neutral builder state and validation
    - mysql/: MySQL renderers
    - factory.py: Builder creation from a dialect identifier

Example:
    >>> from fluentsql.query_builder import get_query_builder
    >>>
    >>> builder = get_query_builder("mysql")
    >>> builder.table("users").select("name").where("id", 5).build()
    'SELECT name FROM users WHERE id = 5'
"""

from fluentsql.query_builder.base import BaseQueryBuilder, JoinSpec
from fluentsql.query_builder.clauses import (
    BetweenClause,
    Clause,
    ComparisonClause,
    MembershipClause,
    between,
    binary,
    ternary,
)
from fluentsql.query_builder.factory import (
    QueryBuilderFactory,
    get_mysql_query_builder,
    get_query_builder,
)
from fluentsql.query_builder.mysql import MySqlQueryBuilder
from fluentsql.query_builder.operators import is_valid_operator, normalize_operator
from fluentsql.query_builder.values import (
    EscapableLiteral,
    RawLiteral,
    SqlLiteral,
    encode_value,
    escape_marked_literals,
)

__all__ = [
    "BaseQueryBuilder",
    "JoinSpec",
    "MySqlQueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
    "get_mysql_query_builder",
    "Clause",
    "ComparisonClause",
    "BetweenClause",
    "MembershipClause",
    "binary",
    "ternary",
    "between",
    "is_valid_operator",
    "normalize_operator",
    "SqlLiteral",
    "RawLiteral",
    "EscapableLiteral",
    "encode_value",
    "escape_marked_literals",
]
