"""fluentsql: fluent MySQL query and schema builder.

Builders accumulate a statement through chained calls and render it as SQL
text on ``build()``. They never talk to a database: string literals are
wrapped in an escape delimiter so the driver can escape them right before
execution.

Example:
    >>> from fluentsql import get_query_builder, Field, Table
    >>>
    >>> get_query_builder().table("users").select(["id", "name"]).where("id", ">", 10).build()
    'SELECT id, name FROM users WHERE id > 10'
    >>>
    >>> Table("users", [Field("id").integer(), Field("name").varchar(64)]).build()
    'CREATE TABLE IF NOT EXISTS users (id INT(11), name VARCHAR(64)) CHARACTER SET utf8 COLLATE utf8_unicode_ci ENGINE=InnoDB;'
"""

from fluentsql.__version__ import __version__
from fluentsql.common import ErrorCode, FluentSQLError
from fluentsql.query_builder import (
    BaseQueryBuilder,
    MySqlQueryBuilder,
    QueryBuilderFactory,
    encode_value,
    escape_marked_literals,
    get_mysql_query_builder,
    get_query_builder,
)
from fluentsql.schema import Field, SchemaCache, Table

__all__ = [
    "__version__",
    "ErrorCode",
    "FluentSQLError",
    "BaseQueryBuilder",
    "MySqlQueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
    "get_mysql_query_builder",
    "encode_value",
    "escape_marked_literals",
    "Field",
    "Table",
    "SchemaCache",
]
