"""Query Builder Factory.

This module provides a factory for creating dialect-specific query builders
from a dialect identifier, so callers can construct builders generically
without importing dialect modules.

Identifiers are matched case-insensitively and a trailing ``Query``,
``QueryBuilder`` or ``Driver`` suffix is ignored, so ``"mysql"``,
``"MySql"``, ``"MySqlQuery"`` and ``"MySqlDriver"`` all resolve to MySQL.
"""

import re
from typing import Dict, Optional, Type, Union

from fluentsql.common import unsupported_dialect_error
from fluentsql.constants import Dialect
from fluentsql.logging import get_logger
from fluentsql.query_builder.base import BaseQueryBuilder
from fluentsql.query_builder.mysql import MySqlQueryBuilder

logger = get_logger(__name__)

_SUFFIX_PATTERN = re.compile(r"(querybuilder|query|driver)$")

_BUILDERS: Dict[Dialect, Type[BaseQueryBuilder]] = {
    Dialect.MYSQL: MySqlQueryBuilder,
}


class QueryBuilderFactory:
    """Factory for creating dialect-specific query builders.

    Example:
        >>> builder = QueryBuilderFactory.create("MySqlQuery")
        >>> default = QueryBuilderFactory.create()  # dialect from settings
    """

    @staticmethod
    def resolve_dialect(dialect: Union[Dialect, str, None] = None) -> Dialect:
        """Resolve a dialect identifier.

        Args:
            dialect: A Dialect, an identifier string, or None to use the
                ``dialect`` setting

        Returns:
            The matching Dialect

        Raises:
            FluentSQLError: UNSUPPORTED_DIALECT if nothing matches
        """
        if isinstance(dialect, Dialect):
            return dialect

        if dialect is None:
            from fluentsql.settings import get_settings
            dialect = get_settings().dialect

        if not isinstance(dialect, str):
            raise unsupported_dialect_error(dialect, supported=[d.value for d in Dialect])

        name = _SUFFIX_PATTERN.sub("", dialect.strip().lower())
        try:
            return Dialect(name)
        except ValueError:
            raise unsupported_dialect_error(dialect, supported=[d.value for d in Dialect])

    @staticmethod
    def create(dialect: Union[Dialect, str, None] = None, **kwargs) -> BaseQueryBuilder:
        """Create a query builder for ``dialect``.

        Args:
            dialect: Dialect identifier, defaults to the ``dialect`` setting
            **kwargs: Passed to the builder constructor (``table``,
                ``escape_delimiter``, ``settings``)

        Returns:
            Dialect-specific query builder

        Raises:
            FluentSQLError: UNSUPPORTED_DIALECT for unknown identifiers
        """
        resolved = QueryBuilderFactory.resolve_dialect(dialect)
        builder_class = _BUILDERS[resolved]
        logger.debug("Creating %s for dialect %s", builder_class.__name__, resolved.value)
        return builder_class(**kwargs)

    @staticmethod
    def create_mysql_builder(**kwargs) -> MySqlQueryBuilder:
        """Create a MySQL query builder."""
        return MySqlQueryBuilder(**kwargs)


def get_query_builder(
    dialect: Union[Dialect, str, None] = None,
    table: Optional[str] = None,
) -> BaseQueryBuilder:
    """Get a query builder, optionally targeting ``table``.

    Example:
        >>> get_query_builder("mysql", table="users").select().build()
        'SELECT * FROM users'
    """
    return QueryBuilderFactory.create(dialect, table=table)


def get_mysql_query_builder(table: Optional[str] = None) -> MySqlQueryBuilder:
    """Get a MySQL query builder with full type information."""
    return QueryBuilderFactory.create_mysql_builder(table=table)
