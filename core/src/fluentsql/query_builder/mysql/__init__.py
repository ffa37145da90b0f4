"""MySQL query builder."""

from fluentsql.query_builder.mysql.query_builder import MySqlQueryBuilder

__all__ = ["MySqlQueryBuilder"]
