"""Statement inspection backed by SQLGlot.

Parses rendered statements to report their kind and the tables they touch.
Escape delimiters are stripped before parsing, so builder output can be
inspected as is.

Example:
    >>> inspector = StatementInspector()
    >>> info = inspector.inspect("SELECT * FROM users JOIN orders ON users.id = orders.user_id")
    >>> info.kind, info.tables
    ('SELECT', ['orders', 'users'])
"""

from typing import List, Optional, Union

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from fluentsql.common import invalid_argument_error, type_mismatch_error
from fluentsql.constants import DEFAULT_ESCAPE_DELIMITER, Dialect, QueryType
from fluentsql.logging import get_logger
from fluentsql.types import FluentSQLBaseModel

logger = get_logger(__name__)

_STATEMENT_KINDS = (
    (exp.Select, QueryType.SELECT),
    (exp.Update, QueryType.UPDATE),
    (exp.Insert, QueryType.INSERT),
    (exp.Delete, QueryType.DELETE),
)


class StatementInfo(FluentSQLBaseModel):
    """Kind of a DML statement and the tables it reads or writes."""

    kind: QueryType
    tables: List[str]


class StatementInspector:
    """Parses DML statements with SQLGlot.

    Attributes:
        dialect: SQLGlot dialect name used for parsing
        delimiter: Escape delimiter removed before parsing
    """

    def __init__(
        self,
        dialect: Union[Dialect, str] = Dialect.MYSQL,
        delimiter: Optional[str] = None,
    ):
        self.dialect = dialect.value if isinstance(dialect, Dialect) else dialect
        self.delimiter = delimiter or DEFAULT_ESCAPE_DELIMITER

    def _prepare(self, sql: str) -> str:
        if not isinstance(sql, str):
            raise type_mismatch_error("sql", sql, "str")
        return sql.replace(self.delimiter, "")

    def inspect(self, sql: str) -> StatementInfo:
        """Describe a single DML statement.

        Args:
            sql: Statement text, optionally with escape delimiters

        Returns:
            StatementInfo with the statement kind and sorted table names

        Raises:
            FluentSQLError: INVALID_ARGUMENT if the statement cannot be
                parsed or is not SELECT/UPDATE/INSERT/DELETE
        """
        prepared = self._prepare(sql)
        if not prepared.strip():
            raise invalid_argument_error("SQL statement must be a non-empty string", parameter="sql")

        try:
            parsed = sqlglot.parse_one(prepared, dialect=self.dialect)
        except (ParseError, TokenError) as exc:
            raise invalid_argument_error(
                f"Cannot parse SQL statement: {exc}",
                parameter="sql",
                cause=exc,
            )

        for expression_type, query_type in _STATEMENT_KINDS:
            if isinstance(parsed, expression_type):
                kind = query_type
                break
        else:
            raise invalid_argument_error(
                f"Unsupported statement kind: {type(parsed).__name__}",
                parameter="sql",
            )

        tables = sorted({table.name for table in parsed.find_all(exp.Table) if table.name})
        return StatementInfo(kind=kind, tables=tables)

    def is_valid(self, sql: str) -> bool:
        """Return True when SQLGlot can parse ``sql``."""
        prepared = self._prepare(sql)
        if not prepared.strip():
            return False
        try:
            sqlglot.parse_one(prepared, dialect=self.dialect)
        except (ParseError, TokenError) as exc:
            logger.debug("SQL statement failed to parse: %s", exc)
            return False
        return True
