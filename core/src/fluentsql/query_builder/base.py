from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union, TYPE_CHECKING

from fluentsql.common import (
    invalid_argument_error,
    logic_error,
    missing_state_error,
    type_mismatch_error,
)
from fluentsql.constants import (
    Dialect,
    JoinType,
    OperatorContext,
    QueryType,
    SortDirection,
)
from fluentsql.logging import get_logger
from fluentsql.query_builder.clauses import (
    Clause,
    clause_from_parts,
    membership_clause,
    parse_clauses,
)
from fluentsql.query_builder.operators import is_valid_operator, normalize_operator
from fluentsql.query_builder.values import SqlLiteral, check_delimiter, encode_value
from fluentsql.settings import BuilderSettings, get_settings
from fluentsql.utils.decorators import traced

if TYPE_CHECKING:
    from fluentsql.utils.sql import StatementInfo

logger = get_logger(__name__)

# A WHERE segment is (connective, content). Content is either a clause or
# verbatim text stored by where_raw(). The first segment has no connective.
WhereSegment = Tuple[Optional[str], Union[Clause, str]]


class JoinSpec(NamedTuple):
    """One JOIN entry, rendered as ``<kind> JOIN table ON left operator right``."""

    kind: JoinType
    table: str
    left: str
    operator: str
    right: str


def _build_span_attributes(builder: "BaseQueryBuilder") -> Dict[str, Any]:
    return {
        "db.system": builder.dialect.value,
        "db.operation": builder.query_type.value if builder.query_type else None,
        "db.sql.table": builder.table_name,
    }


class BaseQueryBuilder(ABC):
    """Fluent builder for a single DML statement.

    The builder accumulates clauses through chained calls, each returning the
    builder itself, and renders exactly one SELECT, UPDATE, INSERT or DELETE
    statement on ``build()``. The statement kind is fixed by the first of
    ``select`` (or an aggregate shorthand), ``update``, ``insert`` or
    ``delete``.

    This class owns the dialect-neutral state and all argument validation.
    Dialect subclasses implement the ``_build_*`` renderers.

    Values are never interpolated raw: every value goes through
    ``encode_value`` and caller-supplied text is wrapped in the escape
    delimiter, so the execution layer can escape exactly those spans.

    Example:
        >>> builder = MySqlQueryBuilder()
        >>> builder.table("users").select(["id", "name"]).where("id", ">", 10).build()
        'SELECT id, name FROM users WHERE id > 10'
    """

    dialect: Dialect

    def __init__(
        self,
        table: Optional[str] = None,
        escape_delimiter: Optional[str] = None,
        settings: Optional[BuilderSettings] = None,
    ):
        """Initialize an empty builder.

        Args:
            table: Optional target table, same as calling ``table()``
            escape_delimiter: Marker wrapped around escapable literals.
                Defaults to ``escape_delimiter`` from settings.
            settings: Settings instance, defaults to ``get_settings()``
        """
        self.settings = settings or get_settings()
        self._delimiter = escape_delimiter or self.settings.escape_delimiter

        self._table: Optional[str] = None
        self._query_type: Optional[QueryType] = None

        self._select: List[str] = []
        self._distinct = False
        self._joins: List[JoinSpec] = []
        self._where: List[WhereSegment] = []
        self._group_by: Optional[str] = None
        self._having: Optional[Clause] = None
        self._order_by: Dict[str, SortDirection] = {}
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

        self._update: Dict[str, SqlLiteral] = {}
        self._insert_fields: List[str] = []
        self._insert_rows: List[List[SqlLiteral]] = []
        self._delete_modifier: Any = None

        if table is not None:
            self.table(table)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def query_type(self) -> Optional[QueryType]:
        return self._query_type

    @property
    def table_name(self) -> Optional[str]:
        return self._table

    def get_delimiter(self) -> str:
        """Return the escape delimiter used when rendering."""
        return self._delimiter

    def literals(self) -> List[SqlLiteral]:
        """Return the escapable literals of the statement in render order."""
        sources: List[SqlLiteral] = []
        where_literals = [
            literal
            for _, content in self._where
            if isinstance(content, Clause)
            for literal in content.literals()
        ]

        if self._query_type == QueryType.SELECT:
            sources.extend(where_literals)
            if self._group_by is not None and self._having is not None:
                sources.extend(self._having.literals())
        elif self._query_type == QueryType.UPDATE:
            sources.extend(self._update.values())
            sources.extend(where_literals)
        elif self._query_type == QueryType.INSERT:
            for row in self._insert_rows:
                sources.extend(row)
        elif self._query_type == QueryType.DELETE:
            sources.extend(where_literals)

        return [literal for literal in sources if literal.escapable]

    def _method(self, name: str) -> str:
        return f"{type(self).__name__}.{name}"

    def _set_query_type(self, query_type: QueryType) -> None:
        if self._query_type is not None and self._query_type != query_type:
            raise logic_error(
                f"Query kind is already {self._query_type.value}; "
                f"cannot switch to {query_type.value}",
                subject=self._table,
            )
        self._query_type = query_type

    # ------------------------------------------------------------------
    # Target and projection
    # ------------------------------------------------------------------

    def table(self, name: str) -> "BaseQueryBuilder":
        """Set the target table.

        Raises:
            FluentSQLError: TYPE_MISMATCH if ``name`` is not a string
        """
        if not isinstance(name, str):
            raise type_mismatch_error("table", name, "str")
        self._table = name
        return self

    def select(self, fields: Union[str, Sequence[Any], None] = None) -> "BaseQueryBuilder":
        """Add fields to the projection and make this a SELECT.

        Non-string elements of a list are dropped. An empty projection
        renders as ``*``.

        Args:
            fields: A field name, a list of field names, or None

        Raises:
            FluentSQLError: TYPE_MISMATCH for an unsupported argument type,
                INVALID_ARGUMENT when a non-empty list has no string element
        """
        if fields is None:
            names: List[str] = []
        elif isinstance(fields, str):
            names = [fields]
        elif isinstance(fields, (list, tuple)):
            names = [field for field in fields if isinstance(field, str)]
            if fields and not names:
                raise invalid_argument_error(
                    f"None of the fields passed to `{self._method('select')}()` is a string",
                    parameter="fields",
                    value=fields,
                )
        else:
            raise type_mismatch_error("fields", fields, "str or list of str")

        self._set_query_type(QueryType.SELECT)
        self._select.extend(names)
        return self

    def distinct(self) -> "BaseQueryBuilder":
        """Render ``SELECT DISTINCT``."""
        self._distinct = True
        return self

    def _aggregate(self, function: str, field: Any) -> "BaseQueryBuilder":
        if not isinstance(field, str):
            raise type_mismatch_error("field", field, "str")
        return self.select(f"{function}({field})")

    def count(self, field: Optional[str] = None) -> "BaseQueryBuilder":
        """Add ``COUNT(field)``, or ``COUNT(*)`` when no field is given."""
        if field is None:
            return self.select("COUNT(*)")
        return self._aggregate("COUNT", field)

    def max(self, field: str) -> "BaseQueryBuilder":
        return self._aggregate("MAX", field)

    def min(self, field: str) -> "BaseQueryBuilder":
        return self._aggregate("MIN", field)

    def sum(self, field: str) -> "BaseQueryBuilder":
        return self._aggregate("SUM", field)

    def avg(self, field: str) -> "BaseQueryBuilder":
        return self._aggregate("AVG", field)

    def round(self, field: str, decimals: int = 0) -> "BaseQueryBuilder":
        """Add ``ROUND(field, decimals)``."""
        if not isinstance(field, str):
            raise type_mismatch_error("field", field, "str")
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise type_mismatch_error("decimals", decimals, "int")
        return self.select(f"ROUND({field}, {decimals})")

    def greatest(self, fields: Sequence[str]) -> "BaseQueryBuilder":
        """Add ``GREATEST(f1, f2, ...)``.

        Raises:
            FluentSQLError: TYPE_MISMATCH if ``fields`` is not a list,
                INVALID_ARGUMENT with fewer than 2 fields or non-string fields
        """
        if not isinstance(fields, (list, tuple)):
            raise type_mismatch_error("fields", fields, "list of str")
        if len(fields) < 2:
            raise invalid_argument_error(
                f"`{self._method('greatest')}()` needs at least 2 fields, got {len(fields)}",
                parameter="fields",
                value=fields,
            )
        if not all(isinstance(field, str) for field in fields):
            raise invalid_argument_error(
                f"Fields passed to `{self._method('greatest')}()` must all be strings",
                parameter="fields",
                value=fields,
            )
        return self.select(f"GREATEST({', '.join(fields)})")

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(
        self,
        table: str,
        left: str,
        operator: str,
        right: str,
        kind: Union[JoinType, str] = JoinType.INNER,
    ) -> "BaseQueryBuilder":
        """Append a JOIN.

        Args:
            table: Joined table
            left: Left-hand field of the ON condition
            operator: Comparison operator, one of ``= > >= < <= != LIKE``
            right: Right-hand field of the ON condition
            kind: INNER, LEFT, RIGHT or FULL OUTER

        Raises:
            FluentSQLError: TYPE_MISMATCH for non-string arguments,
                INVALID_ARGUMENT for an invalid operator or join kind
        """
        for parameter, value in (("table", table), ("left", left), ("operator", operator), ("right", right)):
            if not isinstance(value, str):
                raise type_mismatch_error(parameter, value, "str")

        if not is_valid_operator(operator, OperatorContext.JOIN):
            raise invalid_argument_error(
                f"Operator {operator!r} passed to `{self._method('join')}()` is invalid",
                parameter="operator",
                value=operator,
            )

        if not isinstance(kind, str):
            raise type_mismatch_error("kind", kind, "str")
        try:
            join_type = JoinType(kind.strip().upper())
        except ValueError:
            raise invalid_argument_error(
                f"Join type {kind!r} is invalid: expected one of "
                f"{', '.join(member.value for member in JoinType)}",
                parameter="kind",
                value=kind,
            )

        self._joins.append(JoinSpec(join_type, table, left, normalize_operator(operator), right))
        return self

    def left_join(self, table: str, left: str, operator: str, right: str) -> "BaseQueryBuilder":
        return self.join(table, left, operator, right, JoinType.LEFT)

    def right_join(self, table: str, left: str, operator: str, right: str) -> "BaseQueryBuilder":
        return self.join(table, left, operator, right, JoinType.RIGHT)

    def full_outer_join(self, table: str, left: str, operator: str, right: str) -> "BaseQueryBuilder":
        return self.join(table, left, operator, right, JoinType.FULL_OUTER)

    # ------------------------------------------------------------------
    # WHERE
    # ------------------------------------------------------------------

    def _check_clauses(self, clauses: List[Clause], method: str) -> List[Clause]:
        for clause in clauses:
            for literal in clause.literals():
                check_delimiter(literal, self._delimiter, method)
        return clauses

    def _append_where(self, connective: str, clauses: List[Clause]) -> None:
        for clause in clauses:
            self._where.append((connective if self._where else None, clause))

    def where(self, *args: Any) -> "BaseQueryBuilder":
        """Add conditions joined to the existing ones with AND.

        Accepts ``(field, value)``, ``(field, operator, value)``, a list of
        such 2/3-element lists, or clause objects. ``BETWEEN`` takes a
        2-element list as its value.

        Raises:
            FluentSQLError: INVALID_ARGUMENT naming the malformed part
        """
        method = self._method("where")
        self._append_where("AND", self._check_clauses(parse_clauses(args, method), method))
        return self

    def or_where(self, *args: Any) -> "BaseQueryBuilder":
        """Same as ``where()`` but joins the conditions with OR."""
        method = self._method("or_where")
        self._append_where("OR", self._check_clauses(parse_clauses(args, method), method))
        return self

    def where_in(self, field: str, values: Sequence[Any]) -> "BaseQueryBuilder":
        """Add ``field IN(v1, v2, ...)`` joined with AND."""
        method = self._method("where_in")
        clause = membership_clause(field, values, method)
        self._append_where("AND", self._check_clauses([clause], method))
        return self

    def where_not_in(self, field: str, values: Sequence[Any]) -> "BaseQueryBuilder":
        """Add ``field NOT IN(v1, v2, ...)`` joined with AND."""
        method = self._method("where_not_in")
        clause = membership_clause(field, values, method, negated=True)
        self._append_where("AND", self._check_clauses([clause], method))
        return self

    def where_raw(self, text: str) -> "BaseQueryBuilder":
        """Replace the whole WHERE part with ``text``.

        The text is used verbatim and must include the ``WHERE`` keyword.
        Later ``where()``/``or_where()`` calls append to it.
        """
        if not isinstance(text, str):
            raise type_mismatch_error("text", text, "str")
        self._where = [(None, text)] if text.strip() else []
        return self

    # ------------------------------------------------------------------
    # GROUP BY / HAVING / ORDER BY / LIMIT
    # ------------------------------------------------------------------

    def group_by(self, field: str) -> "BaseQueryBuilder":
        if not isinstance(field, str):
            raise type_mismatch_error("field", field, "str")
        self._group_by = field
        return self

    def having(self, field: str, operator: str, value: Any) -> "BaseQueryBuilder":
        """Set the HAVING condition. It is rendered only with a GROUP BY."""
        method = self._method("having")
        clause = clause_from_parts((field, operator, value), method, OperatorContext.HAVING)
        self._having = self._check_clauses([clause], method)[0]
        return self

    def order_by(self, field: str, direction: Union[SortDirection, str] = SortDirection.ASC) -> "BaseQueryBuilder":
        """Add a sort key. Repeating a field overwrites its direction.

        Raises:
            FluentSQLError: INVALID_ARGUMENT unless direction is ASC or DESC
        """
        if not isinstance(field, str):
            raise type_mismatch_error("field", field, "str")
        if not isinstance(direction, str):
            raise type_mismatch_error("direction", direction, "str")
        try:
            self._order_by[field] = SortDirection(direction.strip().upper())
        except ValueError:
            raise invalid_argument_error(
                f"Direction {direction!r} passed to `{self._method('order_by')}()` is invalid: "
                "expected ASC or DESC",
                parameter="direction",
                value=direction,
            )
        return self

    def limit(self, limit: int, offset: Optional[int] = None) -> "BaseQueryBuilder":
        """Limit the number of rows, optionally skipping ``offset`` rows."""
        for parameter, value in (("limit", limit), ("offset", offset)):
            if value is None and parameter == "offset":
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise type_mismatch_error(parameter, value, "int")
            if value < 0:
                raise invalid_argument_error(
                    f"`{self._method('limit')}()` needs a non-negative {parameter}, got {value}",
                    parameter=parameter,
                    value=value,
                )
        self._limit = limit
        self._offset = offset
        return self

    def first(self) -> "BaseQueryBuilder":
        """Shorthand for ``limit(1, 0)``."""
        return self.limit(1, 0)

    # ------------------------------------------------------------------
    # UPDATE / INSERT / DELETE
    # ------------------------------------------------------------------

    def update(self, values: Dict[str, Any]) -> "BaseQueryBuilder":
        """Make this an UPDATE setting each field to its encoded value."""
        if not isinstance(values, dict):
            raise type_mismatch_error("values", values, "dict")

        method = self._method("update")
        encoded: Dict[str, SqlLiteral] = {}
        for field, value in values.items():
            if not isinstance(field, str):
                raise type_mismatch_error("field", field, "str")
            encoded[field] = encode_value(value, method, self._delimiter)

        self._set_query_type(QueryType.UPDATE)
        self._update.update(encoded)
        return self

    def insert(
        self,
        fields: Union[Sequence[str], Dict[str, Any]],
        rows: Optional[Sequence[Sequence[Any]]] = None,
    ) -> "BaseQueryBuilder":
        """Make this an INSERT of one or more rows.

        Args:
            fields: Column names, or a ``{column: value}`` mapping for a
                single row
            rows: One sequence of values per row, each as long as ``fields``

        Raises:
            FluentSQLError: TYPE_MISMATCH for wrong argument types,
                INVALID_ARGUMENT when a row length doesn't match ``fields``
        """
        if isinstance(fields, dict) and rows is None:
            return self.insert(list(fields.keys()), [list(fields.values())])

        if not isinstance(fields, (list, tuple)):
            raise type_mismatch_error("fields", fields, "list of str")
        for field in fields:
            if not isinstance(field, str):
                raise type_mismatch_error("field", field, "str")
        if not isinstance(rows, (list, tuple)):
            raise type_mismatch_error("rows", rows, "list of lists")

        method = self._method("insert")
        encoded_rows: List[List[SqlLiteral]] = []
        for index, row in enumerate(rows):
            if not isinstance(row, (list, tuple)):
                raise type_mismatch_error(f"rows[{index}]", row, "list")
            if len(row) != len(fields):
                raise invalid_argument_error(
                    f"Row {index} passed to `{method}()` has {len(row)} values, "
                    f"expected {len(fields)} to match the fields",
                    parameter="rows",
                    value=row,
                )
            encoded_rows.append([encode_value(value, method, self._delimiter) for value in row])

        self._set_query_type(QueryType.INSERT)
        self._insert_fields = list(fields)
        self._insert_rows = encoded_rows
        return self

    def delete(self, modifier: Any = None) -> "BaseQueryBuilder":
        """Make this a DELETE, with an optional dialect-specific modifier."""
        resolved = self._resolve_delete_modifier(modifier)
        self._set_query_type(QueryType.DELETE)
        self._delete_modifier = resolved
        return self

    # ------------------------------------------------------------------
    # Rendering helpers shared by dialects
    # ------------------------------------------------------------------

    def _render_where(self) -> str:
        parts = []
        for connective, content in self._where:
            if isinstance(content, str):
                text = content
            else:
                text = content.render(self._delimiter)
                if connective is None:
                    text = f"WHERE {text}"
            parts.append(f"{connective} {text}" if connective else text)
        return " ".join(parts)

    def _render_order_by(self) -> str:
        if not self._order_by:
            return ""
        keys = ", ".join(f"{field} {direction.value}" for field, direction in self._order_by.items())
        return f"ORDER BY {keys}"

    def _render_projection(self) -> str:
        return ", ".join(self._select) if self._select else "*"

    @staticmethod
    def _join_parts(*parts: str) -> str:
        return " ".join(part for part in parts if part)

    # ------------------------------------------------------------------
    # Dialect hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _resolve_delete_modifier(self, modifier: Any) -> Any:
        """Validate and normalize a DELETE modifier.

        Raises:
            FluentSQLError: INVALID_ARGUMENT for unsupported modifiers
        """
        pass

    @abstractmethod
    def _render_limit(self) -> str:
        """Render the LIMIT part, or an empty string."""
        pass

    @abstractmethod
    def _build_select(self) -> str:
        """Build SELECT statement."""
        pass

    @abstractmethod
    def _build_update(self) -> str:
        """Build UPDATE statement."""
        pass

    @abstractmethod
    def _build_insert(self) -> str:
        """Build INSERT statement."""
        pass

    @abstractmethod
    def _build_delete(self) -> str:
        """Build DELETE statement."""
        pass

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    @traced(attribute_getter=_build_span_attributes)
    def build(self) -> str:
        """Render the statement.

        Rendering only reads the accumulated state, so calling it again
        without further changes returns the same string.

        Returns:
            SQL text with escapable literals wrapped in the escape delimiter

        Raises:
            FluentSQLError: MISSING_STATE if no statement kind was chosen,
                the target table is missing, or an UPDATE/INSERT has no
                payload
        """
        if self._query_type is None:
            raise missing_state_error(
                "Cannot build a query before choosing select/update/insert/delete",
                state="query_type",
            )
        if self._table is None:
            raise missing_state_error(
                "Cannot build the query without a target table",
                state="table",
            )

        query_mapping = {
            QueryType.SELECT: self._build_select,
            QueryType.UPDATE: self._build_update,
            QueryType.INSERT: self._build_insert,
            QueryType.DELETE: self._build_delete,
        }

        query = query_mapping[self._query_type]()
        logger.debug(
            "Rendered %s statement for table %s",
            self._query_type.value,
            self._table,
            extra={"query_type": self._query_type.value, "table": self._table},
        )
        return query

    def inspect(self) -> "StatementInfo":
        """Render the statement and describe it with sqlglot."""
        from fluentsql.utils.sql import StatementInspector

        inspector = StatementInspector(dialect=self.dialect, delimiter=self._delimiter)
        return inspector.inspect(self.build())

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        query_type = self._query_type.value if self._query_type else None
        return f"<{type(self).__name__} type={query_type} table={self._table!r}>"

    # camelCase aliases
    orWhere = or_where
    whereIn = where_in
    whereNotIn = where_not_in
    whereRaw = where_raw
    leftJoin = left_join
    rightJoin = right_join
    fullOuterJoin = full_outer_join
    groupBy = group_by
    orderBy = order_by
