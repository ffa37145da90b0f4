"""MySQL query builder.

Renders the accumulated builder state as MySQL DML. Clause order is fixed
for every statement kind: keyword and target, kind-specific body, WHERE,
GROUP BY/HAVING (SELECT only), ORDER BY, LIMIT.
"""

from typing import Any

from fluentsql.common import invalid_argument_error, missing_state_error, type_mismatch_error
from fluentsql.constants import DeleteModifier, Dialect
from fluentsql.query_builder.base import BaseQueryBuilder


class MySqlQueryBuilder(BaseQueryBuilder):
    """Query builder for MySQL.

    Adds the MySQL DELETE modifiers (``LOW_PRIORITY``, ``QUICK``,
    ``IGNORE``) and the ``LIMIT offset, count`` form.

    Example:
        >>> (MySqlQueryBuilder()
        ...     .update({"field": 56})
        ...     .table("table")
        ...     .order_by("field", "desc")
        ...     .limit(15)
        ...     .build())
        'UPDATE table SET field = 56 ORDER BY field DESC LIMIT 15'
    """

    dialect = Dialect.MYSQL

    def _resolve_delete_modifier(self, modifier: Any) -> DeleteModifier:
        if modifier is None:
            return DeleteModifier.NONE
        if not isinstance(modifier, str):
            raise type_mismatch_error("modifier", modifier, "str")
        try:
            return DeleteModifier(modifier.strip().upper())
        except ValueError:
            raise invalid_argument_error(
                f"Modifier {modifier!r} passed to `{self._method('delete')}()` is invalid: "
                "expected '', LOW_PRIORITY, QUICK or IGNORE",
                parameter="modifier",
                value=modifier,
            )

    def _render_limit(self) -> str:
        if self._limit is None:
            return ""
        if self._offset is not None:
            return f"LIMIT {self._offset}, {self._limit}"
        return f"LIMIT {self._limit}"

    def _render_joins(self) -> str:
        return " ".join(
            f"{join.kind.value} JOIN {join.table} ON {join.left} {join.operator} {join.right}"
            for join in self._joins
        )

    def _render_group_by(self) -> str:
        if self._group_by is None:
            return ""
        group_by = f"GROUP BY {self._group_by}"
        if self._having is not None:
            group_by = f"{group_by} HAVING {self._having.render(self._delimiter)}"
        return group_by

    def _build_select(self) -> str:
        keyword = "SELECT DISTINCT" if self._distinct else "SELECT"
        return self._join_parts(
            keyword,
            self._render_projection(),
            f"FROM {self._table}",
            self._render_joins(),
            self._render_where(),
            self._render_group_by(),
            self._render_order_by(),
            self._render_limit(),
        )

    def _build_update(self) -> str:
        if not self._update:
            raise missing_state_error(
                "Cannot build an UPDATE query without updating anything",
                state="update",
            )

        assignments = ", ".join(
            f"{field} = {value.render(self._delimiter)}" for field, value in self._update.items()
        )
        return self._join_parts(
            f"UPDATE {self._table} SET {assignments}",
            self._render_where(),
            self._render_order_by(),
            self._render_limit(),
        )

    def _build_insert(self) -> str:
        if not self._insert_fields or not self._insert_rows:
            raise missing_state_error(
                "Cannot build an INSERT query without inserting anything",
                state="insert",
            )

        groups = ", ".join(
            "(" + ", ".join(value.render(self._delimiter) for value in row) + ")"
            for row in self._insert_rows
        )
        return f"INSERT INTO {self._table} ({', '.join(self._insert_fields)}) VALUES {groups}"

    def _build_delete(self) -> str:
        return self._join_parts(
            "DELETE",
            self._delete_modifier.value,
            f"FROM {self._table}",
            self._render_where(),
            self._render_order_by(),
            self._render_limit(),
        )
