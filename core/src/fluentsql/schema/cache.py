"""In-memory schema cache.

Merges the descriptors produced by ``Table`` after a statement succeeds, so
callers can keep track of the current shape of the database. Nothing is
persisted.
"""

import copy
from typing import Any, Dict, Optional, Union

from fluentsql.common import missing_state_error, type_mismatch_error
from fluentsql.constants import AlterAction
from fluentsql.logging import get_logger
from fluentsql.schema.table import Table

logger = get_logger(__name__)


def _table_name(table: Union[Table, str]) -> str:
    if isinstance(table, Table):
        return table.get_name()
    if isinstance(table, str):
        return table
    raise type_mismatch_error("table", table, "Table or str")


class SchemaCache:
    """Mapping of table name to table descriptor.

    Example:
        >>> cache = SchemaCache()
        >>> cache.create(Table("users", [Field("id").integer()]))
        >>> cache.has_table("users")
        True
    """

    def __init__(self, tables: Optional[Dict[str, Dict[str, Any]]] = None):
        self._tables: Dict[str, Dict[str, Any]] = copy.deepcopy(tables) if tables else {}

    def create(self, table: Table) -> "SchemaCache":
        """Record a created table, replacing any previous descriptor."""
        if not isinstance(table, Table):
            raise type_mismatch_error("table", table, "Table")
        self._tables.update(table.get_table())
        logger.debug("Schema cache recorded table %s", table.get_name())
        return self

    def alter(self, table: Table) -> "SchemaCache":
        """Merge added columns and remove dropped ones.

        Raises:
            FluentSQLError: MISSING_STATE if the table isn't cached
        """
        if not isinstance(table, Table):
            raise type_mismatch_error("table", table, "Table")

        name = table.get_name()
        if name not in self._tables:
            raise missing_state_error(
                f"Cannot alter table {name!r}: it isn't in the schema cache",
                state="table",
            )

        alteration = table.get_alteration()
        fields = self._tables[name]["fields"]
        fields.update(alteration[AlterAction.ADD.value])
        for field in alteration[AlterAction.DROP_COLUMN.value]:
            fields.pop(field, None)

        logger.debug(
            "Schema cache altered table %s",
            name,
            extra={
                "added": list(alteration[AlterAction.ADD.value]),
                "dropped": list(alteration[AlterAction.DROP_COLUMN.value]),
            },
        )
        return self

    def remove(self, table: Union[Table, str]) -> "SchemaCache":
        """Forget a table. Unknown tables are ignored."""
        self._tables.pop(_table_name(table), None)
        return self

    def has_table(self, table: Union[Table, str]) -> bool:
        return _table_name(table) in self._tables

    def get(self, table: Union[Table, str]) -> Optional[Dict[str, Any]]:
        """Return a copy of a table descriptor, or None."""
        descriptor = self._tables.get(_table_name(table))
        return copy.deepcopy(descriptor) if descriptor is not None else None

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._tables)
