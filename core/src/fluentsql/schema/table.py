"""Table DDL builder.

A ``Table`` renders exactly one of CREATE TABLE, DROP TABLE or ALTER TABLE.
The mode starts as create and moves to drop or alter when ``drop()``,
``add_fields()`` or ``remove_fields()`` is called. Once a table is in drop
or alter mode it cannot switch to the other one.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from fluentsql.common import (
    invalid_argument_error,
    logic_error,
    type_mismatch_error,
)
from fluentsql.constants import AlterAction, Dialect, TableMode
from fluentsql.logging import get_logger
from fluentsql.schema.descriptors import (
    AlterationDescriptor,
    ForeignKeyDescriptor,
    TableDescriptor,
)
from fluentsql.schema.field import Field
from fluentsql.settings import BuilderSettings, get_settings
from fluentsql.utils.decorators import traced

logger = get_logger(__name__)


def _build_span_attributes(table: "Table") -> Dict[str, Any]:
    return {
        "db.system": Dialect.MYSQL.value,
        "db.operation": table.mode.value,
        "db.sql.table": table.get_name(),
    }


class Table:
    """Schema-level operation on one table.

    Example:
        >>> table = Table("users", [Field("id").integer().auto_increment(), Field("name").varchar()])
        >>> table.primary_key("id").build()
        'CREATE TABLE IF NOT EXISTS users (id INT(11) AUTO_INCREMENT, name VARCHAR(255), CONSTRAINT id PRIMARY KEY (id)) CHARACTER SET utf8 COLLATE utf8_unicode_ci ENGINE=InnoDB;'
    """

    def __init__(
        self,
        name: str,
        fields: Optional[Sequence[Field]] = None,
        charset: Optional[str] = None,
        collation: Optional[str] = None,
        engine: Optional[str] = None,
        settings: Optional[BuilderSettings] = None,
    ):
        """Initialize a table in create mode.

        Args:
            name: Table name
            fields: Initial columns. Omit it for tables that will only be
                dropped or altered.
            charset: CHARACTER SET, defaults to ``default_charset``
            collation: COLLATE, defaults to ``default_collation``
            engine: ENGINE, defaults to ``default_engine``
            settings: Settings instance, defaults to ``get_settings()``

        Raises:
            FluentSQLError: TYPE_MISMATCH for non-string names/options or
                non-Field columns, LOGIC_ERROR for an explicitly empty
                ``fields`` or duplicate column names
        """
        settings = settings or get_settings()

        for parameter, value in (
            ("name", name),
            ("charset", charset),
            ("collation", collation),
            ("engine", engine),
        ):
            if value is not None and not isinstance(value, str):
                raise type_mismatch_error(parameter, value, "str")
        if name is None:
            raise type_mismatch_error("name", name, "str")

        self._name = name
        self.charset = charset or settings.default_charset
        self.collation = collation or settings.default_collation
        self.engine = engine or settings.default_engine

        self._fields: Dict[str, Field] = {}
        if fields is not None:
            self._fields = self._index_fields(fields, "fields")

        self._primary_keys: List[str] = []
        self._primary_name: Optional[str] = None
        self._foreign_keys: Dict[str, ForeignKeyDescriptor] = {}

        self._mode = TableMode.CREATE
        self._alter_fields: Dict[AlterAction, Dict[str, Field]] = {
            AlterAction.ADD: {},
            AlterAction.DROP_COLUMN: {},
        }

    def _index_fields(self, fields: Any, parameter: str) -> Dict[str, Field]:
        if not isinstance(fields, (list, tuple)):
            raise type_mismatch_error(parameter, fields, "list of Field")
        if not fields:
            raise logic_error(
                f"Table {self._name!r} needs at least one field in `{parameter}`",
                subject=self._name,
            )

        indexed: Dict[str, Field] = {}
        for field in fields:
            if not isinstance(field, Field):
                raise type_mismatch_error(parameter, field, "Field")
            if field.name in indexed:
                raise logic_error(
                    f"Field {field.name!r} is declared more than once in table {self._name!r}",
                    subject=self._name,
                )
            indexed[field.name] = field
        return indexed

    def _require_field(self, field: str, method: str) -> None:
        if field not in self._fields:
            raise invalid_argument_error(
                f"Field {field!r} passed to `Table.{method}()` doesn't exist in table {self._name!r}",
                parameter="field",
                value=field,
            )

    def _switch_mode(self, mode: TableMode) -> None:
        if self._mode not in (TableMode.CREATE, mode):
            raise logic_error(
                f"Table {self._name!r} is already in {self._mode.value} mode; "
                f"cannot switch to {mode.value}",
                subject=self._name,
            )
        self._mode = mode

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def mode(self) -> TableMode:
        return self._mode

    @property
    def fields(self) -> Dict[str, Field]:
        return dict(self._fields)

    @property
    def primary_keys(self) -> List[str]:
        return list(self._primary_keys)

    @property
    def primary_name(self) -> Optional[str]:
        return self._primary_name

    @property
    def foreign_keys(self) -> Dict[str, Dict[str, str]]:
        return {field: key.to_dict() for field, key in self._foreign_keys.items()}

    @property
    def alter_fields(self) -> Dict[str, List[str]]:
        """Names queued for ALTER, keyed by ``ADD`` and ``DROP COLUMN``."""
        return {action.value: list(bucket) for action, bucket in self._alter_fields.items()}

    def get_name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def primary_key(self, fields: Union[str, Sequence[str]], name: Optional[str] = None) -> "Table":
        """Declare the primary key.

        Args:
            fields: A field name or a list of field names
            name: Constraint name. Required for a list; for a single field it
                defaults to the field name.

        Raises:
            FluentSQLError: TYPE_MISMATCH for non-string names, LOGIC_ERROR
                for a list without a name, INVALID_ARGUMENT for unknown fields
        """
        if name is not None and not isinstance(name, str):
            raise type_mismatch_error("name", name, "str")

        if isinstance(fields, str):
            keys = [fields]
            name = name or fields
        elif isinstance(fields, (list, tuple)):
            if not fields:
                raise logic_error("A primary key needs at least one field", subject=self._name)
            if name is None:
                raise logic_error(
                    "A primary key on a list of fields needs a constraint name",
                    subject=self._name,
                )
            for key in fields:
                if not isinstance(key, str):
                    raise type_mismatch_error("fields", key, "str")
            keys = list(fields)
        else:
            raise type_mismatch_error("fields", fields, "str or list of str")

        for key in keys:
            self._require_field(key, "primary_key")

        self._primary_keys = keys
        self._primary_name = name
        return self

    def foreign_key(self, field: str, references: str, on: str) -> "Table":
        """Declare ``field`` as referencing ``references(on)``.

        Raises:
            FluentSQLError: TYPE_MISMATCH for non-string arguments,
                INVALID_ARGUMENT if ``field`` is not a column of this table
        """
        for parameter, value in (("field", field), ("references", references), ("on", on)):
            if not isinstance(value, str):
                raise type_mismatch_error(parameter, value, "str")
        self._require_field(field, "foreign_key")

        self._foreign_keys[field] = ForeignKeyDescriptor(references=references, on=on)
        return self

    # ------------------------------------------------------------------
    # Mode switches
    # ------------------------------------------------------------------

    def drop(self) -> "Table":
        self._switch_mode(TableMode.DROP)
        return self

    def add_fields(self, fields: Sequence[Field]) -> "Table":
        """Queue columns to ADD and switch to alter mode."""
        indexed = self._index_fields(fields, "fields")
        self._switch_mode(TableMode.ALTER)
        self._alter_fields[AlterAction.ADD].update(indexed)
        return self

    def remove_fields(self, fields: Sequence[Field]) -> "Table":
        """Queue columns to DROP COLUMN and switch to alter mode."""
        indexed = self._index_fields(fields, "fields")
        self._switch_mode(TableMode.ALTER)
        self._alter_fields[AlterAction.DROP_COLUMN].update(indexed)
        return self

    # ------------------------------------------------------------------
    # Descriptors
    # ------------------------------------------------------------------

    def describe(self) -> TableDescriptor:
        return TableDescriptor(
            fields={name: field.describe() for name, field in self._fields.items()},
            primary={self._primary_name: list(self._primary_keys)} if self._primary_keys else {},
            foreign=dict(self._foreign_keys),
            charset=self.charset,
            collation=self.collation,
            engine=self.engine,
        )

    def get_table(self) -> Dict[str, Dict[str, Any]]:
        """Return ``{name: descriptor}`` for the schema cache."""
        return {self._name: self.describe().to_dict()}

    def get_alteration(self) -> Dict[str, Dict[str, Any]]:
        """Return the ``ADD`` and ``DROP COLUMN`` field descriptors."""
        alteration = AlterationDescriptor(
            add={name: field.describe() for name, field in self._alter_fields[AlterAction.ADD].items()},
            drop_column={
                name: field.describe()
                for name, field in self._alter_fields[AlterAction.DROP_COLUMN].items()
            },
        )
        return alteration.to_dict()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _build_create(self) -> str:
        if not self._fields:
            raise logic_error(
                f"Cannot create table {self._name!r} without fields",
                subject=self._name,
            )

        auto_increment = [field.name for field in self._fields.values() if field.is_auto_increment]
        if len(auto_increment) > 1:
            raise logic_error(
                "AUTO_INCREMENT cannot be set on more than one field",
                subject=self._name,
                details={"fields": auto_increment},
            )
        if auto_increment and auto_increment[0] not in self._primary_keys:
            raise logic_error(
                "AUTO_INCREMENT cannot be set on a field that isn't primary key",
                subject=self._name,
                details={"field": auto_increment[0]},
            )

        definitions = [field.to_sql() for field in self._fields.values()]
        if self._primary_keys:
            definitions.append(
                f"CONSTRAINT {self._primary_name} PRIMARY KEY ({','.join(self._primary_keys)})"
            )
        for field, key in self._foreign_keys.items():
            definitions.append(f"FOREIGN KEY ({field}) REFERENCES {key.references}({key.on})")

        return (
            f"CREATE TABLE IF NOT EXISTS {self._name} ({', '.join(definitions)}) "
            f"CHARACTER SET {self.charset} COLLATE {self.collation} ENGINE={self.engine};"
        )

    def _build_drop(self) -> str:
        return f"DROP TABLE IF EXISTS {self._name};"

    def _build_alter(self) -> str:
        clauses = [
            f"ADD {field.to_sql()}" for field in self._alter_fields[AlterAction.ADD].values()
        ]
        clauses.extend(
            f"DROP COLUMN {name}" for name in self._alter_fields[AlterAction.DROP_COLUMN]
        )
        if not clauses:
            raise logic_error(
                f"Cannot alter table {self._name!r} without fields to add or drop",
                subject=self._name,
            )
        return f"ALTER TABLE {self._name} {', '.join(clauses)};"

    @traced(attribute_getter=_build_span_attributes)
    def build(self) -> str:
        """Render the DDL statement for the current mode.

        Raises:
            FluentSQLError: LOGIC_ERROR for inconsistent table state,
                MISSING_STATE if a field has no type
        """
        mode_mapping = {
            TableMode.CREATE: self._build_create,
            TableMode.DROP: self._build_drop,
            TableMode.ALTER: self._build_alter,
        }

        statement = mode_mapping[self._mode]()
        logger.debug(
            "Rendered %s TABLE statement for %s",
            self._mode.value,
            self._name,
            extra={"table_mode": self._mode.value, "table": self._name},
        )
        return statement

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"<Table name={self._name!r} mode={self._mode.value} fields={list(self._fields)}>"

    # camelCase aliases
    primaryKey = primary_key
    foreignKey = foreign_key
    addFields = add_fields
    removeFields = remove_fields
    getTable = get_table
    getAlteration = get_alteration
    getName = get_name
