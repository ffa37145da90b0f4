"""Unit tests for the table DDL builder."""

import pytest

from fluentsql.common import ErrorCode, FluentSQLError
from fluentsql.constants import TableMode
from fluentsql.query_builder import MySqlQueryBuilder
from fluentsql.query_builder.base import _build_span_attributes as query_span_attributes
from fluentsql.schema import Field, Table
from fluentsql.schema.table import _build_span_attributes as table_span_attributes


@pytest.fixture
def keyed_table():
    """Table with a composite primary key and a foreign key."""
    table = Table("table", [Field("f1").integer().autoIncrement(), Field("f2").integer()])
    return table.primaryKey(["f1", "f2"], "f").foreignKey("f2", "some_table", "some_field")


class TestCreate:
    """Test CREATE TABLE rendering."""

    def test_create_plain_table(self):
        table = Table("table", [Field("f1").integer(), Field("f2").varchar(32).not_null()])
        assert table.build() == (
            "CREATE TABLE IF NOT EXISTS table (f1 INT(11), f2 VARCHAR(32) NOT NULL) "
            "CHARACTER SET utf8 COLLATE utf8_unicode_ci ENGINE=InnoDB;"
        )

    def test_create_with_keys(self, keyed_table):
        assert keyed_table.build() == (
            "CREATE TABLE IF NOT EXISTS table (f1 INT(11) AUTO_INCREMENT, f2 INT(11), "
            "CONSTRAINT f PRIMARY KEY (f1,f2), "
            "FOREIGN KEY (f2) REFERENCES some_table(some_field)) "
            "CHARACTER SET utf8 COLLATE utf8_unicode_ci ENGINE=InnoDB;"
        )
        assert str(keyed_table) == keyed_table.build()

    def test_single_field_primary_key_is_named_after_the_field(self):
        table = Table("users", [Field("id").integer()]).primary_key("id")
        assert table.primary_name == "id"
        assert "CONSTRAINT id PRIMARY KEY (id)" in table.build()

    def test_explicit_table_options(self):
        table = Table("t", [Field("a").date()], charset="utf8mb4", collation="utf8mb4_bin", engine="MyISAM")
        assert table.build().endswith("CHARACTER SET utf8mb4 COLLATE utf8mb4_bin ENGINE=MyISAM;")

    def test_table_options_from_settings(self, monkeypatch):
        from fluentsql.settings import reload_settings

        monkeypatch.setenv("FLUENTSQL_DEFAULT_CHARSET", "latin1")
        monkeypatch.setenv("FLUENTSQL_DEFAULT_ENGINE", "MEMORY")
        reload_settings()
        table = Table("t", [Field("a").text()])
        assert table.build() == (
            "CREATE TABLE IF NOT EXISTS t (a TEXT) "
            "CHARACTER SET latin1 COLLATE utf8_unicode_ci ENGINE=MEMORY;"
        )

    def test_create_without_fields(self):
        with pytest.raises(FluentSQLError, match="without fields") as exc_info:
            Table("t").build()
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    def test_more_than_one_auto_increment_field(self):
        table = Table("t", [Field("a").integer().auto_increment(), Field("b").integer().auto_increment()])
        table.primary_key(["a", "b"], "pk")
        with pytest.raises(FluentSQLError, match="more than one field") as exc_info:
            table.build()
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    def test_auto_increment_outside_primary_key(self):
        table = Table("t", [Field("a").integer().auto_increment(), Field("b").integer()])
        table.primary_key("b")
        with pytest.raises(FluentSQLError, match="isn't primary key"):
            table.build()

    def test_field_without_type(self):
        with pytest.raises(FluentSQLError) as exc_info:
            Table("t", [Field("a")]).build()
        assert exc_info.value.error_code == ErrorCode.MISSING_STATE


class TestFieldsAndKeys:
    """Test constructor and key validation."""

    def test_explicitly_empty_fields(self):
        with pytest.raises(FluentSQLError) as exc_info:
            Table("t", [])
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    @pytest.mark.parametrize("fields", [["a"], [Field("a").integer(), 5], "a"])
    def test_fields_must_be_field_instances(self, fields):
        with pytest.raises(FluentSQLError) as exc_info:
            Table("t", fields)
        assert exc_info.value.error_code == ErrorCode.TYPE_MISMATCH

    def test_duplicate_field_names(self):
        with pytest.raises(FluentSQLError, match="more than once"):
            Table("t", [Field("a").integer(), Field("a").varchar()])

    @pytest.mark.parametrize("name", [None, 5])
    def test_name_must_be_string(self, name):
        with pytest.raises(FluentSQLError) as exc_info:
            Table(name, [Field("a").integer()])
        assert exc_info.value.error_code == ErrorCode.TYPE_MISMATCH

    def test_composite_primary_key_needs_a_name(self):
        table = Table("t", [Field("a").integer(), Field("b").integer()])
        with pytest.raises(FluentSQLError, match="needs a constraint name") as exc_info:
            table.primary_key(["a", "b"])
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    def test_primary_key_on_unknown_field(self):
        table = Table("users", [Field("id").integer()])
        with pytest.raises(FluentSQLError) as exc_info:
            table.primary_key("uid")
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT
        assert exc_info.value.message == (
            "Field 'uid' passed to `Table.primary_key()` doesn't exist in table 'users'"
        )

    def test_foreign_key_on_unknown_field(self):
        table = Table("users", [Field("id").integer()])
        with pytest.raises(FluentSQLError, match="Table.foreign_key"):
            table.foreign_key("group_id", "groups", "id")

    def test_foreign_key_arguments_must_be_strings(self):
        table = Table("users", [Field("id").integer()])
        with pytest.raises(FluentSQLError) as exc_info:
            table.foreign_key("id", "groups", 5)
        assert exc_info.value.error_code == ErrorCode.TYPE_MISMATCH

    def test_key_accessors(self, keyed_table):
        assert keyed_table.primary_keys == ["f1", "f2"]
        assert keyed_table.foreign_keys == {"f2": {"references": "some_table", "on": "some_field"}}
        assert list(keyed_table.fields) == ["f1", "f2"]


class TestDropAndAlter:
    """Test DROP and ALTER modes."""

    def test_drop(self):
        table = Table("table").drop()
        assert table.mode == TableMode.DROP
        assert table.build() == "DROP TABLE IF EXISTS table;"

    def test_alter(self):
        table = Table("table")
        table.addFields([Field("f1").integer(), Field("f2").integer()])
        table.removeFields([Field("f3").integer()])
        assert table.mode == TableMode.ALTER
        assert table.build() == "ALTER TABLE table ADD f1 INT(11), ADD f2 INT(11), DROP COLUMN f3;"
        assert table.alter_fields == {"ADD": ["f1", "f2"], "DROP COLUMN": ["f3"]}

    def test_alter_with_only_drops(self):
        table = Table("t").remove_fields([Field("old").text()])
        assert table.build() == "ALTER TABLE t DROP COLUMN old;"

    def test_alter_with_empty_list(self):
        with pytest.raises(FluentSQLError) as exc_info:
            Table("t").add_fields([])
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    def test_drop_after_alter(self):
        table = Table("t").add_fields([Field("a").integer()])
        with pytest.raises(FluentSQLError, match="already in ALTER mode") as exc_info:
            table.drop()
        assert exc_info.value.error_code == ErrorCode.LOGIC_ERROR

    def test_alter_after_drop(self):
        table = Table("t").drop()
        with pytest.raises(FluentSQLError, match="cannot switch to ALTER"):
            table.remove_fields([Field("a").integer()])

    def test_failed_switch_keeps_mode(self):
        table = Table("t").drop()
        with pytest.raises(FluentSQLError):
            table.add_fields([Field("a").integer()])
        assert table.build() == "DROP TABLE IF EXISTS t;"


class TestDescriptors:
    """Test get_table and get_alteration."""

    def test_get_table(self, keyed_table):
        assert keyed_table.getTable() == {
            "table": {
                "fields": {
                    "f1": {
                        "type": "INT(11)",
                        "default": None,
                        "NOT NULL": False,
                        "UNSIGNED": False,
                        "AUTO_INCREMENT": True,
                    },
                    "f2": {
                        "type": "INT(11)",
                        "default": None,
                        "NOT NULL": False,
                        "UNSIGNED": False,
                        "AUTO_INCREMENT": False,
                    },
                },
                "primary": {"f": ["f1", "f2"]},
                "foreign": {"f2": {"references": "some_table", "on": "some_field"}},
                "charset": "utf8",
                "collation": "utf8_unicode_ci",
                "engine": "InnoDB",
            }
        }

    def test_get_table_without_keys(self):
        descriptor = Table("t", [Field("a").char()]).get_table()["t"]
        assert descriptor["primary"] == {}
        assert descriptor["foreign"] == {}

    def test_get_alteration(self):
        table = Table("t").add_fields([Field("a").varchar(10).default("x")])
        table.remove_fields([Field("b").integer()])
        alteration = table.getAlteration()
        assert set(alteration) == {"ADD", "DROP COLUMN"}
        assert alteration["ADD"]["a"]["type"] == "VARCHAR(10)"
        assert alteration["ADD"]["a"]["default"] == "'x'"
        assert list(alteration["DROP COLUMN"]) == ["b"]

    def test_repr(self):
        assert repr(Table("t", [Field("a").integer()])) == "<Table name='t' mode=CREATE fields=['a']>"

    def test_span_attributes_name_the_dialect(self):
        attributes = table_span_attributes(Table("users").drop())
        assert attributes == {"db.system": "mysql", "db.operation": "DROP", "db.sql.table": "users"}
        assert attributes["db.system"] == query_span_attributes(MySqlQueryBuilder(table="users"))["db.system"]
