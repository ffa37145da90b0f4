"""Unit tests for the in-memory schema cache."""

import pytest

from fluentsql.common import ErrorCode, FluentSQLError
from fluentsql.schema import Field, SchemaCache, Table


@pytest.fixture
def users_table():
    table = Table("users", [Field("id").integer().auto_increment(), Field("name").varchar(64)])
    return table.primary_key("id")


def test_create_records_table(users_table):
    cache = SchemaCache().create(users_table)
    assert cache.has_table("users")
    assert cache.has_table(users_table)
    assert list(cache.get("users")["fields"]) == ["id", "name"]
    assert cache.get("users")["primary"] == {"id": ["id"]}


def test_create_replaces_previous_descriptor(users_table):
    cache = SchemaCache().create(users_table)
    cache.create(Table("users", [Field("email").varchar()]))
    assert list(cache.get("users")["fields"]) == ["email"]


def test_alter_merges_added_and_dropped_fields(users_table):
    cache = SchemaCache().create(users_table)
    alteration = Table("users").add_fields([Field("age").tiny_integer().unsigned()])
    alteration.remove_fields([Field("name").varchar(64)])

    cache.alter(alteration)

    fields = cache.get("users")["fields"]
    assert list(fields) == ["id", "age"]
    assert fields["age"]["type"] == "TINYINT(4)"
    assert fields["age"]["UNSIGNED"] is True


def test_alter_ignores_unknown_dropped_fields(users_table):
    cache = SchemaCache().create(users_table)
    cache.alter(Table("users").remove_fields([Field("missing").integer()]))
    assert list(cache.get("users")["fields"]) == ["id", "name"]


def test_alter_unknown_table():
    with pytest.raises(FluentSQLError, match="isn't in the schema cache") as exc_info:
        SchemaCache().alter(Table("ghost").add_fields([Field("a").integer()]))
    assert exc_info.value.error_code == ErrorCode.MISSING_STATE


def test_remove(users_table):
    cache = SchemaCache().create(users_table)
    cache.remove(Table("users").drop())
    assert not cache.has_table("users")
    assert cache.get("users") is None
    cache.remove("never_there")


def test_get_returns_a_copy(users_table):
    cache = SchemaCache().create(users_table)
    cache.get("users")["fields"].clear()
    assert list(cache.get("users")["fields"]) == ["id", "name"]


def test_initial_tables_are_copied(users_table):
    initial = users_table.get_table()
    cache = SchemaCache(initial)
    initial["users"]["fields"].clear()
    assert cache.to_dict()["users"]["fields"]


@pytest.mark.parametrize("value", [None, 5, {"users": {}}])
def test_invalid_table_arguments(value):
    with pytest.raises(FluentSQLError) as exc_info:
        SchemaCache().create(value)
    assert exc_info.value.error_code == ErrorCode.TYPE_MISMATCH


def test_lookup_requires_table_or_name():
    with pytest.raises(FluentSQLError):
        SchemaCache().has_table(5)
