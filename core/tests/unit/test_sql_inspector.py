"""Unit tests for SQLGlot-backed statement inspection."""

import pytest

from fluentsql.common import ErrorCode, FluentSQLError
from fluentsql.constants import QueryType
from fluentsql.query_builder import MySqlQueryBuilder
from fluentsql.utils import StatementInspector


@pytest.fixture
def inspector():
    return StatementInspector()


class TestInspect:
    """Test statement kind and table detection."""

    def test_select_with_join(self, inspector):
        info = inspector.inspect(
            "SELECT * FROM users INNER JOIN orders ON users.id = orders.user_id WHERE users.age > 18"
        )
        assert info.kind == QueryType.SELECT
        assert info.tables == ["orders", "users"]

    def test_escape_delimiters_are_stripped(self, inspector):
        info = inspector.inspect("DELETE FROM users WHERE name = '{esc}bob{esc}'")
        assert info.kind == QueryType.DELETE
        assert info.tables == ["users"]

    def test_custom_delimiter(self):
        info = StatementInspector(delimiter="##").inspect("UPDATE users SET name = '##bob##'")
        assert info.kind == QueryType.UPDATE

    def test_insert(self, inspector):
        info = inspector.inspect("INSERT INTO orders (id, total) VALUES (1, 9.5), (2, 3)")
        assert info.kind == QueryType.INSERT
        assert info.tables == ["orders"]

    def test_to_dict(self, inspector):
        assert inspector.inspect("SELECT id FROM users").to_dict() == {
            "kind": "SELECT",
            "tables": ["users"],
        }

    def test_unparseable_statement(self, inspector):
        with pytest.raises(FluentSQLError, match="Cannot parse SQL statement") as exc_info:
            inspector.inspect("SELECT * FROM users WHERE (")
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT
        assert exc_info.value.cause is not None

    def test_ddl_is_not_a_supported_kind(self, inspector):
        with pytest.raises(FluentSQLError, match="Unsupported statement kind"):
            inspector.inspect("DROP TABLE IF EXISTS users")

    @pytest.mark.parametrize("sql", ["", "   "])
    def test_empty_statement(self, inspector, sql):
        with pytest.raises(FluentSQLError, match="non-empty"):
            inspector.inspect(sql)

    def test_non_string_statement(self, inspector):
        with pytest.raises(FluentSQLError) as exc_info:
            inspector.inspect(None)
        assert exc_info.value.error_code == ErrorCode.TYPE_MISMATCH


class TestIsValid:
    """Test the boolean parse check."""

    def test_valid(self, inspector):
        assert inspector.is_valid("SELECT COUNT(*) FROM users")

    def test_invalid(self, inspector):
        assert not inspector.is_valid("SELECT * FROM users WHERE (")

    def test_blank(self, inspector):
        assert not inspector.is_valid("")


class TestBuilderInspect:
    """Test inspection of builder output."""

    def test_select(self):
        query = MySqlQueryBuilder(table="users")
        query.select(["name"]).join("orders", "users.id", "=", "orders.user_id").where("name", "bob")
        info = query.inspect()
        assert info.kind == QueryType.SELECT
        assert info.tables == ["orders", "users"]

    def test_update_with_custom_delimiter(self):
        query = MySqlQueryBuilder(table="users", escape_delimiter="%%")
        info = query.update({"name": "bob"}).where("id", 5).inspect()
        assert info.kind == QueryType.UPDATE
        assert info.tables == ["users"]

    def test_insert(self):
        info = MySqlQueryBuilder(table="orders").insert(["id", "note"], [[1, "first"]]).inspect()
        assert info.kind == QueryType.INSERT
