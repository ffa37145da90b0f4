"""Unit tests for error codes and error helpers."""

import logging

import pytest

from fluentsql.common import (
    ErrorCode,
    FluentSQLError,
    encoding_error,
    invalid_argument_error,
    logic_error,
    missing_state_error,
    type_mismatch_error,
    unsupported_dialect_error,
)


def test_str_includes_error_code():
    error = FluentSQLError("broken", ErrorCode.LOGIC_ERROR)
    assert str(error) == "[LOGIC_001] broken"


def test_str_includes_cause():
    error = FluentSQLError("broken", cause=ValueError("bad"))
    assert str(error) == "[ARGUMENT_001] broken (caused by: ValueError: bad)"


def test_to_dict():
    error = missing_state_error("no table", state="table")
    assert error.to_dict() == {
        "type": "FluentSQLError",
        "message": "no table",
        "error_code": "STATE_001",
        "error_name": "MISSING_STATE",
        "details": {"state": "table"},
    }


def test_from_error_code():
    error = FluentSQLError.from_error_code(ErrorCode.UNSUPPORTED_DIALECT, "nope", details={"dialect": "x"})
    assert error.error_code == ErrorCode.UNSUPPORTED_DIALECT
    assert error.details == {"dialect": "x"}


def test_construction_logs_the_error(caplog):
    with caplog.at_level(logging.ERROR, logger="fluentsql.common.exceptions"):
        logic_error("inconsistent", subject="users")
    record = caplog.records[-1]
    assert record.getMessage() == "inconsistent"
    assert record.error_code == "LOGIC_001"
    assert record.details == {"subject": "users"}


@pytest.mark.parametrize("factory, code", [
    (lambda: invalid_argument_error("bad", parameter="p", value=1), ErrorCode.INVALID_ARGUMENT),
    (lambda: type_mismatch_error("p", 1, "str"), ErrorCode.TYPE_MISMATCH),
    (lambda: logic_error("bad"), ErrorCode.LOGIC_ERROR),
    (lambda: encoding_error("m", object()), ErrorCode.ENCODING_ERROR),
    (lambda: missing_state_error("bad"), ErrorCode.MISSING_STATE),
    (lambda: unsupported_dialect_error("oracle"), ErrorCode.UNSUPPORTED_DIALECT),
])
def test_helpers_set_error_codes(factory, code):
    error = factory()
    assert isinstance(error, FluentSQLError)
    assert error.error_code == code


def test_type_mismatch_message():
    error = type_mismatch_error("limit", "10", "int")
    assert error.message == "Invalid type for limit: expected int, got str ('10')"
    assert error.details == {"parameter": "limit", "expected": "int", "received": "str"}


def test_invalid_argument_details():
    error = invalid_argument_error("bad", parameter="field", value="x")
    assert error.details == {"parameter": "field", "value": "'x'"}


def test_encoding_error_keeps_cause():
    cause = TypeError("not serializable")
    error = encoding_error("MySqlQueryBuilder.update", {1, 2}, cause=cause)
    assert error.cause is cause
    assert error.details["method"] == "MySqlQueryBuilder.update"
    assert "`MySqlQueryBuilder.update()` cannot be encoded" in error.message
