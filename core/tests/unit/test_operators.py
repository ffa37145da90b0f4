"""Unit tests for operator validation."""

import pytest

from fluentsql.constants import OperatorContext
from fluentsql.query_builder.operators import is_valid_operator, normalize_operator


@pytest.mark.parametrize("operator", ["=", ">", ">=", "<", "<=", "!=", "LIKE", "like", " Like "])
def test_join_operators_are_valid_everywhere(operator):
    for context in OperatorContext:
        assert is_valid_operator(operator, context)


def test_between_is_valid_only_in_where_and_having():
    assert is_valid_operator("between", OperatorContext.WHERE)
    assert is_valid_operator("BETWEEN", "having")
    assert not is_valid_operator("BETWEEN", OperatorContext.JOIN)


@pytest.mark.parametrize("operator", ["<>", "IN", "==", "", "=>"])
def test_unknown_operators_are_invalid(operator):
    assert not is_valid_operator(operator, OperatorContext.WHERE)


@pytest.mark.parametrize("operator", [None, 5, ["="], True])
def test_non_string_operators_are_invalid_not_errors(operator):
    assert is_valid_operator(operator) is False


def test_normalize_operator():
    assert normalize_operator(" like ") == "LIKE"
