"""Condition clauses used by WHERE and HAVING.

A clause is validated when it is constructed, so a builder only ever holds
well-formed conditions. Three constructors cover every accepted shape:

- ``binary(field, value)``: ``field = value``
- ``ternary(field, operator, value)``: any comparison operator
- ``between(field, low, high)``: ``field BETWEEN low AND high``

``parse_clauses`` turns the loose positional/nested-sequence arguments of
``where()`` and ``orWhere()`` into clauses with the same validation.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from fluentsql.common import invalid_argument_error, type_mismatch_error
from fluentsql.constants import BETWEEN, DEFAULT_ESCAPE_DELIMITER, OperatorContext
from fluentsql.query_builder.operators import is_valid_operator, normalize_operator
from fluentsql.query_builder.values import SqlLiteral, encode_value, is_scalar


class Clause:
    """Base class of a single rendered condition."""

    field: str

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        raise NotImplementedError

    def literals(self) -> List[SqlLiteral]:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ComparisonClause(Clause):
    field: str
    operator: str
    value: SqlLiteral

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        return f"{self.field} {self.operator} {self.value.render(delimiter)}"

    def literals(self) -> List[SqlLiteral]:
        return [self.value]


@dataclass(frozen=True)
class BetweenClause(Clause):
    field: str
    low: SqlLiteral
    high: SqlLiteral

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        return f"{self.field} {BETWEEN} {self.low.render(delimiter)} AND {self.high.render(delimiter)}"

    def literals(self) -> List[SqlLiteral]:
        return [self.low, self.high]


@dataclass(frozen=True)
class MembershipClause(Clause):
    """``field IN(...)`` or ``field NOT IN(...)``."""

    field: str
    values: Tuple[SqlLiteral, ...]
    negated: bool = False

    def render(self, delimiter: str = DEFAULT_ESCAPE_DELIMITER) -> str:
        keyword = "NOT IN" if self.negated else "IN"
        rendered = ", ".join(value.render(delimiter) for value in self.values)
        return f"{self.field} {keyword}({rendered})"

    def literals(self) -> List[SqlLiteral]:
        return list(self.values)


def _form_error(method: str, received: int):
    return invalid_argument_error(
        f"Arguments passed to `{method}()` aren't in the correct form: each clause "
        f"needs 2 or 3 elements (field, [operator,] value), got {received}",
        parameter="clauses",
        details={"method": method, "elements": received},
    )


def _elements_error(method: str, clause: Sequence[Any]):
    return invalid_argument_error(
        f"Some elements of some clauses passed to `{method}()` are invalid",
        parameter="clauses",
        value=list(clause),
        details={"method": method},
    )


def _build_clause(
    field: Any,
    operator: Any,
    value: Any,
    method: str,
    context: OperatorContext = OperatorContext.WHERE,
) -> Clause:
    if not isinstance(field, str) or not isinstance(operator, str):
        raise _elements_error(method, (field, operator, value))

    if not is_valid_operator(operator, context):
        raise invalid_argument_error(
            f"Operator {operator!r} passed to `{method}()` is invalid",
            parameter="operator",
            value=operator,
            details={"method": method},
        )
    operator = normalize_operator(operator)

    if operator == BETWEEN:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise invalid_argument_error(
                f"BETWEEN operator in `{method}()` requires a range of exactly 2 values",
                parameter="value",
                value=value,
                details={"method": method},
            )
        low, high = value
        if not is_scalar(low) or not is_scalar(high):
            raise _elements_error(method, (field, operator, value))
        return BetweenClause(field, encode_value(low, method), encode_value(high, method))

    if isinstance(value, (list, tuple)):
        raise invalid_argument_error(
            f"Array values passed to `{method}()` are only allowed with the BETWEEN operator",
            parameter="value",
            value=value,
            details={"method": method},
        )
    if not is_scalar(value):
        raise _elements_error(method, (field, operator, value))

    return ComparisonClause(field, operator, encode_value(value, method))


def clause_from_parts(
    parts: Sequence[Any],
    method: str,
    context: OperatorContext = OperatorContext.WHERE,
) -> Clause:
    """Build a clause from a ``(field, value)`` or ``(field, operator, value)`` sequence."""
    if len(parts) == 2:
        field, value = parts
        return _build_clause(field, "=", value, method, context)
    if len(parts) == 3:
        field, operator, value = parts
        return _build_clause(field, operator, value, method, context)
    raise _form_error(method, len(parts))


def parse_clauses(args: Tuple[Any, ...], method: str) -> List[Clause]:
    """Parse the arguments of ``where()``/``orWhere()`` into clauses.

    Accepted shapes:
        - ``(field, value)`` or ``(field, operator, value)``
        - a single sequence of such 2/3-element sequences
        - a single ``Clause`` or a sequence mixing clauses and sequences

    Args:
        args: Positional arguments as received by the builder method
        method: Qualified builder method name used in error messages

    Returns:
        Clauses in argument order

    Raises:
        FluentSQLError: INVALID_ARGUMENT describing the first violation
    """
    if len(args) == 1:
        (single,) = args
        if isinstance(single, Clause):
            return [single]
        if isinstance(single, (list, tuple)):
            if not single:
                raise _form_error(method, 0)
            clauses = []
            for item in single:
                if isinstance(item, Clause):
                    clauses.append(item)
                elif isinstance(item, (list, tuple)):
                    clauses.append(clause_from_parts(item, method))
                else:
                    raise _form_error(method, 1)
            return clauses

    return [clause_from_parts(args, method)]


def membership_clause(field: Any, values: Any, method: str, negated: bool = False) -> MembershipClause:
    """Build an ``IN``/``NOT IN`` clause.

    Raises:
        FluentSQLError: TYPE_MISMATCH for a non-string field or a non-list
            ``values``. INVALID_ARGUMENT for an empty list or non-scalar
            elements.
    """
    if not isinstance(field, str):
        raise type_mismatch_error("field", field, "str")
    if not isinstance(values, (list, tuple)):
        raise type_mismatch_error("values", values, "list")
    if not values:
        raise invalid_argument_error(
            f"`{method}()` needs at least one value",
            parameter="values",
            details={"method": method},
        )
    for value in values:
        if isinstance(value, (list, tuple)) or not is_scalar(value):
            raise _elements_error(method, (field, values))

    return MembershipClause(field, tuple(encode_value(value, method) for value in values), negated)


def binary(field: str, value: Any) -> Clause:
    """``field = value``."""
    return clause_from_parts((field, value), "binary")


def ternary(field: str, operator: str, value: Any) -> Clause:
    """``field <operator> value``; ``BETWEEN`` expects a 2-element range."""
    return clause_from_parts((field, operator, value), "ternary")


def between(field: str, low: Any, high: Any) -> Clause:
    """``field BETWEEN low AND high``."""
    return clause_from_parts((field, BETWEEN, [low, high]), "between")
