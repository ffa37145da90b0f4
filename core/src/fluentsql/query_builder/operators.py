"""Comparison operator validation."""

from typing import Any, Union

from fluentsql.constants import CONDITION_OPERATORS, JOIN_OPERATORS, OperatorContext


def normalize_operator(operator: str) -> str:
    """Return the canonical (upper-case, trimmed) spelling of an operator."""
    return operator.strip().upper()


def is_valid_operator(operator: Any, context: Union[OperatorContext, str] = OperatorContext.WHERE) -> bool:
    """Check whether ``operator`` is allowed in the given clause context.

    JOIN conditions accept ``=, >, >=, <, <=, !=, LIKE``. WHERE and HAVING
    additionally accept ``BETWEEN``. Matching is case-insensitive and any
    non-string operator is simply invalid.

    Args:
        operator: Candidate operator
        context: Clause the operator is used in

    Returns:
        True if the operator is valid in that context
    """
    if not isinstance(operator, str):
        return False

    context = OperatorContext(context)
    allowed = JOIN_OPERATORS if context == OperatorContext.JOIN else CONDITION_OPERATORS
    return normalize_operator(operator) in allowed
