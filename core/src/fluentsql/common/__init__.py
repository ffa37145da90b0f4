"""Common exceptions for fluentsql.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are FluentSQLError
    instances and carry structured error information in ``details``.
"""

from fluentsql.common.exceptions import (
    FluentSQLError,
    ErrorCode,
    # Helper functions
    invalid_argument_error,
    type_mismatch_error,
    logic_error,
    encoding_error,
    missing_state_error,
    unsupported_dialect_error,
)

__all__ = [
    "FluentSQLError",
    "ErrorCode",
    "invalid_argument_error",
    "type_mismatch_error",
    "logic_error",
    "encoding_error",
    "missing_state_error",
    "unsupported_dialect_error",
]
