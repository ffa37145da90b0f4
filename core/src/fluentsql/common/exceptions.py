from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for fluentsql operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has its own prefix for easy identification.

    Attributes:
        ARGUMENT_*: Caller-supplied values with the wrong shape or type (1xxx)
        LOGIC_*: Internally inconsistent builder state (2xxx)
        ENCODING_*: Values that cannot be rendered as SQL literals (3xxx)
        STATE_*: Render-time absence of required builder state (4xxx)
        DIALECT_*: Dialect resolution errors (5xxx)
    """
    # Argument errors (1xxx)
    INVALID_ARGUMENT = "ARGUMENT_001"
    TYPE_MISMATCH = "ARGUMENT_002"

    # Logic errors (2xxx)
    LOGIC_ERROR = "LOGIC_001"

    # Encoding errors (3xxx)
    ENCODING_ERROR = "ENCODING_001"

    # State errors (4xxx)
    MISSING_STATE = "STATE_001"

    # Dialect errors (5xxx)
    UNSUPPORTED_DIALECT = "DIALECT_001"


class FluentSQLError(Exception):
    """Base exception for all fluentsql-related errors.

    This exception class uses error codes for categorization
    instead of creating numerous specific exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize fluentsql error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from fluentsql.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
            exc_info=cause if cause is not None else None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "FluentSQLError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for FluentSQLError

        Returns:
            FluentSQLError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


# Helper functions for common error scenarios
def invalid_argument_error(
    message: str,
    parameter: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> FluentSQLError:
    """Create an invalid-argument error.

    Args:
        message: Error message
        parameter: Parameter that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        FluentSQLError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if parameter:
        details["parameter"] = parameter
    if value is not None:
        details["value"] = repr(value)

    return FluentSQLError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def type_mismatch_error(
    parameter: str,
    value: Any,
    expected: str,
    **kwargs
) -> FluentSQLError:
    """Create a type mismatch error.

    Args:
        parameter: Parameter that received the wrong type
        value: Value received
        expected: Human readable description of the expected type
        **kwargs: Additional error details

    Returns:
        FluentSQLError with TYPE_MISMATCH code
    """
    details = kwargs.get('details', {})
    details["parameter"] = parameter
    details["expected"] = expected
    details["received"] = type(value).__name__

    return FluentSQLError(
        message=(
            f"Invalid type for {parameter}: expected {expected}, "
            f"got {type(value).__name__} ({value!r})"
        ),
        error_code=ErrorCode.TYPE_MISMATCH,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def logic_error(
    message: str,
    subject: Optional[str] = None,
    **kwargs
) -> FluentSQLError:
    """Create a logic error.

    Args:
        message: Error message
        subject: Field or table whose state is inconsistent
        **kwargs: Additional error details

    Returns:
        FluentSQLError with LOGIC_ERROR code
    """
    details = kwargs.get('details', {})
    if subject:
        details["subject"] = subject

    return FluentSQLError(
        message=message,
        error_code=ErrorCode.LOGIC_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def encoding_error(
    method: str,
    value: Any,
    cause: Optional[Exception] = None,
    **kwargs
) -> FluentSQLError:
    """Create an encoding error for a value that cannot become a SQL literal.

    Args:
        method: Builder method the value was passed to
        value: Value that could not be encoded
        cause: Underlying serialization error, if any
        **kwargs: Additional error details

    Returns:
        FluentSQLError with ENCODING_ERROR code
    """
    details = kwargs.get('details', {})
    details["method"] = method
    details["received"] = type(value).__name__

    return FluentSQLError(
        message=(
            f"Value passed to `{method}()` cannot be encoded as a SQL literal: "
            f"{type(value).__name__} ({value!r})"
        ),
        error_code=ErrorCode.ENCODING_ERROR,
        details=details,
        cause=cause,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def missing_state_error(
    message: str,
    state: Optional[str] = None,
    **kwargs
) -> FluentSQLError:
    """Create an error for builder state missing at render time.

    Args:
        message: Error message
        state: Name of the missing piece of state
        **kwargs: Additional error details

    Returns:
        FluentSQLError with MISSING_STATE code
    """
    details = kwargs.get('details', {})
    if state:
        details["state"] = state

    return FluentSQLError(
        message=message,
        error_code=ErrorCode.MISSING_STATE,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def unsupported_dialect_error(
    dialect: Any,
    supported: Optional[list] = None,
    **kwargs
) -> FluentSQLError:
    """Create an unsupported dialect error.

    Args:
        dialect: Dialect identifier that could not be resolved
        supported: Supported dialect names
        **kwargs: Additional error details

    Returns:
        FluentSQLError with UNSUPPORTED_DIALECT code
    """
    details = kwargs.get('details', {})
    details["dialect"] = str(dialect)
    if supported:
        details["supported"] = supported

    return FluentSQLError(
        message=f"Unsupported SQL dialect: {dialect!r}",
        error_code=ErrorCode.UNSUPPORTED_DIALECT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
