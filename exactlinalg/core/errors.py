"""
Library exceptions.

Two kinds of failure exist: precondition violations (bad arguments, raised
before any computation) and structural-state violations (the receiver does not
satisfy an invariant the operation needs). Neither is transient.
"""

from typing import Any, Dict, Optional


class LinearAlgebraError(Exception):
    """Base exception for exactlinalg errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class PreconditionError(LinearAlgebraError, ValueError):
    """Raised when an argument violates an operation's precondition"""

    def __init__(self, message: str, expected: Any = None, actual: Any = None, **details: Any):
        if expected is not None or actual is not None:
            message = f"{message}: expected {expected} but actual {actual}"
            details = {"expected": expected, "actual": actual, **details}
        super().__init__(message=message, details=details)


class IllegalStateError(LinearAlgebraError, RuntimeError):
    """Raised when the receiver's state does not allow the operation"""


class MatrixNotSquareError(IllegalStateError):
    """Raised when a square matrix is required"""

    def __init__(self, row_size: int, column_size: int):
        super().__init__(
            message=f"expected square matrix but actual {row_size} x {column_size}",
            details={"row_size": row_size, "column_size": column_size},
        )


class IncompleteBuilderError(IllegalStateError):
    """Raised when build() finds positions without a value"""

    def __init__(self, missing: list):
        shown = ", ".join(str(position) for position in missing[:10])
        if len(missing) > 10:
            shown += ", ..."
        super().__init__(
            message=f"expected every position to be set but {len(missing)} missing: {shown}",
            details={"missing": missing},
        )


def check_argument(condition: bool, message: str, expected: Any = None, actual: Any = None) -> None:
    """Raise PreconditionError unless condition holds"""
    if not condition:
        raise PreconditionError(message, expected=expected, actual=actual)


def require_not_none(value: Any, name: str) -> Any:
    """Reject missing arguments"""
    if value is None:
        raise PreconditionError(f"{name} must not be None")
    return value
