"""Core utilities package"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger, get_operation_logger
from .errors import (
    LinearAlgebraError,
    PreconditionError,
    IllegalStateError,
    MatrixNotSquareError,
    IncompleteBuilderError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "get_operation_logger",
    "LinearAlgebraError",
    "PreconditionError",
    "IllegalStateError",
    "MatrixNotSquareError",
    "IncompleteBuilderError",
]
