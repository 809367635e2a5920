"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    NerveConductionError,
    ReferenceModelError,
    InputValidationError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "NerveConductionError",
    "ReferenceModelError",
    "InputValidationError",
]
