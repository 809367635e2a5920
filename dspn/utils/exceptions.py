"""
Custom Exception Hierarchy

Malformed measurements are never errors: the engine coerces them and keeps
scoring. These types cover the conditions that must stop an analysis.
"""
from typing import Optional, Dict, Any


class NerveConductionError(Exception):
    """Base exception for all nerve-conduction scoring errors."""
    
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ReferenceModelError(NerveConductionError):
    """
    Missing or degenerate normative reference for a nerve/parameter pair.

    Every supported nerve must have complete, positive-SD reference stats,
    so this signals a broken normative table rather than bad patient input.
    """
    
    def __init__(
        self,
        message: str,
        nerve: str = "unknown",
        parameter: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REFERENCE_MODEL_ERROR",
            details={"nerve": nerve, "parameter": parameter, **(details or {})}
        )
        self.nerve = nerve
        self.parameter = parameter


class InputValidationError(NerveConductionError):
    """Request payload that cannot be mapped onto the supported nerve set."""
    
    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field
