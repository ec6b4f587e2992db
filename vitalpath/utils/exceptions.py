"""
Custom Exception Hierarchy

Error types raised outside the pure scoring path: record conversion,
knowledge-base lookups and the HTTP layer.
"""
from typing import Optional, Dict, Any


class VitalPathError(Exception):
    """Base exception for all VitalPath errors."""

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


class RecordValidationError(VitalPathError):
    """A patient record could not be converted into a PatientRecord."""

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


class KnowledgeBaseError(VitalPathError):
    """Lookup of a condition that has no knowledge-base entry."""

    def __init__(
        self,
        message: str,
        condition: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="KNOWLEDGE_BASE_ERROR",
            details={"condition": condition, **(details or {})}
        )
        self.condition = condition

