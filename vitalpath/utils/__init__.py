"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    VitalPathError,
    RecordValidationError,
    KnowledgeBaseError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "VitalPathError",
    "RecordValidationError",
    "KnowledgeBaseError",
]
