"""
Exceptions raised by the genelib evolution engine.

All engine errors derive from GeneLibError and carry a details mapping so a
failed run can be diagnosed without re-running it.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class GeneLibError(Exception):
    """Base exception for evolution engine errors."""

    error_code = "genelib_error"

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)


class ConfigurationError(GeneLibError, ValueError):
    """Raised when run settings are inconsistent or out of range."""

    error_code = "invalid_argument"


class InvalidResultError(GeneLibError):
    """Raised when a user-supplied operation returns an unexpected value."""

    error_code = "invalid_result"


class UnsupportedOperationError(GeneLibError, NotImplementedError):
    """Raised by abstract chromosome and selector hooks."""

    error_code = "unsupported_operation"
