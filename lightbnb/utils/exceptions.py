"""
Custom exception classes for the LightBnB data-access layer.
Raised when a caller unwraps a failed or empty query result.
"""

from typing import Optional


class LightBnBError(Exception):
    """Base exception class carrying a machine-readable error code."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class RecordNotFoundError(LightBnBError):
    """Requested record does not exist."""

    def __init__(self, resource: str = "Record", identifier: Optional[str] = None):
        detail = f"{resource} not found"
        if identifier:
            detail += f": {identifier}"
        super().__init__(detail, error_code="NOT_FOUND")


class StoreOperationError(LightBnBError):
    """A store operation failed (connection error, constraint violation, malformed query)."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail, error_code=error_code or "DATABASE_ERROR")
