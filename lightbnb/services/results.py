"""
Explicit outcome type for data-access operations.
Separates "not found" from "operation failed" so callers can branch on either.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar
from lightbnb.utils.exceptions import RecordNotFoundError, StoreOperationError
import enum

T = TypeVar("T")


class QueryStatus(str, enum.Enum):
    """Outcome of a data-access operation."""
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Result of a data-access operation: a value, nothing found, or a failure."""
    status: QueryStatus
    value: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "QueryResult[T]":
        return cls(status=QueryStatus.OK, value=value)

    @classmethod
    def not_found(cls) -> "QueryResult[T]":
        return cls(status=QueryStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str, error_code: str = "DATABASE_ERROR") -> "QueryResult[T]":
        return cls(status=QueryStatus.FAILED, error=error, error_code=error_code)

    @property
    def is_ok(self) -> bool:
        return self.status == QueryStatus.OK

    @property
    def is_not_found(self) -> bool:
        return self.status == QueryStatus.NOT_FOUND

    @property
    def is_failed(self) -> bool:
        return self.status == QueryStatus.FAILED

    def unwrap(self) -> T:
        """
        Return the value of a successful result.

        Raises:
            RecordNotFoundError: If nothing was found
            StoreOperationError: If the operation failed
        """
        if self.is_failed:
            raise StoreOperationError(self.error or "Store operation failed", self.error_code)
        if self.is_not_found:
            raise RecordNotFoundError()
        return self.value
