"""
Error handling service for store failures and invalid input.
Logs each failure once and converts it into a failed QueryResult.
"""

from typing import Any, Dict, List, Tuple, Type
from sqlalchemy.exc import (
    SQLAlchemyError,
    DBAPIError,
    IntegrityError,
    OperationalError,
    ProgrammingError,
    TimeoutError as PoolTimeoutError,
)
from pydantic import ValidationError as PydanticValidationError
from lightbnb.services.results import QueryResult
import logging

logger = logging.getLogger(__name__)

# Failures converted into a failed result rather than propagated
STORE_ERRORS: Tuple[Type[BaseException], ...] = (SQLAlchemyError, OSError)


class ErrorHandlerService:
    """
    Service for handling store and validation failures consistently.
    Provides error codes for callers and a single log line per failure.
    """

    @staticmethod
    def get_error_code(exception: BaseException) -> str:
        """
        Classify a store failure.

        Args:
            exception: Exception raised while talking to the store

        Returns:
            Error code identifier
        """
        if isinstance(exception, IntegrityError):
            return "INTEGRITY_ERROR"
        if isinstance(exception, OperationalError):
            return "OPERATIONAL_ERROR"
        if isinstance(exception, ProgrammingError):
            return "PROGRAMMING_ERROR"
        if isinstance(exception, PoolTimeoutError):
            return "TIMEOUT_ERROR"
        if isinstance(exception, OSError):
            return "CONNECTION_ERROR"
        return "DATABASE_ERROR"

    @staticmethod
    def get_error_message(exception: BaseException) -> str:
        """Driver message for DBAPI errors, the exception text otherwise."""
        if isinstance(exception, DBAPIError) and exception.orig is not None:
            return str(exception.orig)
        return str(exception)

    @staticmethod
    def handle_store_error(operation: str, exception: BaseException) -> QueryResult:
        """
        Log a store failure and convert it into a failed result.

        Args:
            operation: Name of the operation that failed
            exception: Exception raised by the store

        Returns:
            Failed QueryResult carrying the error message and code
        """
        error_code = ErrorHandlerService.get_error_code(exception)
        message = ErrorHandlerService.get_error_message(exception)

        logger.error(
            f"{operation} failed [{error_code}]: {message}",
            extra={"operation": operation, "error_code": error_code}
        )
        return QueryResult.failed(message, error_code)

    @staticmethod
    def format_validation_details(exception: PydanticValidationError) -> List[Dict[str, Any]]:
        """Extract field-level details from a pydantic validation error."""
        details = []
        for error in exception.errors():
            details.append({
                "field": ".".join(str(loc) for loc in error["loc"]) or "__root__",
                "message": error["msg"],
                "type": error["type"],
            })
        return details

    @staticmethod
    def handle_validation_error(operation: str, exception: PydanticValidationError) -> QueryResult:
        """
        Log invalid caller input and convert it into a failed result.
        The store is never contacted for invalid input.
        """
        details = ErrorHandlerService.format_validation_details(exception)
        message = "; ".join(f"{d['field']}: {d['message']}" for d in details)

        logger.warning(
            f"{operation} rejected invalid input: {message}",
            extra={"operation": operation, "error_code": "VALIDATION_ERROR"}
        )
        return QueryResult.failed(message, "VALIDATION_ERROR")
