"""
Service layer for the LightBnB data-access operations.
"""

from .results import QueryResult, QueryStatus
from .error_handler import ErrorHandlerService
from .rental import RentalDataService, get_rental_service

__all__ = [
    "QueryResult",
    "QueryStatus",
    "ErrorHandlerService",
    "RentalDataService",
    "get_rental_service",
]
