"""
Repository layer for data access operations.
Builds parameterized queries and returns row-records; failures are logged and re-raised.
"""

from lightbnb.repositories.base import BaseRepository, DEFAULT_LIMIT
from lightbnb.repositories.property import (
    PropertyRepository,
    PropertySearchFilters,
    PROPERTY_WHERE_FILTERS,
    PROPERTY_HAVING_FILTERS,
)
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "DEFAULT_LIMIT",
    "PropertyRepository",
    "PropertySearchFilters",
    "PROPERTY_WHERE_FILTERS",
    "PROPERTY_HAVING_FILTERS",
    "ReservationRepository",
    "UserRepository",
]
