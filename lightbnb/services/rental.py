"""
Rental data service exposing the LightBnB data-access operations.

Each operation checks a session out of the connection pool, runs one query
through a repository and returns a QueryResult. Store failures never
propagate to the caller: they are logged and reported as failed results.
"""

from typing import Any, Awaitable, Callable, List, Mapping, Optional, TypeVar, Union
from functools import lru_cache
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from pydantic import ValidationError as PydanticValidationError
from lightbnb.database import get_session_factory
from lightbnb.repositories.base import RowRecord, DEFAULT_LIMIT
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository, PropertySearchFilters
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.schemas.user import UserCreate
from lightbnb.schemas.property import PropertyCreate, PropertySearchOptions
from lightbnb.services.error_handler import ErrorHandlerService, STORE_ERRORS
from lightbnb.services.results import QueryResult
from lightbnb.utils.passwords import verify_password
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RentalDataService:
    """
    Data-access operations for users, reservations and properties.
    Sessions come from the injected factory, one per operation.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def _execute(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]]
    ) -> QueryResult[T]:
        """Run one unit of work in a fresh session, converting store failures into results."""
        try:
            async with self.session_factory() as session:
                value = await work(session)
        except STORE_ERRORS as e:
            return ErrorHandlerService.handle_store_error(operation, e)
        return QueryResult.ok(value)

    @staticmethod
    def _found_or_not(result: QueryResult) -> QueryResult:
        if result.is_ok and result.value is None:
            return QueryResult.not_found()
        return result

    # Users

    async def get_user_with_email(self, email: str) -> QueryResult[RowRecord]:
        """
        Get a single user given their email (exact match).

        Returns:
            OK with the user row-record, NOT_FOUND, or FAILED
        """
        result = await self._execute(
            "get_user_with_email",
            lambda session: UserRepository(session).get_by_email(email)
        )
        return self._found_or_not(result)

    async def get_user_with_id(self, user_id: int) -> QueryResult[RowRecord]:
        """
        Get a single user given their id.

        Returns:
            OK with the user row-record, NOT_FOUND, or FAILED
        """
        result = await self._execute(
            "get_user_with_id",
            lambda session: UserRepository(session).get_by_id(user_id)
        )
        return self._found_or_not(result)

    async def add_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> QueryResult[RowRecord]:
        """
        Add a new user. The password is stored as supplied.

        Args:
            user: Record with name, email and password

        Returns:
            OK with the inserted row-record, or FAILED (duplicate email,
            invalid input, store failure)
        """
        try:
            user_in = user if isinstance(user, UserCreate) else UserCreate.model_validate(dict(user))
        except PydanticValidationError as e:
            return ErrorHandlerService.handle_validation_error("add_user", e)

        return await self._execute(
            "add_user",
            lambda session: UserRepository(session).create_user(user_in.model_dump())
        )

    async def authenticate_user(self, email: str, password: str) -> QueryResult[RowRecord]:
        """
        Check a plain password against the stored hash of the user with this email.

        Returns:
            OK with the user row-record on a match, NOT_FOUND for an unknown
            email or a wrong password, FAILED on store failure
        """
        result = await self.get_user_with_email(email)
        if not result.is_ok:
            return result

        if not verify_password(password, result.value["password"]):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return QueryResult.not_found()

        logger.info(f"User authenticated successfully: {email}")
        return result

    # Reservations

    async def get_all_reservations(self, guest_id: int, limit: int = DEFAULT_LIMIT) -> QueryResult[List[RowRecord]]:
        """
        Get all reservations for a single guest, earliest start date first.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            OK with a list of reservation row-records (possibly empty), or FAILED
        """
        return await self._execute(
            "get_all_reservations",
            lambda session: ReservationRepository(session).get_guest_reservations(guest_id, limit)
        )

    # Properties

    async def get_all_properties(
        self,
        options: Optional[Union[PropertySearchOptions, Mapping[str, Any]]] = None,
        limit: int = DEFAULT_LIMIT
    ) -> QueryResult[List[RowRecord]]:
        """
        Get properties matching the search options, cheapest first.

        Args:
            options: Optional owner_id, city, minimum_price_per_night,
                maximum_price_per_night and minimum_rating filters
            limit: Maximum number of properties to return

        Returns:
            OK with a list of property row-records (possibly empty), or FAILED
        """
        try:
            if isinstance(options, PropertySearchOptions):
                search_options = options
            else:
                search_options = PropertySearchOptions.model_validate(dict(options or {}))
        except PydanticValidationError as e:
            return ErrorHandlerService.handle_validation_error("get_all_properties", e)

        filters = PropertySearchFilters(search_options)
        return await self._execute(
            "get_all_properties",
            lambda session: PropertyRepository(session).search_properties(filters, limit)
        )

    async def add_property(self, property: Union[PropertyCreate, Mapping[str, Any]]) -> QueryResult[RowRecord]:
        """
        Add a property listing. New listings are always active.

        Returns:
            OK with the inserted row-record, or FAILED
        """
        try:
            property_in = property if isinstance(property, PropertyCreate) else PropertyCreate.model_validate(dict(property))
        except PydanticValidationError as e:
            return ErrorHandlerService.handle_validation_error("add_property", e)

        return await self._execute(
            "add_property",
            lambda session: PropertyRepository(session).create_property(property_in.model_dump())
        )


@lru_cache()
def get_rental_service() -> RentalDataService:
    """Get the service bound to the process-wide connection pool."""
    return RentalDataService(get_session_factory())
