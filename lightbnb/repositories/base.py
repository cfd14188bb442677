"""
Base repository class with common operations using async SQLAlchemy.
Provides generic row-record access that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.sql import Select
from lightbnb.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

RowRecord = Dict[str, Any]

# Default number of rows returned by listing queries
DEFAULT_LIMIT = 10


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common operations.
    Results are returned as row-records (plain dicts keyed by column name).
    Errors are logged and re-raised for the service layer to handle.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> RowRecord:
        """
        Insert a new record and return it as a row-record.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Row-record of the inserted row, including generated values

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj.to_dict()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: int) -> Optional[RowRecord]:
        """
        Get a record by its ID.

        Args:
            id: Primary key of the record to retrieve

        Returns:
            Row-record if found, None otherwise
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field: str, value: Any) -> Optional[RowRecord]:
        """
        Get a record by a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Row-record if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        try:
            query = select(self.model.__table__).where(getattr(self.model, field) == value)
            row = await self.fetch_one(query)

            if row:
                logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
            else:
                logger.debug(f"{self.model.__name__} with {field}={value} not found")

            return row
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise

    async def fetch_one(self, query: Select) -> Optional[RowRecord]:
        """Execute a query and return the first row-record, or None."""
        result = await self.db.execute(query)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(self, query: Select) -> List[RowRecord]:
        """Execute a query and return all row-records in order."""
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]
