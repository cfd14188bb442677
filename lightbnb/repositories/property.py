"""
Property repository for listing search and creation.

Search is assembled from a fixed set of named predicates. Each predicate takes
the search options and returns a SQLAlchemy condition, or None when its option
is absent, so every filter can be built and inspected on its own.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func
from sqlalchemy.sql import ColumnElement, Select
from lightbnb.repositories.base import BaseRepository, RowRecord, DEFAULT_LIMIT
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertySearchOptions
from typing import Callable, Optional, List, Dict, Any, Tuple
from decimal import Decimal, ROUND_HALF_UP
import logging

logger = logging.getLogger(__name__)

PropertyPredicate = Callable[[PropertySearchOptions], Optional[ColumnElement]]

# Average rating across all reviews of a property; NULL when it has none
average_rating = func.avg(PropertyReview.rating)


def to_cents(amount: Decimal) -> int:
    """Convert a whole-currency amount to integer cents."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def owner_filter(options: PropertySearchOptions) -> Optional[ColumnElement]:
    """Properties owned by a specific user."""
    if options.owner_id is None:
        return None
    return Property.owner_id == options.owner_id


def city_filter(options: PropertySearchOptions) -> Optional[ColumnElement]:
    """Properties whose city contains the given text."""
    if options.city is None:
        return None
    return Property.city.like(f"%{options.city}%")


def price_filter(options: PropertySearchOptions) -> Optional[ColumnElement]:
    """Nightly price bounds, given in whole currency units and compared in cents."""
    minimum = options.minimum_price_per_night
    maximum = options.maximum_price_per_night

    if minimum is not None and maximum is not None:
        return Property.cost_per_night.between(to_cents(minimum), to_cents(maximum))
    if minimum is not None:
        return Property.cost_per_night >= to_cents(minimum)
    if maximum is not None:
        return Property.cost_per_night <= to_cents(maximum)
    return None


def minimum_rating_filter(options: PropertySearchOptions) -> Optional[ColumnElement]:
    """Properties whose average review rating is at least the given value."""
    if options.minimum_rating is None:
        return None
    return average_rating >= float(options.minimum_rating)


# Row filters, applied in the WHERE clause
PROPERTY_WHERE_FILTERS: Tuple[Tuple[str, PropertyPredicate], ...] = (
    ("owner_id", owner_filter),
    ("city", city_filter),
    ("price", price_filter),
)

# Aggregate filters, applied in the HAVING clause
PROPERTY_HAVING_FILTERS: Tuple[Tuple[str, PropertyPredicate], ...] = (
    ("minimum_rating", minimum_rating_filter),
)


class PropertySearchFilters:
    """Builds WHERE and HAVING conditions from property search options."""

    def __init__(self, options: Optional[PropertySearchOptions] = None):
        self.options = options or PropertySearchOptions()

    def _build(self, predicates: Tuple[Tuple[str, PropertyPredicate], ...]) -> Dict[str, ColumnElement]:
        conditions = {}
        for name, predicate in predicates:
            condition = predicate(self.options)
            if condition is not None:
                conditions[name] = condition
        return conditions

    def where_conditions(self) -> Dict[str, ColumnElement]:
        """Active row filters keyed by filter name."""
        return self._build(PROPERTY_WHERE_FILTERS)

    def having_conditions(self) -> Dict[str, ColumnElement]:
        """Active aggregate filters keyed by filter name."""
        return self._build(PROPERTY_HAVING_FILTERS)

    def apply(self, query: Select) -> Select:
        """Add the active filters to a query grouped by property."""
        where = self.where_conditions()
        if where:
            query = query.where(and_(*where.values()))

        having = self.having_conditions()
        if having:
            query = query.having(and_(*having.values()))

        return query

    @property
    def active_filters(self) -> List[str]:
        return list(self.where_conditions()) + list(self.having_conditions())


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings with filtered search."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> RowRecord:
        """
        Insert a new property listing. New listings are always active.

        Args:
            property_data: Dictionary containing property information

        Returns:
            Row-record of the created property
        """
        try:
            created_property = await self.create({**property_data, "active": True})
            logger.info(f"Created property: {created_property['title']} (ID: {created_property['id']})")
            return created_property
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise

    def build_search_query(self, filters: PropertySearchFilters, limit: int = DEFAULT_LIMIT) -> Select:
        """
        Build the property search query.

        Properties are outer-joined to their reviews so unreviewed listings
        are still returned, with a NULL average_rating.
        """
        query = (
            select(*Property.__table__.columns, average_rating.label("average_rating"))
            .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
            .group_by(Property.id)
        )
        query = filters.apply(query)
        return query.order_by(Property.cost_per_night, Property.id).limit(limit)

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        limit: int = DEFAULT_LIMIT
    ) -> List[RowRecord]:
        """
        Search properties, cheapest first.

        Args:
            filters: PropertySearchFilters instance with search criteria
            limit: Maximum number of records to return

        Returns:
            List of property row-records with an average_rating column
        """
        try:
            query = self.build_search_query(filters, limit)
            properties = await self.fetch_all(query)

            logger.debug(
                f"Property search with filters {filters.active_filters} returned {len(properties)} results"
            )
            return properties
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise
