"""
Reservation repository for listing a guest's bookings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from lightbnb.repositories.base import BaseRepository, RowRecord, DEFAULT_LIMIT
from lightbnb.repositories.property import average_rating
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from typing import List
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations joined with their properties."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)

    async def get_guest_reservations(self, guest_id: int, limit: int = DEFAULT_LIMIT) -> List[RowRecord]:
        """
        Get a guest's reservations, earliest first.

        Each row carries the reservation columns, the property columns
        (except its id, available as property_id) and the property's
        average rating across all of its reviews.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            List of reservation row-records
        """
        try:
            property_columns = [column for column in Property.__table__.columns if column.key != "id"]
            query = (
                select(
                    Reservation.id,
                    Reservation.guest_id,
                    Reservation.property_id,
                    Reservation.start_date,
                    Reservation.end_date,
                    *property_columns,
                    average_rating.label("average_rating"),
                )
                .join(Property, Property.id == Reservation.property_id)
                .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
                .where(Reservation.guest_id == guest_id)
                .group_by(Reservation.id, Property.id)
                .order_by(Reservation.start_date, Reservation.id)
                .limit(limit)
            )

            reservations = await self.fetch_all(query)
            logger.debug(f"Retrieved {len(reservations)} reservations for guest {guest_id}")
            return reservations
        except Exception as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise
