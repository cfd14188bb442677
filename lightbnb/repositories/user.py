"""
User repository for account lookup and creation.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.base import BaseRepository, RowRecord
from lightbnb.models.user import User
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts keyed by id or email."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> RowRecord:
        """
        Insert a new user.

        No uniqueness pre-check is made; a duplicate email is rejected by the
        unique constraint on users.email.

        Args:
            user_data: Dictionary with name, email and password

        Returns:
            Row-record of the created user
        """
        try:
            created_user = await self.create({
                "name": user_data["name"],
                "email": user_data["email"],
                "password": user_data["password"],
            })
            logger.info(f"Created user: {created_user['email']} (ID: {created_user['id']})")
            return created_user
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[RowRecord]:
        """
        Get user by email address (exact match).

        Args:
            email: Email address to search for

        Returns:
            User row-record if found, None otherwise
        """
        return await self.get_by_field("email", email)
