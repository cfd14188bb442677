"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides an in-memory database per test, test data factories, and common fixtures.
"""

import pytest
import uuid
from datetime import date, timedelta
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from lightbnb.database import Base
from lightbnb.models import PropertyReview
from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.services.rental import RentalDataService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def create_test_engine() -> AsyncEngine:
    """Create an engine on a private in-memory database."""
    return create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine with the full schema created."""
    test_engine = create_test_engine()
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def empty_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a database with no tables, so every query fails."""
    test_engine = create_test_engine()
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    return ReservationRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> BaseRepository:
    return BaseRepository(PropertyReview, db_session)


# Service fixtures
@pytest.fixture
def rental_service(session_factory: async_sessionmaker) -> RentalDataService:
    return RentalDataService(session_factory)


@pytest.fixture
def broken_rental_service(empty_engine: AsyncEngine) -> RentalDataService:
    """Service whose store rejects every query."""
    return RentalDataService(
        async_sessionmaker(bind=empty_engine, class_=AsyncSession, expire_on_commit=False)
    )


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        name: str = "Test User",
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, email: Optional[str] = None, name: str = "Test User") -> dict:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(email=email, name=name))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> dict:
        """Create property data dictionary."""
        data = {
            "owner_id": owner_id,
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?auto=compress&cs=tinysrgb&h=350",
            "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 2,
            "country": "Canada",
            "street": "123 Test Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> dict:
        """Create a test property in the database."""
        return await property_repo.create_property(PropertyFactory.create_property_data(owner_id, **kwargs))


class ReservationFactory:
    """Factory for creating test reservations."""

    @staticmethod
    async def create_reservation(
        reservation_repo: ReservationRepository,
        guest_id: int,
        property_id: int,
        start_date: date,
        end_date: Optional[date] = None
    ) -> dict:
        return await reservation_repo.create({
            "guest_id": guest_id,
            "property_id": property_id,
            "start_date": start_date,
            "end_date": end_date or start_date + timedelta(days=3),
        })


class ReviewFactory:
    """Factory for creating test property reviews."""

    @staticmethod
    async def create_reviews(review_repo: BaseRepository, property_id: int, *ratings: int) -> list:
        return [
            await review_repo.create({"property_id": property_id, "rating": rating, "message": "messages"})
            for rating in ratings
        ]


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> dict:
    """Create a property owner."""
    return await UserFactory.create_user(user_repository, email="owner@example.com", name="Owner")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> dict:
    """Create a guest."""
    return await UserFactory.create_user(user_repository, email="guest@example.com", name="Guest")


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_owner: dict) -> dict:
    """Create a test property."""
    return await PropertyFactory.create_property(property_repository, test_owner["id"])
