"""
Database connection and session management.
Handles async database operations with SQLAlchemy and connection pooling.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import QueuePool
from sqlalchemy import text, Integer
from lightbnb.config import Settings, settings
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table uses an integer surrogate primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the loaded row to a row-record keyed by column name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def engine_options(config: Settings) -> Dict[str, Any]:
    """
    Build create_async_engine keyword arguments for the configured store.
    SQLite engines keep SQLAlchemy's default pool, so sizing only applies to PostgreSQL.
    """
    options: Dict[str, Any] = {
        "echo": config.debug,
        "pool_pre_ping": True,  # Validate connections before use
    }
    if config.is_sqlite:
        return options

    options.update(
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_recycle=config.pool_recycle,
        connect_args={
            "server_settings": {
                "application_name": config.app_name,
            }
        },
    )
    return options


def create_engine_from_settings(config: Settings) -> AsyncEngine:
    """Create an async engine (and its connection pool) from settings."""
    return create_async_engine(config.database_url, **engine_options(config))


def get_engine() -> AsyncEngine:
    """Get the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = create_engine_from_settings(settings)
        logger.info(f"Created database engine for {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Get the process-wide session factory bound to the pooled engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def check_database_connection(engine: Optional[AsyncEngine] = None) -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    target_engine = engine or get_engine()
    try:
        async with target_engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.scalar()
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def create_tables(engine: Optional[AsyncEngine] = None):
    """
    Create all database tables.
    Used for development databases and tests.
    """
    # Register all models on the metadata
    import lightbnb.models  # noqa: F401

    target_engine = engine or get_engine()
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")


async def drop_tables(engine: Optional[AsyncEngine] = None):
    """
    Drop all database tables.
    This should only be used in testing or development.
    """
    if settings.is_production:
        raise RuntimeError("Cannot drop tables in production environment")

    import lightbnb.models  # noqa: F401

    target_engine = engine or get_engine()
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")


async def close_db_connection():
    """
    Dispose of the process-wide engine and its pooled connections.
    This should be called during application shutdown.
    """
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database connections closed")


async def get_database_info(engine: Optional[AsyncEngine] = None) -> dict:
    """
    Get database connection information for monitoring.
    Returns connection pool status and database version.
    """
    target_engine = engine or get_engine()
    dialect = target_engine.dialect.name
    version_query = "SELECT sqlite_version()" if dialect == "sqlite" else "SELECT version()"
    try:
        async with target_engine.connect() as conn:
            version_result = await conn.execute(text(version_query))
            version = version_result.scalar()

        pool = target_engine.pool
        info = {
            "dialect": dialect,
            "database_version": version,
            "pool_status": pool.status(),
        }
        if isinstance(pool, QueuePool):
            info.update(
                pool_size=pool.size(),
                checked_in_connections=pool.checkedin(),
                checked_out_connections=pool.checkedout(),
                overflow_connections=pool.overflow(),
            )
        return info
    except Exception as e:
        logger.error(f"Failed to get database info: {e}")
        return {"dialect": dialect, "error": str(e)}
