"""
Database health check for operators.
Verifies that the configured store is reachable and reports connection pool status.
"""

import asyncio
import sys
from sqlalchemy.ext.asyncio import AsyncEngine
from lightbnb.config import configure_logging
from lightbnb.database import check_database_connection, get_database_info, get_engine, close_db_connection
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


async def run_healthcheck(engine: Optional[AsyncEngine] = None) -> Dict[str, Any]:
    """
    Check connectivity and collect database information.

    Args:
        engine: Engine to check; defaults to the process-wide engine

    Returns:
        Dictionary with a "healthy" flag and, when reachable, database details
    """
    target_engine = engine or get_engine()
    healthy = await check_database_connection(target_engine)
    report: Dict[str, Any] = {"healthy": healthy}

    if healthy:
        report.update(await get_database_info(target_engine))
    else:
        logger.error("Database health check failed")

    return report


async def _main() -> int:
    try:
        report = await run_healthcheck()
    finally:
        await close_db_connection()

    for key, value in report.items():
        print(f"{key}: {value}")
    return 0 if report["healthy"] else 1


def main():
    """Console entry point."""
    configure_logging()
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
