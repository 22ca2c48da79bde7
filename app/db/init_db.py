"""
Database initialization and verification script.

Creates the posts schema if missing and checks connectivity. Can be run
independently before starting the server:

    python -m app.db.init_db
"""

from asyncio import run as asyncio_run
from logging import getLogger

from app.configs import configure_logging, file_logger
from app.db.database import Database

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Verify database connection."""
    database = Database()
    try:
        logger.info("Verifying database connection...")
        await database.connect()
        logger.info("Database ready!")
    finally:
        await database.close()


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
