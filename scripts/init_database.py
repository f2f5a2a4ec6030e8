#!/usr/bin/env python3
"""Initialize database tables."""

import argparse
import asyncio

from loguru import logger

from refnet.config.settings import settings
from refnet.database import create_engine, init_models
from refnet.logging_config import setup_logging


async def init_database(database_url: str) -> None:
    """Create all database tables."""
    logger.info("Connecting to database...")
    engine = create_engine(database_url, echo=False)

    try:
        await init_models(engine)
    finally:
        await engine.dispose()
    logger.success("Database tables created successfully!")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy async URL (default: DATABASE_URL)",
    )
    args = parser.parse_args()

    setup_logging()
    asyncio.run(init_database(args.database_url))


if __name__ == "__main__":
    main()
