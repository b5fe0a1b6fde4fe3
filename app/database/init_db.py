"""
init_db.py

Creates every table registered on the shared metadata.
Intended for local development; production schemas go through Alembic.

Usage:
    python -m app.database.init_db
"""

import asyncio
import logging

from app.core.logging import init_logging
from app.database.base import Base
from app.database import models  # noqa: F401
from app.database.session import engine

logger = logging.getLogger(__name__)


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"[DB] Created {len(Base.metadata.tables)} tables")
    await engine.dispose()


if __name__ == "__main__":
    init_logging()
    asyncio.run(init_db())
