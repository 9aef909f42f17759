import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def init_models(bind: Optional[AsyncEngine] = None, drop_existing: bool = False) -> None:
    """Create every table registered on Base.metadata."""
    from backend.app.db.base import Base, engine
    # Register the tables on the metadata
    from backend.app import models  # noqa: F401

    target = bind or engine
    try:
        async with target.begin() as conn:
            if drop_existing:
                await conn.run_sync(Base.metadata.drop_all)
            logger.info("Creating database tables")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ready")
    except Exception:
        logger.exception("Could not create database tables")
        raise
