"""Application lifespan: startup and shutdown.

Only infrastructure wiring lives here. The database engine is created lazily
by the first request that needs it and disposed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup (warn when SQL is not configured); dispose the engine on exit."""
    settings = get_settings()
    if not settings.database_configured:
        logger.warning(
            "DATABASE_URL is not set: flow rule and TAT config endpoints will answer 503"
        )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
