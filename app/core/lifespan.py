import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("EAP billing API starting...")

    # Database
    try:
        from app.database.session import async_engine
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    # Scheduler
    try:
        from app.core.services.scheduler_service import start_scheduler
        start_scheduler()
    except Exception as e:
        logger.error(f"APScheduler not started: {e}")

    logger.info("API ready")
    yield

    logger.info("EAP billing API shutting down...")

    try:
        from app.core.services.scheduler_service import shutdown_scheduler
        shutdown_scheduler()
    except Exception as e:
        logger.error(f"APScheduler shutdown failed: {e}")
