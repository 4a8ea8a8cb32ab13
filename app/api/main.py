"""
EAP Billing - FastAPI Application

Server-side API for the EAP dashboard: recurring SOL subscription billing
triggered by the platform cron.

Usage:
    uvicorn app.api.main:app --reload --host 0.0.0.0 --port 8000

Docs:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

from dotenv import load_dotenv

load_dotenv()  # load .env from current working directory (project root)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.core.exceptions import (
    CORS_ORIGINS,
    any_exception_handler,
    internal_error_handler,
    not_found_handler,
)
from app.core.lifespan import lifespan
from app.core.logging import setup_logger
from app.core.middleware import request_logger

setup_logger()
logger = logging.getLogger(__name__)

APP_NAME = "EAP Billing API"
APP_VERSION = "1.0.0"


app = FastAPI(
    title=APP_NAME,
    description="Recurring subscription billing for the EAP dashboard.",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Request logging middleware
app.middleware("http")(request_logger)

# Exception handlers (include CORS headers so browser gets valid response)
app.add_exception_handler(404, not_found_handler)
app.add_exception_handler(500, internal_error_handler)
app.add_exception_handler(Exception, any_exception_handler)


# Health endpoints
@app.get("/", tags=["Health"])
async def root():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    health = {"status": "healthy", "components": {"api": "ok"}}
    try:
        from app.database import session as db_session
        from sqlalchemy import text
        async with db_session.async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        health["components"]["database"] = "ok"
    except Exception as e:
        health["status"] = "degraded"
        health["components"]["database"] = f"error: {str(e)}"
    return health


# Register routers
from app.api.routers import cron

app.include_router(cron.router, prefix="/api", tags=["Cron"])

logger.info("Routers registered: cron")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.api.main:app", host="0.0.0.0", port=8000, reload=True)
