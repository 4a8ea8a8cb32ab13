import logging
import os

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Allowed frontend origins (comma-separated CORS_ORIGINS)
_DEFAULT_CORS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_CORS).split(",") if o.strip()]


def cors_headers(request: Request) -> dict:
    """Headers so error responses (e.g. 500) still satisfy CORS in the browser."""
    origin = request.headers.get("origin", "")
    if CORS_ORIGINS and origin in CORS_ORIGINS:
        return {"Access-Control-Allow-Origin": origin, "Access-Control-Allow-Credentials": "true"}
    fallback = CORS_ORIGINS[0] if CORS_ORIGINS else "http://localhost:3000"
    return {"Access-Control-Allow-Origin": fallback, "Access-Control-Allow-Credentials": "true"}


async def not_found_handler(request: Request, exc):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": f"'{request.url.path}' not found",
            "path": request.url.path,
        },
        headers=cors_headers(request),
    )


async def internal_error_handler(request: Request, exc):
    logger.error(f"Internal error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": "Check server logs."},
        headers=cors_headers(request),
    )


async def any_exception_handler(request: Request, exc: Exception):
    """Catch-all so unhandled exceptions still return CORS headers."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": "Check server logs."},
        headers=cors_headers(request),
    )
