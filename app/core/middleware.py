import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)

# Polled by uptime checks; only logged when they fail
QUIET_PATHS = {"/", "/health"}


async def request_logger(request: Request, call_next):
    start = time.perf_counter()

    response = await call_next(request)

    elapsed = time.perf_counter() - start
    status = response.status_code
    if status >= 500:
        level = logging.ERROR
    elif status >= 400:
        level = logging.WARNING
    elif request.url.path in QUIET_PATHS:
        level = logging.DEBUG
    else:
        level = logging.INFO

    client = request.client.host if request.client else "-"
    logger.log(
        level,
        f"{request.method} {request.url.path} from {client} [{status}] ({elapsed:.3f}s)",
    )

    response.headers["X-Process-Time"] = f"{elapsed:.6f}"
    return response
