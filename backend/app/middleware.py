"""HTTP middleware: access logging and per-client rate limiting."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.models import AppError, ErrorCode, ErrorResponse
from app.utils.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger("app.access")

# Paths that are never rate limited
EXEMPT_PATHS = {"/health"}


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def register_middleware(app: FastAPI, limiter: FixedWindowRateLimiter) -> None:
    """Attach access logging (outermost) and rate limiting to ``app``."""

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        decision = limiter.hit(client_address(request))
        if not decision.allowed:
            body = ErrorResponse(
                error=AppError(
                    code=ErrorCode.RATE_LIMITED,
                    message="Too many requests. Please try again later.",
                ),
                retry_after=decision.retry_after,
            )
            return JSONResponse(
                body.model_dump(mode="json"),
                status_code=429,
                headers={"Retry-After": str(decision.retry_after)},
            )
        return await call_next(request)

    # Registered last so it wraps the rate limiter and sees 429s too
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        target = request.url.path
        logger.info(f"[ACCESS] Incoming request: {request.method} {target} from {client_address(request)}")
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"[ACCESS] Response: {request.method} {target} - "
            f"Status: {response.status_code} - Duration: {elapsed_ms:.2f}ms"
        )
        return response
