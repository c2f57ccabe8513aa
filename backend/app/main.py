"""Road Trip Geo API FastAPI application.

Main entry point for the backend API server. Caches, the upstream fetcher
and the endpoint services are created when the application starts and live
on ``app.state`` until shutdown.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.config import Settings
from app.middleware import register_middleware
from app.models import AppError, ErrorCode, ErrorResponse
from app.services import PlacesService, RouteService, UpstreamFetcher, WeatherService
from app.utils.cache import LRUCache
from app.utils.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    # JSON lines in production, human-readable locally
    if settings.is_production:
        logging.basicConfig(
            level=settings.log_level,
            format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
            stream=sys.stdout,
        )
    else:
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Configuration; read from the environment when omitted.
        transport: httpx transport for upstream calls (tests pass a
            ``httpx.MockTransport``).
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        missing = settings.missing_api_keys()
        if missing:
            logger.warning(f"Missing API keys (affected endpoints will fail): {', '.join(missing)}")

        fetcher = UpstreamFetcher(transport=transport)
        caches = {
            "weather": LRUCache(settings.cache_max_entries, settings.weather_cache_ttl),
            "places": LRUCache(settings.cache_max_entries, settings.places_cache_ttl),
            "route": LRUCache(settings.cache_max_entries, settings.route_cache_ttl),
        }
        app.state.caches = caches
        app.state.weather_service = WeatherService(caches["weather"], fetcher, settings.weather_api_key)
        app.state.places_service = PlacesService(caches["places"], fetcher, settings.geoapify_api_key)
        app.state.route_service = RouteService(caches["route"], fetcher, settings.ors_api_key)
        yield
        # Shutdown
        for cache in caches.values():
            cache.clear()
        app.state.rate_limiter.reset()

    app = FastAPI(
        title="Road Trip Geo API",
        description="Weather, nearby places and routes for road trip itineraries",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    limiter = FixedWindowRateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
    )
    app.state.rate_limiter = limiter
    register_middleware(app, limiter)

    # CORS outermost so rejected requests still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle malformed query parameters and bodies."""
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        body = ErrorResponse(
            error=AppError(
                code=ErrorCode.VALIDATION_ERROR,
                message="Invalid request format. Please check your input.",
            )
        )
        return JSONResponse(body.model_dump(mode="json", exclude_none=True), status_code=400)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors."""
        logger.exception(f"Unhandled error on {request.url.path}")
        body = ErrorResponse(
            error=AppError(
                code=ErrorCode.INTERNAL_ERROR,
                message="Something went wrong. Please try again.",
            )
        )
        return JSONResponse(body.model_dump(mode="json", exclude_none=True), status_code=500)

    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


_settings = Settings.from_env()
configure_logging(_settings)
app = create_app(_settings)
