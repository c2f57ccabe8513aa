"""API routes for the Road Trip geo endpoints.

Each endpoint delegates to the service on ``app.state`` and translates its
result: ``Ok`` payloads are returned as-is, ``Err`` values become the error
envelope with the status code of their error kind.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.models import (
    AppError,
    ErrorResponse,
    ForecastPayload,
    PlacesPayload,
    RoutePayload,
    RouteRequest,
    ServiceError,
    WeatherPayload,
)
from app.services import PlacesService, RouteService, WeatherService
from app.services.places import DEFAULT_LIMIT, DEFAULT_RADIUS
from app.services.weather import DEFAULT_FORECAST_DAYS
from app.utils.result import Err

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid or missing input"},
    404: {"model": ErrorResponse, "description": "Nothing found upstream"},
    408: {"model": ErrorResponse, "description": "Upstream timed out"},
    500: {"model": ErrorResponse, "description": "Upstream or configuration failure"},
}


def error_response(error: ServiceError) -> JSONResponse:
    """Render a service error; ``detail`` is logged, never returned."""
    if error.detail:
        logger.warning(f"{error.code.value}: {error.message} ({error.detail})")
    body = ErrorResponse(error=AppError.from_service_error(error))
    return JSONResponse(
        body.model_dump(mode="json", exclude_none=True),
        status_code=error.status_code,
    )


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service


def get_places_service(request: Request) -> PlacesService:
    return request.app.state.places_service


def get_route_service(request: Request) -> RouteService:
    return request.app.state.route_service


@router.get("/weather", response_model=WeatherPayload, responses=ERROR_RESPONSES)
async def get_weather(
    location: Optional[str] = Query(None, description="City or place name"),
    service: WeatherService = Depends(get_weather_service),
):
    """Current weather for a location."""
    result = await service.current(location)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@router.get("/weather/forecast", response_model=ForecastPayload, responses=ERROR_RESPONSES)
async def get_weather_forecast(
    location: Optional[str] = Query(None, description="City or place name"),
    days: int = Query(DEFAULT_FORECAST_DAYS, description="Number of days (max 7)"),
    service: WeatherService = Depends(get_weather_service),
):
    """Multi-day forecast for a location."""
    result = await service.forecast(location, days)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@router.get("/places", response_model=PlacesPayload, responses=ERROR_RESPONSES)
async def get_nearby_places(
    location: Optional[str] = Query(None, description="Location to search around"),
    radius: int = Query(DEFAULT_RADIUS, description="Search radius in meters"),
    limit: int = Query(DEFAULT_LIMIT, description="Maximum number of places"),
    service: PlacesService = Depends(get_places_service),
):
    """Points of interest near a location."""
    result = await service.nearby(location, radius, limit)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@router.post("/route", response_model=RoutePayload, responses=ERROR_RESPONSES)
async def get_route(
    request: RouteRequest,
    service: RouteService = Depends(get_route_service),
):
    """Route between two named locations."""
    result = await service.route(
        request.start_location_name,
        request.end_location_name,
        request.profile,
    )
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value
