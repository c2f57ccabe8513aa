"""Road Trip API data models."""

from .core import (
    DaySummary,
    ForecastDay,
    ForecastPayload,
    Place,
    PlacesPayload,
    RouteEndpoint,
    RoutePayload,
    RouteRequest,
    RouteStep,
    WeatherPayload,
)
from .errors import (
    HTTP_STATUS_BY_CODE,
    AppError,
    ErrorCode,
    ErrorResponse,
    ServiceError,
)

__all__ = [
    "DaySummary",
    "ForecastDay",
    "ForecastPayload",
    "Place",
    "PlacesPayload",
    "RouteEndpoint",
    "RoutePayload",
    "RouteRequest",
    "RouteStep",
    "WeatherPayload",
    "HTTP_STATUS_BY_CODE",
    "AppError",
    "ErrorCode",
    "ErrorResponse",
    "ServiceError",
]
