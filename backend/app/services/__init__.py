"""Road Trip geo services.

Service layer components:
- Upstream: single-shot HTTP fetcher with outcome classification
- Weather: WeatherAPI.com current conditions and forecasts
- Places: Geoapify geocoding and nearby points of interest
- Routing: OpenRouteService geocoding and directions
"""

from .places import PlacesService
from .routing import RouteService
from .upstream import (
    EmptyResult,
    Success,
    Timeout,
    UpstreamError,
    UpstreamFetcher,
    UpstreamResult,
)
from .weather import WeatherService

__all__ = [
    # Upstream
    "EmptyResult",
    "Success",
    "Timeout",
    "UpstreamError",
    "UpstreamFetcher",
    "UpstreamResult",
    # Endpoint handlers
    "PlacesService",
    "RouteService",
    "WeatherService",
]
