"""Routing service module.

OpenRouteService geocoding and directions with polyline decoding.
"""

from .normalizer import normalize_route, straight_line
from .service import DEFAULT_PROFILE, ORS_PROFILES, RouteService

__all__ = [
    "DEFAULT_PROFILE",
    "ORS_PROFILES",
    "RouteService",
    "normalize_route",
    "straight_line",
]
