"""Route computation using OpenRouteService.

Both endpoints are geocoded concurrently, then a directions request is made
between them. Directions are more expensive upstream and get a longer
timeout than geocoding.

Results are cached per (start, end, profile) for an hour by default.
"""

import asyncio
import logging
from typing import Optional

from app.models import ErrorCode, RoutePayload, ServiceError
from app.services.upstream import (
    Success,
    UpstreamFetcher,
    UpstreamResult,
    failure_to_error,
    has_no_features,
)
from app.utils.cache import LRUCache, build_cache_key
from app.utils.result import Err, Ok, Result

from .normalizer import normalize_route

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "driving-car"

ORS_PROFILES = {
    "driving-car",
    "driving-hgv",
    "cycling-regular",
    "cycling-road",
    "cycling-mountain",
    "cycling-electric",
    "foot-walking",
    "foot-hiking",
    "wheelchair",
}

TIMEOUT_MESSAGE = "Route service request timed out."
FAILURE_MESSAGE = "Error fetching route data."


class RouteService:
    """Point-to-point route handler."""

    ORS_URL = "https://api.openrouteservice.org"
    GEOCODE_TIMEOUT = 5.0
    DIRECTIONS_TIMEOUT = 10.0

    def __init__(
        self,
        cache: LRUCache,
        fetcher: UpstreamFetcher,
        api_key: Optional[str],
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._api_key = api_key

    async def route(
        self,
        start_location_name: Optional[str],
        end_location_name: Optional[str],
        profile: str = DEFAULT_PROFILE,
    ) -> Result[RoutePayload]:
        start = (start_location_name or "").strip()
        end = (end_location_name or "").strip()
        if not start or not end:
            return Err(ServiceError.validation("Start and end location names are required."))
        if start.lower() == end.lower():
            return Err(ServiceError.validation("Start and end locations cannot be the same."))
        if profile not in ORS_PROFILES:
            return Err(ServiceError.validation(
                f"Unsupported routing profile: {profile}. Supported: {sorted(ORS_PROFILES)}"
            ))

        key = build_cache_key("route", start, end, profile)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[ROUTE] Cache hit: {key}")
            return Ok(cached)

        if not self._api_key:
            return Err(ServiceError.configuration(
                "OpenRouteService API key not configured on the server."
            ))

        start_result, end_result = await asyncio.gather(
            self._geocode(start),
            self._geocode(end),
        )
        for name, geocoded in ((start, start_result), (end, end_result)):
            if not isinstance(geocoded, Success):
                return Err(failure_to_error(
                    geocoded,
                    timeout_message=TIMEOUT_MESSAGE,
                    failure_message=FAILURE_MESSAGE,
                    empty_message=f'Could not find coordinates for "{name}".',
                ))

        try:
            start_coords = self._coordinates(start_result.payload)
            end_coords = self._coordinates(end_result.payload)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"[ROUTE] Geocode result without coordinates: {e!r}")
            return Err(ServiceError.internal(FAILURE_MESSAGE, detail=repr(e)))

        logger.info(f"[ROUTE] Directions request: {start!r} -> {end!r}, profile={profile}")
        directions = await self._fetcher.post(
            f"{self.ORS_URL}/v2/directions/{profile}",
            {"coordinates": [start_coords, end_coords]},
            timeout=self.DIRECTIONS_TIMEOUT,
            headers={"Authorization": self._api_key},
            is_empty=lambda payload: not isinstance(payload, dict) or not payload.get("routes"),
        )
        if not isinstance(directions, Success):
            return Err(failure_to_error(
                directions,
                timeout_message=TIMEOUT_MESSAGE,
                failure_message=FAILURE_MESSAGE,
                empty_message="Route could not be calculated between these points.",
                status_errors={
                    400: (ErrorCode.VALIDATION_ERROR, "Route request was rejected by the routing service."),
                    404: (ErrorCode.NOT_FOUND, "Route could not be calculated between these points."),
                },
            ))

        try:
            payload = normalize_route(
                directions.payload["routes"][0], start, end, start_coords, end_coords
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[ROUTE] Malformed directions response: {e!r}")
            return Err(ServiceError.internal(FAILURE_MESSAGE, detail=repr(e)))

        logger.info(f"[ROUTE] Route found: {payload.distance} km, {payload.duration} h")
        self._cache.set(key, payload)
        return Ok(payload)

    async def _geocode(self, location_name: str) -> UpstreamResult:
        return await self._fetcher.get(
            f"{self.ORS_URL}/geocode/search",
            {"api_key": self._api_key, "text": location_name, "size": 1},
            timeout=self.GEOCODE_TIMEOUT,
            is_empty=has_no_features,
        )

    @staticmethod
    def _coordinates(payload: dict) -> list[float]:
        """First feature's ``[lon, lat]``."""
        lon, lat = payload["features"][0]["geometry"]["coordinates"][:2]
        return [float(lon), float(lat)]
