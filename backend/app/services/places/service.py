"""Nearby places via the Geoapify geocoding and places APIs.

Architecture:
1. Geocoding API: resolve the location name to a center point
2. Places API: query attractions, entertainment, restaurants and
   accommodation within ``radius`` meters of the center
3. Normalize and cache the result (30 minute TTL by default)
"""

import logging
from typing import Optional

from app.models import PlacesPayload, ServiceError
from app.services.upstream import Success, UpstreamFetcher, failure_to_error, has_no_features
from app.utils.cache import LRUCache, build_cache_key
from app.utils.result import Err, Ok, Result

from .normalizer import normalize_places

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 5000
DEFAULT_LIMIT = 6
MAX_LIMIT = 100

PLACE_CATEGORIES = [
    "tourism.attraction",
    "entertainment",
    "catering.restaurant",
    "accommodation",
]


class PlacesService:
    """Nearby points-of-interest handler."""

    GEOCODE_URL = "https://api.geoapify.com/v1/geocode/search"
    PLACES_URL = "https://api.geoapify.com/v2/places"
    TIMEOUT = 5.0

    def __init__(
        self,
        cache: LRUCache,
        fetcher: UpstreamFetcher,
        api_key: Optional[str],
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._api_key = api_key

    async def nearby(
        self,
        location: Optional[str],
        radius: int = DEFAULT_RADIUS,
        limit: int = DEFAULT_LIMIT,
    ) -> Result[PlacesPayload]:
        """Find places around a named location.

        Args:
            location: Free-text location to search around.
            radius: Search radius in meters.
            limit: Maximum number of places requested from Geoapify.
        """
        if not location or not location.strip():
            return Err(ServiceError.validation("Location query parameter is required."))
        if radius <= 0:
            return Err(ServiceError.validation("Radius must be a positive number of meters."))
        if not 1 <= limit <= MAX_LIMIT:
            return Err(ServiceError.validation(f"Limit must be between 1 and {MAX_LIMIT}."))

        key = build_cache_key("places", location, radius, limit)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[PLACES] Cache hit: {key}")
            return Ok(cached)

        if not self._api_key:
            return Err(ServiceError.configuration("Geoapify API key is not configured on the server."))

        location = location.strip()
        geocoded = await self._fetcher.get(
            self.GEOCODE_URL,
            {"text": location, "apiKey": self._api_key, "limit": 1},
            timeout=self.TIMEOUT,
            is_empty=has_no_features,
        )
        if not isinstance(geocoded, Success):
            return Err(self._failure(
                geocoded, f"Could not find coordinates for location: {location}"
            ))

        center = geocoded.payload["features"][0]
        try:
            lon = center["properties"]["lon"]
            lat = center["properties"]["lat"]
        except (KeyError, TypeError) as e:
            logger.error(f"[PLACES] Geocode result without coordinates for {location!r}")
            return Err(ServiceError.internal("An unexpected server error occurred.", detail=repr(e)))

        logger.info(f"[PLACES] {location!r} resolved to ({lat}, {lon})")

        found = await self._fetcher.get(
            self.PLACES_URL,
            {
                "categories": ",".join(PLACE_CATEGORIES),
                "filter": f"circle:{lon},{lat},{radius}",
                "bias": f"proximity:{lon},{lat}",
                "limit": limit,
                "apiKey": self._api_key,
            },
            timeout=self.TIMEOUT,
            is_empty=has_no_features,
        )
        if not isinstance(found, Success):
            return Err(self._failure(found, f"No nearby places found for {location}"))

        try:
            payload = normalize_places(center, found.payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[PLACES] Malformed places response for {location!r}: {e!r}")
            return Err(ServiceError.internal("An unexpected server error occurred.", detail=repr(e)))

        logger.info(f"[PLACES] {len(payload.places)} named places near {location!r}")
        self._cache.set(key, payload)
        return Ok(payload)

    @staticmethod
    def _failure(result, empty_message: str) -> ServiceError:
        return failure_to_error(
            result,
            timeout_message="Request to Geoapify timed out",
            failure_message="Failed to communicate with Geoapify service",
            empty_message=empty_message,
        )
