"""Weather lookups via WeatherAPI.com.

Current conditions and multi-day forecasts share one cache (10 minute TTL
by default). Keys are derived from the trimmed, lower-cased location so that
"Paris", " paris " and "PARIS" share an entry.
"""

import logging
from typing import Optional

from app.models import ErrorCode, ForecastPayload, ServiceError, WeatherPayload
from app.services.upstream import Success, UpstreamFetcher, failure_to_error
from app.utils.cache import LRUCache, build_cache_key
from app.utils.result import Err, Ok, Result

from .normalizer import MAX_FORECAST_DAYS, normalize_current, normalize_forecast

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 3


class WeatherService:
    """Current weather and forecast handler."""

    BASE_URL = "https://api.weatherapi.com/v1"
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

    async def current(self, location: Optional[str]) -> Result[WeatherPayload]:
        if not location or not location.strip():
            return Err(ServiceError.validation("Location query parameter is required."))

        key = build_cache_key("current", location)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[WEATHER] Cache hit: {key}")
            return Ok(cached)

        if not self._api_key:
            return Err(ServiceError.configuration("Weather API key is not configured on the server."))

        result = await self._fetcher.get(
            f"{self.BASE_URL}/current.json",
            {"key": self._api_key, "q": location.strip(), "aqi": "no"},
            timeout=self.TIMEOUT,
        )
        if not isinstance(result, Success):
            return Err(self._failure(result))

        try:
            payload = normalize_current(result.payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[WEATHER] Malformed current weather for {location!r}: {e!r}")
            return Err(ServiceError.internal("Failed to fetch weather data.", detail=repr(e)))

        self._cache.set(key, payload)
        return Ok(payload)

    async def forecast(
        self, location: Optional[str], days: int = DEFAULT_FORECAST_DAYS
    ) -> Result[ForecastPayload]:
        if not location or not location.strip():
            return Err(ServiceError.validation("Location is required."))
        if days > MAX_FORECAST_DAYS:
            return Err(ServiceError.validation(
                f"Forecast is limited to a maximum of {MAX_FORECAST_DAYS} days."
            ))
        if days < 1:
            return Err(ServiceError.validation("Forecast must cover at least 1 day."))

        key = build_cache_key("forecast", location, days)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[WEATHER] Cache hit: {key}")
            return Ok(cached)

        if not self._api_key:
            return Err(ServiceError.configuration("Weather API key is not configured on the server."))

        result = await self._fetcher.get(
            f"{self.BASE_URL}/forecast.json",
            {
                "key": self._api_key,
                "q": location.strip(),
                "days": days,
                "aqi": "no",
                "alerts": "no",
            },
            timeout=self.TIMEOUT,
        )
        if not isinstance(result, Success):
            return Err(self._failure(result))

        try:
            payload = normalize_forecast(result.payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[WEATHER] Malformed forecast for {location!r}: {e!r}")
            return Err(ServiceError.internal("Failed to fetch weather data.", detail=repr(e)))

        self._cache.set(key, payload)
        return Ok(payload)

    @staticmethod
    def _failure(result) -> ServiceError:
        # WeatherAPI answers 400 when it cannot resolve the query
        return failure_to_error(
            result,
            timeout_message="Weather service request timed out.",
            failure_message="Failed to fetch weather data.",
            status_errors={400: (ErrorCode.NOT_FOUND, "Location not found.")},
        )
