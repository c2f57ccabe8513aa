"""Unit tests for the weather service."""

import pytest

from app.models import ErrorCode, WeatherPayload
from app.services.weather import WeatherService
from app.utils.result import Err, Ok
from upstream_fakes import (
    LONDON_CURRENT,
    LONDON_NORMALIZED,
    WEATHER_HOST,
    forecast_payload,
    raise_timeout,
)

CURRENT = "/v1/current.json"
FORECAST = "/v1/forecast.json"
TTL = 600


@pytest.fixture
def service(make_cache, fetcher) -> WeatherService:
    return WeatherService(make_cache(TTL), fetcher, api_key="test-key")


class TestWeatherCurrent:

    @pytest.mark.asyncio
    async def test_london(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        result = await service.current("London")
        assert isinstance(result, Ok)
        assert isinstance(result.value, WeatherPayload)
        assert result.value.model_dump() == LONDON_NORMALIZED

    @pytest.mark.asyncio
    async def test_sends_key_and_query(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        await service.current("  London ")
        params = upstream.calls[0].url.params
        assert params["key"] == "test-key"
        assert params["q"] == "London"
        assert params["aqi"] == "no"

    @pytest.mark.asyncio
    async def test_second_call_within_ttl_is_cached(self, service, upstream, clock) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        first = await service.current("London")
        clock.advance(TTL - 1)
        second = await service.current("London")
        assert second.value is first.value
        assert second.value.model_dump_json() == first.value.model_dump_json()
        assert upstream.count(WEATHER_HOST, CURRENT) == 1

    @pytest.mark.asyncio
    async def test_call_after_ttl_refetches_once(self, service, upstream, clock) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        await service.current("London")
        clock.advance(TTL)
        await service.current("London")
        await service.current("London")
        assert upstream.count(WEATHER_HOST, CURRENT) == 2

    @pytest.mark.asyncio
    async def test_key_ignores_case_and_whitespace(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        for location in ["Paris", " paris ", "PARIS"]:
            assert isinstance(await service.current(location), Ok)
        assert upstream.count(WEATHER_HOST, CURRENT) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("location", [None, "", "   "])
    async def test_missing_location(self, service, upstream, location) -> None:
        result = await service.current(location)
        assert isinstance(result, Err)
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_missing_api_key(self, make_cache, fetcher, upstream) -> None:
        service = WeatherService(make_cache(TTL), fetcher, api_key=None)
        result = await service.current("London")
        assert result.error.code == ErrorCode.CONFIGURATION_ERROR
        assert result.error.status_code == 500
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_unknown_location(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, {"error": {"code": 1006, "message": "No matching location found."}}, status=400)
        result = await service.current("Atlantis")
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "Location not found."

    @pytest.mark.asyncio
    async def test_timeout(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, raise_timeout)
        result = await service.current("London")
        assert result.error.code == ErrorCode.TIMEOUT
        assert result.error.status_code == 408

    @pytest.mark.asyncio
    async def test_upstream_failure_not_cached(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, {"error": "down"}, status=502)
        result = await service.current("London")
        assert result.error.code == ErrorCode.UPSTREAM_ERROR
        assert "down" not in result.error.message
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        assert isinstance(await service.current("London"), Ok)
        assert upstream.count(WEATHER_HOST, CURRENT) == 2

    @pytest.mark.asyncio
    async def test_malformed_payload(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, {"location": {"name": "London"}})
        result = await service.current("London")
        assert result.error.code == ErrorCode.INTERNAL_ERROR


class TestWeatherForecast:

    @pytest.mark.asyncio
    async def test_forecast(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, FORECAST, forecast_payload(5))
        result = await service.forecast("London", 5)
        assert isinstance(result, Ok)
        assert len(result.value.forecast) == 5
        assert upstream.calls[0].url.params["days"] == "5"

    @pytest.mark.asyncio
    async def test_default_days(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, FORECAST, forecast_payload(3))
        await service.forecast("London")
        assert upstream.calls[0].url.params["days"] == "3"

    @pytest.mark.asyncio
    async def test_eight_days_rejected_before_upstream(self, service, upstream) -> None:
        result = await service.forecast("London", 8)
        assert isinstance(result, Err)
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert result.error.status_code == 400
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_zero_days_rejected(self, service, upstream) -> None:
        result = await service.forecast("London", 0)
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_missing_location(self, service, upstream) -> None:
        result = await service.forecast("  ", 3)
        assert result.error.code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_cached_per_day_count(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, FORECAST, forecast_payload(3))
        await service.forecast("London", 3)
        await service.forecast(" LONDON", 3)
        await service.forecast("London", 4)
        assert upstream.count(WEATHER_HOST, FORECAST) == 2

    @pytest.mark.asyncio
    async def test_forecast_and_current_do_not_collide(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, CURRENT, LONDON_CURRENT)
        upstream.on(WEATHER_HOST, FORECAST, forecast_payload(3))
        await service.current("London")
        result = await service.forecast("London", 3)
        assert len(result.value.forecast) == 3

    @pytest.mark.asyncio
    async def test_request_timeout(self, service, upstream) -> None:
        upstream.on(WEATHER_HOST, FORECAST, forecast_payload(3))
        await service.forecast("London")
        assert upstream.calls[0].extensions["timeout"]["read"] == 5.0
