"""Unit tests for the nearby places service."""

import pytest

from app.models import ErrorCode
from app.services.places import PlacesService
from app.utils.result import Err, Ok
from upstream_fakes import GEOAPIFY_HOST, PARIS_GEOCODE, PARIS_PLACES, raise_timeout

GEOCODE = "/v1/geocode/search"
PLACES = "/v2/places"
TTL = 1800


@pytest.fixture
def service(make_cache, fetcher) -> PlacesService:
    return PlacesService(make_cache(TTL), fetcher, api_key="geo-key")


def serve_paris(upstream) -> None:
    upstream.on(GEOAPIFY_HOST, GEOCODE, PARIS_GEOCODE)
    upstream.on(GEOAPIFY_HOST, PLACES, PARIS_PLACES)


class TestPlacesNearby:

    @pytest.mark.asyncio
    async def test_paris(self, service, upstream) -> None:
        serve_paris(upstream)
        result = await service.nearby("Paris")
        assert isinstance(result, Ok)
        payload = result.value
        assert payload.location == "Paris, France"
        assert payload.coordinates == [2.3514, 48.8566]
        assert [p.name for p in payload.places] == ["Eiffel Tower", "Le Jules Verne"]
        assert payload.places[0].category == "tourism.attraction"

    @pytest.mark.asyncio
    async def test_places_query_parameters(self, service, upstream) -> None:
        serve_paris(upstream)
        await service.nearby(" Paris ", radius=2000, limit=10)

        geocode = upstream.calls[0].url.params
        assert geocode["text"] == "Paris"
        assert geocode["apiKey"] == "geo-key"

        places = upstream.calls[1].url.params
        assert places["filter"] == "circle:2.3514,48.8566,2000"
        assert places["bias"] == "proximity:2.3514,48.8566"
        assert places["limit"] == "10"
        assert places["categories"] == "tourism.attraction,entertainment,catering.restaurant,accommodation"

    @pytest.mark.asyncio
    async def test_defaults(self, service, upstream) -> None:
        serve_paris(upstream)
        await service.nearby("Paris")
        places = upstream.calls[1].url.params
        assert places["filter"].endswith(",5000")
        assert places["limit"] == "6"

    @pytest.mark.asyncio
    async def test_cached_by_location_radius_and_limit(self, service, upstream) -> None:
        serve_paris(upstream)
        await service.nearby("Paris")
        await service.nearby("PARIS ")
        assert upstream.count(GEOAPIFY_HOST, GEOCODE) == 1
        assert upstream.count(GEOAPIFY_HOST, PLACES) == 1

        await service.nearby("Paris", radius=1000)
        assert upstream.count(GEOAPIFY_HOST, PLACES) == 2

    @pytest.mark.asyncio
    async def test_expires_after_ttl(self, service, upstream, clock) -> None:
        serve_paris(upstream)
        await service.nearby("Paris")
        clock.advance(TTL)
        await service.nearby("Paris")
        assert upstream.count(GEOAPIFY_HOST, PLACES) == 2

    @pytest.mark.asyncio
    async def test_unknown_location(self, service, upstream) -> None:
        upstream.on(GEOAPIFY_HOST, GEOCODE, {"type": "FeatureCollection", "features": []})
        result = await service.nearby("Nowhereville")
        assert isinstance(result, Err)
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "Could not find coordinates for location: Nowhereville"
        assert upstream.count(GEOAPIFY_HOST, PLACES) == 0

    @pytest.mark.asyncio
    async def test_no_places(self, service, upstream) -> None:
        upstream.on(GEOAPIFY_HOST, GEOCODE, PARIS_GEOCODE)
        upstream.on(GEOAPIFY_HOST, PLACES, {"type": "FeatureCollection", "features": []})
        result = await service.nearby("Paris")
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "No nearby places found for Paris"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("location", [None, "", "  "])
    async def test_missing_location(self, service, upstream, location) -> None:
        result = await service.nearby(location)
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert upstream.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("radius,limit", [(0, 6), (-5, 6), (5000, 0), (5000, 101)])
    async def test_out_of_range_arguments(self, service, upstream, radius, limit) -> None:
        result = await service.nearby("Paris", radius=radius, limit=limit)
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_missing_api_key(self, make_cache, fetcher, upstream) -> None:
        service = PlacesService(make_cache(TTL), fetcher, api_key="")
        result = await service.nearby("Paris")
        assert result.error.code == ErrorCode.CONFIGURATION_ERROR
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_timeout(self, service, upstream) -> None:
        upstream.on(GEOAPIFY_HOST, GEOCODE, raise_timeout)
        result = await service.nearby("Paris")
        assert result.error.code == ErrorCode.TIMEOUT
        assert result.error.message == "Request to Geoapify timed out"

    @pytest.mark.asyncio
    async def test_upstream_error(self, service, upstream) -> None:
        upstream.on(GEOAPIFY_HOST, GEOCODE, PARIS_GEOCODE)
        upstream.on(GEOAPIFY_HOST, PLACES, {"message": "Invalid apiKey"}, status=401)
        result = await service.nearby("Paris")
        assert result.error.code == ErrorCode.UPSTREAM_ERROR
        assert result.error.status_code == 500
        assert result.error.message == "Failed to communicate with Geoapify service"

    @pytest.mark.asyncio
    async def test_request_timeouts(self, service, upstream) -> None:
        serve_paris(upstream)
        await service.nearby("Paris")
        assert [r.extensions["timeout"]["read"] for r in upstream.calls] == [5.0, 5.0]
