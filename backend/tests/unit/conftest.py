"""Shared fixtures for unit tests.

Upstream APIs are replaced with ``httpx.MockTransport`` so no test touches
the network.
"""

import pytest

from app.services.upstream import UpstreamFetcher
from app.utils.cache import LRUCache
from upstream_fakes import FakeClock, FakeUpstream


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def fetcher(upstream: FakeUpstream) -> UpstreamFetcher:
    return UpstreamFetcher(transport=upstream.transport)


@pytest.fixture
def make_cache(clock: FakeClock):
    def _make(ttl_seconds: float, max_size: int = 100) -> LRUCache:
        return LRUCache(max_size=max_size, ttl_seconds=ttl_seconds, clock=clock)

    return _make
