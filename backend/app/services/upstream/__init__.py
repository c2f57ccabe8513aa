"""Upstream HTTP fetcher with outcome classification."""

from .service import (
    EmptyResult,
    Success,
    Timeout,
    UpstreamError,
    UpstreamFetcher,
    UpstreamResult,
    failure_to_error,
    has_no_features,
)

__all__ = [
    "EmptyResult",
    "Success",
    "Timeout",
    "UpstreamError",
    "UpstreamFetcher",
    "UpstreamResult",
    "failure_to_error",
    "has_no_features",
]
