"""Shared helpers: caching, rate limiting, polyline decoding, results."""
