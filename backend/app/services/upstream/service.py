"""Single-shot HTTP client for third-party geo and weather APIs.

Every call is made once, with a bounded timeout, and its outcome is
classified into one of four results:

- ``Success``: HTTP success with usable JSON
- ``EmptyResult``: HTTP success but nothing usable (e.g. zero geocoding matches)
- ``Timeout``: the upstream did not answer within the bound
- ``UpstreamError``: the upstream answered with an error status, could not be
  reached, or sent a body that is not JSON

There is no retry. Callers decide which user-facing error each result maps to.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import httpx

from app.models import ErrorCode, ServiceError

logger = logging.getLogger(__name__)

# Upstream bodies are truncated before they reach the logs.
MAX_LOGGED_BODY = 500


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class EmptyResult:
    url: str = ""


@dataclass(frozen=True)
class Timeout:
    url: str = ""


@dataclass(frozen=True)
class UpstreamError:
    status: Optional[int]
    body: str = ""


UpstreamResult = Union[Success, EmptyResult, Timeout, UpstreamError]


def _redacted(url: str) -> str:
    """Scheme, host and path only; query strings may carry API keys."""
    parsed = httpx.URL(url)
    return f"{parsed.scheme}://{parsed.host}{parsed.path}"


class UpstreamFetcher:
    """Issues classified HTTP calls to upstream APIs.

    A fresh ``httpx.AsyncClient`` is used per call; ``transport`` lets tests
    substitute ``httpx.MockTransport``.
    """

    HEADERS = {"User-Agent": "RoadTripPlanner/1.0", "Accept": "application/json"}

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def fetch(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        headers: Optional[dict] = None,
        is_empty: Optional[Callable[[Any], bool]] = None,
    ) -> UpstreamResult:
        target = _redacted(url)
        try:
            async with httpx.AsyncClient(
                timeout=timeout, headers=self.HEADERS, transport=self._transport
            ) as client:
                response = await client.request(
                    method, url, params=params, json=json, headers=headers
                )
        except httpx.TimeoutException:
            logger.warning(f"[UPSTREAM] {method} {target} timed out after {timeout}s")
            return Timeout(url=target)
        except httpx.HTTPError as e:
            logger.warning(f"[UPSTREAM] {method} {target} failed: {type(e).__name__}: {e}")
            return UpstreamError(status=None, body=str(e))

        if response.is_error:
            body = response.text[:MAX_LOGGED_BODY]
            logger.warning(f"[UPSTREAM] {method} {target} -> {response.status_code}: {body}")
            return UpstreamError(status=response.status_code, body=body)

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"[UPSTREAM] {method} {target} returned a non-JSON body")
            return UpstreamError(status=response.status_code, body="invalid JSON body")

        if is_empty is not None and is_empty(payload):
            logger.info(f"[UPSTREAM] {method} {target} returned no usable data")
            return EmptyResult(url=target)

        return Success(payload)

    async def get(
        self,
        url: str,
        params: Optional[dict] = None,
        *,
        timeout: float,
        headers: Optional[dict] = None,
        is_empty: Optional[Callable[[Any], bool]] = None,
    ) -> UpstreamResult:
        return await self.fetch(
            "GET", url, timeout=timeout, params=params, headers=headers, is_empty=is_empty
        )

    async def post(
        self,
        url: str,
        json: Optional[dict] = None,
        *,
        timeout: float,
        headers: Optional[dict] = None,
        is_empty: Optional[Callable[[Any], bool]] = None,
    ) -> UpstreamResult:
        return await self.fetch(
            "POST", url, timeout=timeout, json=json, headers=headers, is_empty=is_empty
        )


def has_no_features(payload: Any) -> bool:
    """True for GeoJSON responses without features."""
    return not isinstance(payload, dict) or not payload.get("features")


def failure_to_error(
    result: UpstreamResult,
    *,
    timeout_message: str,
    failure_message: str,
    empty_message: Optional[str] = None,
    status_errors: Optional[dict[int, tuple[ErrorCode, str]]] = None,
) -> ServiceError:
    """Map a non-success upstream result to a user-facing error.

    ``status_errors`` overrides the error for specific upstream status codes.
    The upstream body is kept as ``detail`` for logging only.
    """
    if isinstance(result, Timeout):
        return ServiceError(ErrorCode.TIMEOUT, timeout_message)
    if isinstance(result, EmptyResult):
        return ServiceError(ErrorCode.NOT_FOUND, empty_message or failure_message)
    if isinstance(result, UpstreamError):
        if status_errors and result.status in status_errors:
            code, message = status_errors[result.status]
            return ServiceError(code, message, detail=result.body)
        return ServiceError(ErrorCode.UPSTREAM_ERROR, failure_message, detail=result.body)
    raise TypeError(f"Not a failure result: {result!r}")
