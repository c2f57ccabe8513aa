"""Fixed-window request counter keyed by client address."""

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Allow ``max_requests`` per client within each ``window_seconds``.

    A client's window starts with its first request and is replaced by a new
    one on the first request after it expires.
    """

    def __init__(
        self,
        window_seconds: float = 900,
        max_requests: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._max_requests = max_requests
        self._clock = clock
        self._clients: dict[str, _Window] = {}

    def hit(self, client_id: str) -> RateLimitDecision:
        now = self._clock()
        window = self._clients.get(client_id)
        if window is None or now > window.reset_at:
            window = _Window(count=0, reset_at=now + self._window)
            self._clients[client_id] = window

        window.count += 1
        if window.count > self._max_requests:
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                retry_after=max(1, math.ceil(window.reset_at - now)),
            )
        return RateLimitDecision(allowed=True, remaining=self._max_requests - window.count)

    def reset(self) -> None:
        self._clients.clear()
