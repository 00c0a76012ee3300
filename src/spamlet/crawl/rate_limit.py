"""Advisory global pacing between page visits."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Keeps the long-run average request rate under ``1 / rate_limit``.

    The rate is estimated as visits so far divided by the time since the
    first visit. Before every visit after the first, if that average is at
    or above the ceiling the limiter sleeps for exactly ``rate_limit``
    seconds. Bursts are not smoothed.
    """

    def __init__(
        self,
        rate_limit: Optional[float],
        *,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.rate_limit = rate_limit
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self.request_count = 0
        self._started_at: Optional[float] = None

    @property
    def enabled(self) -> bool:
        return self.rate_limit is not None and self.rate_limit > 0

    def should_pause(self, request_count: int, elapsed: float) -> bool:
        if not self.enabled or request_count <= 1:
            return False
        if elapsed <= 0:
            return True
        return request_count / elapsed >= 1 / self.rate_limit

    def pause(self, duration: float) -> None:
        logger.info("Rate limiting for %.3fs", duration)
        self._sleep(duration)

    def acquire(self) -> bool:
        """Counts one visit and pauses if needed. Returns ``True`` if it paused."""

        now = self._clock()
        if self._started_at is None:
            self._started_at = now
        self.request_count += 1

        if self.should_pause(self.request_count, now - self._started_at):
            self.pause(self.rate_limit)
            return True
        return False
