"""
Fixed-interval rate limiter for outbound scraping work.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class IntervalRateLimiter:
    """Enforces a minimum pause between consecutive units of work.

    The interval is measured from the end of the previous unit to the start
    of the next one. The first unit never waits. Use as a context manager
    around each unit so the end time is recorded even when the unit fails.
    """

    def __init__(
        self,
        interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_finished: Optional[float] = None
        self.total_waited = 0.0

    def acquire(self) -> float:
        """Block until the next unit may start; returns the seconds waited."""
        if self._last_finished is None:
            return 0.0
        wait = self.interval_seconds - (self._clock() - self._last_finished)
        if wait <= 0:
            return 0.0
        logger.info("Politeness delay: waiting %.1fs", wait)
        self._sleep(wait)
        self.total_waited += wait
        return wait

    def release(self) -> None:
        self._last_finished = self._clock()

    def __enter__(self) -> "IntervalRateLimiter":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
