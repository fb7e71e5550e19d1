"""Circuit breaker guarding calls to the remote store.

States:
    closed     remote calls allowed; consecutive failures are counted
    open       remote calls skipped until ``reset_timeout`` has elapsed
    half_open  remote calls are retried until one reports back; a success
               closes the breaker, a failure opens it again
"""

import logging
import time
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class BreakerState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """Closed/open/half-open breaker with periodic re-probe."""

    def __init__(
        self,
        failure_threshold: int = 1,
        reset_timeout: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self._clock = clock
        self._state = BreakerState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> BreakerState:
        if self._state == BreakerState.OPEN and self._clock() - self._opened_at >= self.reset_timeout:
            self._state = BreakerState.HALF_OPEN
            logger.info("Circuit breaker half-open, probing remote store")
        return self._state

    @property
    def failures(self) -> int:
        return self._failures

    def allow_request(self) -> bool:
        return self.state != BreakerState.OPEN

    def record_success(self) -> None:
        if self._state != BreakerState.CLOSED:
            logger.info("Remote store reachable again, circuit breaker closed")
        self._state = BreakerState.CLOSED
        self._failures = 0

    def record_failure(self) -> None:
        self._failures += 1
        if self._state == BreakerState.HALF_OPEN or self._failures >= self.failure_threshold:
            if self._state != BreakerState.OPEN:
                logger.warning(
                    f"Circuit breaker opened after {self._failures} failure(s); "
                    f"using local store for {self.reset_timeout:.0f}s"
                )
            self._state = BreakerState.OPEN
            self._opened_at = self._clock()
