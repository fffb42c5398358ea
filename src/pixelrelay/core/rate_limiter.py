"""Client-side sliding window rate limiter.

The limiter keeps the timestamps of recent submissions and recomputes the
count over the trailing window on every check, rather than resetting a
counter on a fixed schedule. It is a best-effort throttle owned by a single
form session; it is not a security control.
"""

import logging
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` submissions within any ``window_seconds`` span.

    Args:
        limit: Maximum number of recorded submissions inside the window.
        window_seconds: Length of the trailing window.
        clock: Callable returning the current time in seconds. Defaults to
            :func:`time.monotonic`; tests inject a fake clock.

    Example:
        >>> limiter = SlidingWindowRateLimiter(limit=2, window_seconds=60.0)
        >>> limiter.try_acquire(), limiter.try_acquire(), limiter.try_acquire()
        (True, True, False)
    """

    def __init__(
        self,
        limit: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")

        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: deque[float] = deque()

    def _prune(self, now: float) -> None:
        # Timestamps are appended in clock order, so expired ones sit at the left.
        while self._timestamps and now - self._timestamps[0] >= self.window_seconds:
            self._timestamps.popleft()

    def check(self) -> bool:
        """Return True if another submission is allowed right now.

        Expired timestamps are pruned as a side effect. Nothing is recorded;
        call :meth:`record` once the submission actually proceeds.
        """
        self._prune(self._clock())
        return len(self._timestamps) < self.limit

    def record(self) -> None:
        """Record a submission at the current clock reading."""
        self._timestamps.append(self._clock())

    def try_acquire(self) -> bool:
        """Check the limit and, if allowed, record the submission."""
        if not self.check():
            logger.warning(
                f"Rate limit reached: {len(self._timestamps)} submissions "
                f"in the last {self.window_seconds:g}s"
            )
            return False
        self.record()
        return True

    def remaining(self) -> int:
        """Number of submissions still allowed in the current window."""
        self._prune(self._clock())
        return self.limit - len(self._timestamps)

    def reset(self) -> None:
        """Forget every recorded submission."""
        self._timestamps.clear()

    def __len__(self) -> int:
        return len(self._timestamps)

    def __repr__(self) -> str:
        return (
            f"SlidingWindowRateLimiter(limit={self.limit}, "
            f"window_seconds={self.window_seconds}, recorded={len(self._timestamps)})"
        )
