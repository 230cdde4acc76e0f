"""Caller-supplied time limit for optimization runs."""
import time
from typing import Callable, Optional

from fleetroute.exceptions import OptimizationTimeout


class Deadline:
    """Tracks elapsed time against an optional limit in seconds.

    A deadline without a limit never expires, so engine stages can call
    :meth:`check` unconditionally.
    """

    def __init__(self, time_limit: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        if time_limit is not None and time_limit < 0:
            raise ValueError(f"time_limit must be non-negative. Got: {time_limit}")
        self.time_limit = time_limit
        self._clock = clock
        self._start = clock()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._start

    @property
    def expired(self) -> bool:
        return self.time_limit is not None and self.elapsed > self.time_limit

    def check(self, stage: str) -> None:
        """Raise :class:`OptimizationTimeout` if the limit has been exceeded."""
        if self.expired:
            raise OptimizationTimeout(stage, self.elapsed, self.time_limit)
