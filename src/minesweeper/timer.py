"""
Game timer.

Elapsed time is derived from a clock rather than from a ticking thread, so a
stopped or discarded timer leaves nothing running behind it.
"""
import time
from typing import Callable, Optional


class GameTimer:
    """
    Counts whole seconds while running.

    Stopping freezes the count; only reset() returns it to zero.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the timer.

        Args:
            clock: Monotonic time source in seconds.
        """
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds counted so far."""
        elapsed = self._accumulated
        if self._started_at is not None:
            elapsed += self._clock() - self._started_at
        return int(elapsed)

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        """Stop the timer and zero the count."""
        self._accumulated = 0.0
        self._started_at = None
