"""Wall-clock timing for per-request ``processingTimeMS``."""

import time
from typing import Any


__all__ = ["Timer"]


class Timer:
    """Context manager measuring elapsed time with ``time.perf_counter``.

    ``elapsed_ms`` can be read while the block is still running, which is how
    the adapter stamps a response before the ``with`` block exits.
    """

    def __init__(self) -> None:
        self.start_time: float = 0.0
        self.end_time: float = 0.0

    def __enter__(self) -> "Timer":
        """Start timing.

        Returns:
            Timer: This timer, bound by the ``with`` statement.
        """
        self.start_time = time.perf_counter()
        self.end_time = 0.0
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop timing; exceptions from the block propagate.

        Args:
            exc_type: Type of the exception raised in the block, if any.
            exc_val: The exception instance, if any.
            exc_tb: Its traceback, if any.
        """
        self.end_time = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since ``__enter__``.

        Returns:
            float: Time up to ``__exit__``, or up to now while the block is
                still running. 0.0 if the timer never started.
        """
        if self.start_time == 0.0:
            return 0.0
        end = self.end_time or time.perf_counter()
        return (end - self.start_time) * 1000.0
