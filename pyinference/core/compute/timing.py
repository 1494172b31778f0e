"""
Wall-clock timing for backends.

Every backend wraps its stages in named sections so Result.timing can
report where the time went, e.g.

    {'total_seconds': 4.1e-4, 'qr_solve': 2.2e-4, 'residuals': 3e-5, 'inference': 1.1e-4}
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Total elapsed time plus accumulated per-section times.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('independence'):
            params, warnings_list = chisq_independence(design)
        timer.stop()
        timing = timer.result()
    """

    def __init__(self) -> None:
        self._started_at: float | None = None
        self._elapsed: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._started_at = time.perf_counter()

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Add the time spent inside the block to section `name`.

        Re-entering a name accumulates; sections may nest or overlap.
        """
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (time.perf_counter() - t0)

    def result(self) -> dict[str, float]:
        """
        'total_seconds' followed by each section's seconds.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Start a Timer for the duration of the block and stop it on exit.

        with timed() as timer:
            fit(X, y)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
