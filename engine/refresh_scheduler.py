"""Fixed-interval scheduler for price refreshes.

Runs a task once on start and then every ``interval`` seconds on a daemon
thread until cancelled. There is no backoff: a failed run is simply followed
by the next tick.
"""
from __future__ import annotations

import math
import threading
from typing import Callable, Optional

from common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_REFRESH_INTERVAL = 60.0


class RefreshScheduler:
    """Cancellable repeating task."""

    def __init__(self, task: Callable[[], object], interval: float = DEFAULT_REFRESH_INTERVAL) -> None:
        self._task = task
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.runs = 0

    @property
    def interval(self) -> float:
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"interval must be positive and finite, got {value}")
        self._interval = float(value)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_now(self) -> None:
        """Run the task once on the calling thread."""
        self.runs += 1
        try:
            self._task()
        except Exception:
            logger.exception("Scheduled refresh raised")

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.run_now()
            if self._stop.wait(self.interval):
                break

    def start(self) -> "RefreshScheduler":
        if self.is_running:
            raise RuntimeError("scheduler already started")
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="price-refresh", daemon=True)
        self._thread.start()
        logger.debug(f"Refresh scheduled every {self.interval:g}s")
        return self

    def cancel(self, timeout: Optional[float] = None) -> None:
        """Stop scheduling further runs; a run in progress is allowed to finish."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
