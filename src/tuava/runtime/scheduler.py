"""Timer facility that drives interval and polling streams."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    """
    A callback repeated at a fixed rate on its own daemon thread.

    ``cancel`` stops future runs promptly; a run already in progress is
    allowed to finish.
    """

    def __init__(self, fn: Callable[[], None], period: float, initial_delay: float, name: str) -> None:
        self._fn = fn
        self._period = period
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(initial_delay,), name=name, daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def cancel(self) -> None:
        self._stopped.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self, initial_delay: float) -> None:
        next_run = time.monotonic() + initial_delay
        while not self._stopped.wait(max(0.0, next_run - time.monotonic())):
            try:
                self._fn()
            except Exception:
                logger.exception("Scheduled task %s failed", self._thread.name)
            next_run += self._period
            # Skip missed runs instead of firing a burst after a stall
            now = time.monotonic()
            if next_run < now:
                next_run = now


class Scheduler:
    """Creates fixed-rate tasks and stops all of them on shutdown."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: list[ScheduledTask] = []
        self._shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def schedule_at_fixed_rate(
        self,
        fn: Callable[[], None],
        period: float,
        initial_delay: Optional[float] = None,
        name: str = "tuava-timer",
    ) -> ScheduledTask:
        """Run ``fn`` every ``period`` seconds, first after ``initial_delay`` (default: one period)."""
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        delay = period if initial_delay is None else max(0.0, initial_delay)
        task = ScheduledTask(fn, period, delay, name)
        with self._lock:
            if self._shutdown:
                raise RuntimeError("Scheduler has been shut down")
            self._tasks = [t for t in self._tasks if not t.cancelled]
            self._tasks.append(task)
        task.start()
        return task

    def shutdown(self, wait: bool = False, timeout: Optional[float] = None) -> None:
        """Cancel every task and refuse new ones."""
        with self._lock:
            self._shutdown = True
            tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        if wait:
            for task in tasks:
                task.join(timeout)
