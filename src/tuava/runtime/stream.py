"""Streams - named, cancellable sources of messages (timers, polls)."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from tuava.core.terminal import Terminal, TerminalSize
from tuava.runtime.scheduler import Scheduler

Emit = Callable[[Any], None]

RESIZE_POLL_INTERVAL = 0.2


class StreamHandle(Protocol):
    """Returned by a started stream; cancelling stops further emissions."""

    def cancel(self) -> None: ...


@dataclass(frozen=True)
class Stream:
    """
    A continuous message source identified by a stable ``key``.

    Program starts a stream the first time its key is desired and cancels
    it when the key disappears; a key that stays desired is never restarted,
    even if a new Stream object with the same key is supplied.
    """
    key: str
    starter: Callable[[Emit, Scheduler], StreamHandle] = field(compare=False, repr=False)

    def start(self, emit: Emit, scheduler: Scheduler) -> StreamHandle:
        return self.starter(emit, scheduler)

    @classmethod
    def interval(cls, key: str, period: float, supplier: Callable[[], Any]) -> Stream:
        """Emit ``supplier()`` every ``period`` seconds, starting one period in."""

        def start(emit: Emit, scheduler: Scheduler) -> StreamHandle:
            return scheduler.schedule_at_fixed_rate(
                lambda: emit(supplier()), period, name=f"stream:{key}"
            )

        return cls(key, start)

    @classmethod
    def resize(
        cls,
        key: str,
        mapper: Callable[[TerminalSize], Any],
        get_size: Optional[Callable[[], TerminalSize]] = None,
        poll: float = RESIZE_POLL_INTERVAL,
    ) -> Stream:
        """
        Emit ``mapper(size)`` whenever the terminal size changes.

        The size is sampled when the stream starts and then polled; only
        changes are reported.
        """
        size_of = get_size or Terminal.size

        def start(emit: Emit, scheduler: Scheduler) -> StreamHandle:
            lock = threading.Lock()
            last = [size_of()]

            def check() -> None:
                now = size_of()
                with lock:
                    previous, last[0] = last[0], now
                if previous != now:
                    emit(mapper(now))

            return scheduler.schedule_at_fixed_rate(check, poll, name=f"stream:{key}")

        return cls(key, start)
