"""
Program - the runtime loop that owns the model.

One consumer thread (the caller of ``run``) reads input, applies messages
to the model, renders, and interprets effects. Worker tasks, async results
and streams run elsewhere and only ever post messages to a shared FIFO
queue, which is drained before the terminal is read again.
"""

from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Iterable, Optional

from tuava.core.input import NO_INPUT, Event
from tuava.core.terminal import CleanupGuard, Terminal
from tuava.layout.render import render
from tuava.runtime.config import ProgramConfig
from tuava.runtime.effect import NONE, Effect, FromAsync, NoEffect, Once, Pure, Quit, flatten
from tuava.runtime.scheduler import Scheduler
from tuava.runtime.stream import Stream, StreamHandle

logger = logging.getLogger(__name__)

EventMapper = Callable[[Event], Optional[Any]]
StreamsForModel = Callable[[Any], Iterable[Stream]]


def _no_streams(model: Any) -> Iterable[Stream]:
    return ()


class Program:
    """
    Drives an application: input, transitions, rendering, effects, streams.

    Args:
        event_to_message: Maps a terminal event to a message, or None to
            drop the event.
        streams_for_model: Returns the streams the given model wants running.
        terminal: Terminal to drive; defaults to the process's stdin/stdout.
        config: Runtime settings; defaults to ``ProgramConfig()``.
    """

    def __init__(
        self,
        event_to_message: EventMapper,
        streams_for_model: Optional[StreamsForModel] = None,
        *,
        terminal: Optional[Terminal] = None,
        config: Optional[ProgramConfig] = None,
    ) -> None:
        self._config = config or ProgramConfig()
        self._terminal = terminal or Terminal(escape_timeout=self._config.escape_timeout)
        self._event_to_message = event_to_message
        self._streams_for_model = streams_for_model or _no_streams
        self._queue: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._scheduler: Optional[Scheduler] = None
        self._active_streams: dict[str, StreamHandle] = {}
        self._model: Any = None
        self._running = False
        self._guard = CleanupGuard(self._cleanup)

    @property
    def model(self) -> Any:
        """The current model (only meaningful from the loop thread)."""
        return self._model

    @property
    def running(self) -> bool:
        return self._running

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    @property
    def active_streams(self) -> dict[str, StreamHandle]:
        """Snapshot of running stream handles by key."""
        return dict(self._active_streams)

    def send(self, message: Any) -> None:
        """Queue a message for the loop. Safe to call from any thread."""
        if message is not None:
            self._queue.put(message)

    def quit(self) -> None:
        """Stop the loop after the current iteration."""
        self._running = False

    def run(self, initial_model: Any) -> Any:
        """
        Run until quit, end of input, or interrupt, then restore the terminal.

        Returns the final model.
        """
        if self._guard.done:
            raise RuntimeError("A Program can only be run once")

        self._model = initial_model
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="tuava-worker"
        )
        self._scheduler = Scheduler()
        self._guard.install()
        try:
            self._start_terminal()
            self._running = True
            self._render(self._model)
            self._interpret(self._initial_effect(self._model))
            self._diff_streams(self._model)
            self._loop()
        except KeyboardInterrupt:
            logger.debug("Interrupted, shutting down")
        finally:
            try:
                self._guard.run()
            finally:
                self._guard.uninstall()
        return self._model

    def _start_terminal(self) -> None:
        self._terminal.enter_raw_mode()
        if self._config.alternate_screen:
            self._terminal.enter_alternate_screen()
        self._terminal.clear()
        if self._config.hide_cursor:
            self._terminal.hide_cursor()

    def _loop(self) -> None:
        while self._running:
            # Queued messages go first so streams and effects never starve
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                event = self._terminal.read_event(self._config.input_poll_interval)
                if event is NO_INPUT:
                    continue
                if event is None:
                    logger.debug("End of input")
                    break
                message = self._event_to_message(event)
                if message is None:
                    continue
            self._step(message)

    def _step(self, message: Any) -> None:
        update = self._model.update(message)
        next_model = update.model
        if next_model is not self._model and next_model != self._model:
            self._model = next_model
            self._render(next_model)
            self._diff_streams(next_model)
        self._interpret(update.effect)

    def _render(self, model: Any) -> None:
        view = model.view()
        text = view if isinstance(view, str) else render(view)
        self._terminal.draw(text)

    @staticmethod
    def _initial_effect(model: Any) -> Effect:
        init = getattr(model, "init", None)
        return init() if callable(init) else NONE

    def _interpret(self, effect: Optional[Effect]) -> None:
        if effect is None:
            return
        for member in flatten(effect):
            self._interpret_one(member)

    def _interpret_one(self, effect: Effect) -> None:
        if isinstance(effect, NoEffect):
            return
        if isinstance(effect, Pure):
            self.send(effect.message)
        elif isinstance(effect, Once):
            self._submit(effect)
        elif isinstance(effect, FromAsync):
            effect.pending.add_done_callback(partial(self._deliver_async, effect.mapper))
        elif isinstance(effect, Quit):
            self._running = False
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _submit(self, once: Once) -> None:
        assert self._executor is not None
        try:
            self._executor.submit(self._run_once, once)
        except RuntimeError:
            logger.warning("Worker pool is shut down, dropping %r", once)

    def _run_once(self, once: Once) -> None:
        try:
            message = once.mapper(once.computation())
        except Exception:
            logger.exception("Background computation failed")
            return
        self.send(message)

    def _deliver_async(self, mapper: Callable[[Any], Any], pending: Any) -> None:
        if pending.cancelled():
            return
        try:
            message = mapper(pending.result())
        except Exception:
            logger.exception("Async effect failed")
            return
        self.send(message)

    def _diff_streams(self, model: Any) -> None:
        """Start newly desired streams and cancel the ones no longer desired."""
        assert self._scheduler is not None
        desired: set[str] = set()
        for stream in self._streams_for_model(model):
            if stream.key in desired:
                continue
            desired.add(stream.key)
            if stream.key in self._active_streams:
                continue
            try:
                handle = stream.start(self.send, self._scheduler)
            except Exception:
                logger.exception("Failed to start stream %r", stream.key)
                continue
            self._active_streams[stream.key] = handle
            logger.debug("Started stream %r", stream.key)

        for key in [k for k in self._active_streams if k not in desired]:
            self._cancel_stream(key, self._active_streams.pop(key))

    @staticmethod
    def _cancel_stream(key: str, handle: StreamHandle) -> None:
        try:
            handle.cancel()
        except Exception:
            logger.warning("Failed to cancel stream %r", key, exc_info=True)
        else:
            logger.debug("Stopped stream %r", key)

    def _cancel_all_streams(self) -> None:
        streams, self._active_streams = self._active_streams, {}
        for key, handle in streams.items():
            self._cancel_stream(key, handle)

    def _stop_workers(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def _stop_scheduler(self) -> None:
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=True, timeout=self._config.shutdown_timeout)

    def _cleanup(self) -> None:
        """Restore the terminal and stop background work. Runs once, via the guard."""
        self._running = False
        steps = (
            ("show cursor", self._terminal.show_cursor),
            ("reset attributes", self._terminal.reset),
            ("leave alternate screen", self._terminal.exit_alternate_screen),
            ("restore terminal mode", self._terminal.exit_raw_mode),
            ("stop workers", self._stop_workers),
            ("stop scheduler", self._stop_scheduler),
            ("cancel streams", self._cancel_all_streams),
        )
        for name, step in steps:
            try:
                step()
            except Exception:
                logger.warning("Cleanup step %r failed", name, exc_info=True)
