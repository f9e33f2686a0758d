"""Pytest configuration: in-memory terminals and test models for driving the runtime."""

from __future__ import annotations

import io
import os
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Mapping, Optional

import pytest
from rich.console import Console

from tuava.core.terminal import Terminal
from tuava.runtime.config import ProgramConfig
from tuava.runtime.effect import NONE, Effect
from tuava.runtime.update import Update


@dataclass
class FakeTerminal:
    """A Terminal wired to in-memory streams, with accessors for what it wrote."""
    terminal: Terminal
    stdout: io.StringIO
    stderr: io.StringIO

    @property
    def output(self) -> str:
        return self.stdout.getvalue()

    @property
    def warnings(self) -> str:
        return self.stderr.getvalue()


def build_terminal(stdin: Any, terminal_cls: type = Terminal) -> FakeTerminal:
    stdout = io.StringIO()
    stderr = io.StringIO()
    console = Console(file=stderr, width=200)
    terminal = terminal_cls(stdin=stdin, stdout=stdout, console=console, escape_timeout=0.01)
    return FakeTerminal(terminal, stdout, stderr)


@pytest.fixture
def make_terminal():
    """Factory for terminals fed from a fixed byte string (EOF after the data)."""

    def factory(data: bytes = b"", terminal_cls: type = Terminal) -> FakeTerminal:
        return build_terminal(io.BytesIO(data), terminal_cls)

    return factory


class PipeInput:
    """
    Input that stays open until closed, like a terminal nobody is typing on.

    Reads through a real file descriptor so timed reads report NO_INPUT.
    """

    def __init__(self) -> None:
        read_fd, self._write_fd = os.pipe()
        self.reader = os.fdopen(read_fd, "rb", buffering=0)
        self._closed = False
        self._lock = threading.Lock()

    def feed(self, data: bytes) -> None:
        os.write(self._write_fd, data)

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                self._closed = True
                os.close(self._write_fd)


@pytest.fixture
def pipe_input() -> Iterator[PipeInput]:
    """An open input stream that ends (EOF) after 5 seconds at the latest."""
    pipe = PipeInput()
    watchdog = threading.Timer(5.0, pipe.close)
    watchdog.daemon = True
    watchdog.start()
    try:
        yield pipe
    finally:
        watchdog.cancel()
        pipe.close()
        pipe.reader.close()


@pytest.fixture
def fast_config() -> ProgramConfig:
    return ProgramConfig(input_poll_interval=0.01, escape_timeout=0.01, shutdown_timeout=0.5)


@dataclass(frozen=True)
class Recorder:
    """
    Test model that records every message it sees.

    ``reactions`` maps a message to the effect returned with it; ``quit_on``
    ends the program.
    """
    seen: tuple = ()
    quit_on: Any = "quit"
    init_effect: Effect = field(default=NONE, compare=False)
    reactions: Mapping[Any, Effect] = field(default_factory=dict, compare=False)

    def init(self) -> Effect:
        return self.init_effect

    def update(self, message: Any) -> Update:
        model = replace(self, seen=self.seen + (message,))
        if message == self.quit_on:
            return Update(model, Effect.quit())
        return Update(model, self.reactions.get(message, NONE))

    def view(self) -> str:
        return " ".join(str(m) for m in self.seen)


def char_message(event: Any) -> Optional[str]:
    """Map CHAR events to their character, drop everything else."""
    return getattr(event, "char", None)
