"""Low-level terminal operations - raw mode, alternate screen, cursor, cleanup."""

from __future__ import annotations

import atexit
import logging
import os
import signal
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Iterator, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from tuava.core.input import InputReader, ReadResult

logger = logging.getLogger(__name__)

RESET = '\x1b[0m'
CLEAR_SCREEN = '\x1b[2J'
CLEAR_TO_EOL = '\x1b[K'
CLEAR_BELOW = '\x1b[J'
CURSOR_HOME = '\x1b[H'
HIDE_CURSOR = '\x1b[?25l'
SHOW_CURSOR = '\x1b[?25h'
ENTER_ALTERNATE_SCREEN = '\x1b[?1049h'
EXIT_ALTERNATE_SCREEN = '\x1b[?1049l'


class TerminalStateError(RuntimeError):
    """Raised when the terminal is used in the wrong mode."""


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    cols: int
    rows: int


class Terminal:
    """
    Terminal I/O for TUI applications.

    Owns the raw-mode and alternate-screen transitions for one pair of
    streams. Every enter/exit call is safe to repeat: entering twice is a
    no-op and so is exiting when nothing was entered.
    """

    def __init__(
        self,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[TextIO] = None,
        console: Optional[Console] = None,
        escape_timeout: float = 0.1,
    ) -> None:
        self._in = stdin if stdin is not None else sys.stdin.buffer
        self._out = stdout if stdout is not None else sys.stdout
        self._console = console if console is not None else Console(stderr=True)
        self._reader = InputReader(self._in, escape_timeout=escape_timeout)
        self._raw = False
        self._fallback = False
        self._saved_attrs: Optional[list[Any]] = None
        self._alternate = False

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions, 80x24 if unavailable."""
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.columns, size.lines)
        except OSError:
            return TerminalSize(80, 24)

    @property
    def is_raw(self) -> bool:
        return self._raw

    @property
    def is_fallback(self) -> bool:
        """True when raw mode was simulated because no terminal is attached."""
        return self._fallback

    @property
    def in_alternate_screen(self) -> bool:
        return self._alternate

    def enter_raw_mode(self) -> None:
        """
        Switch input to unbuffered, unechoed mode.

        Without a controlling terminal this degrades to a warned fallback so
        pipes and tests can still drive the reader.
        """
        if self._raw:
            return
        try:
            import termios
            import tty
        except ImportError:
            self._enter_fallback("terminal control is not available on this platform")
            return

        try:
            fd = self._in.fileno()
            if not os.isatty(fd):
                self._enter_fallback("standard input is not a terminal")
                return
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (OSError, ValueError, termios.error) as exc:
            self._enter_fallback(str(exc) or type(exc).__name__)
            return
        self._raw = True
        self._fallback = False

    def _enter_fallback(self, reason: str) -> None:
        self._console.print(
            f"[yellow]Warning:[/] running in non-terminal mode ({escape(reason)}); "
            "some features may not work correctly."
        )
        self._raw = True
        self._fallback = True

    def exit_raw_mode(self) -> None:
        """Restore the saved terminal discipline."""
        if not self._raw:
            return
        saved = self._saved_attrs
        self._raw = False
        self._fallback = False
        self._saved_attrs = None
        if saved is None:
            return
        import termios
        termios.tcsetattr(self._in.fileno(), termios.TCSADRAIN, saved)

    def enter_alternate_screen(self) -> None:
        if self._alternate:
            return
        self.write(ENTER_ALTERNATE_SCREEN)
        self._alternate = True

    def exit_alternate_screen(self) -> None:
        if not self._alternate:
            return
        self._alternate = False
        self.write(EXIT_ALTERNATE_SCREEN)

    def read_event(self, timeout: Optional[float] = None) -> ReadResult:
        """
        Read the next input event.

        Returns None at end of input and NO_INPUT when ``timeout`` expires.

        Raises:
            TerminalStateError: if raw mode has not been entered.
        """
        if not self._raw:
            raise TerminalStateError("Terminal not in raw mode - call enter_raw_mode() first")
        return self._reader.read_event(timeout)

    def clear(self) -> None:
        """Clear screen and move cursor to home."""
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def reset(self) -> None:
        """Reset all text attributes."""
        self.write(RESET)

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    def move_to(self, row: int, col: int) -> None:
        """Move cursor to position (1-indexed)."""
        self.write(f'\x1b[{row};{col}H')

    def write(self, text: str) -> None:
        """Write text to terminal."""
        self._out.write(text)
        self._out.flush()

    def draw(self, text: str) -> None:
        """
        Paint a full frame from the top-left corner.

        Each line clears to end-of-line and the area below the frame is
        cleared, so no stale content survives without a full-screen clear.
        Newlines become CR+LF so every line starts in column 1 in raw mode.
        """
        lines = text.split('\n')
        frame = '\r\n'.join(line + CLEAR_TO_EOL for line in lines)
        self.write(CURSOR_HOME + frame + CLEAR_BELOW)

    @contextmanager
    def managed_mode(self, hide_cursor: bool = True) -> Iterator[Terminal]:
        """Full TUI mode: alternate screen, hidden cursor, raw input."""
        self.enter_alternate_screen()
        if hide_cursor:
            self.hide_cursor()
        try:
            self.enter_raw_mode()
            yield self
        finally:
            self.show_cursor()
            self.reset()
            self.exit_alternate_screen()
            self.exit_raw_mode()


class CleanupGuard:
    """
    Runs a cleanup callback at most once, whichever path reaches it first.

    ``install`` hooks the callback into interpreter exit and, when called
    from the main thread, into SIGTERM/SIGHUP. ``uninstall`` removes those
    hooks again and puts back the previous signal handlers.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = threading.RLock()
        self._running = False
        self._exit_code: Optional[int] = None
        self._done = False
        self._installed = False
        self._previous: dict[int, Any] = {}

    @property
    def done(self) -> bool:
        return self._done

    def install(self) -> None:
        if self._installed:
            return
        atexit.register(self.run)
        if threading.current_thread() is threading.main_thread():
            for name in ("SIGTERM", "SIGHUP"):
                signum = getattr(signal, name, None)
                if signum is None:
                    continue
                self._previous[signum] = signal.getsignal(signum)
                signal.signal(signum, self._on_signal)
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        atexit.unregister(self.run)
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()
        self._installed = False

    def run(self) -> bool:
        """
        Run the callback unless it already ran. Returns True if it ran now.

        A termination signal that arrives while the callback is running is
        held until the callback finishes, then raised as ``SystemExit``.
        """
        with self._lock:
            if self._done:
                return False
            self._running = True
            self._done = True
        try:
            self._callback()
        finally:
            self._running = False
        if self._exit_code is not None:
            raise SystemExit(self._exit_code)
        return True

    def _on_signal(self, signum: int, frame: Any) -> None:
        logger.debug("Received signal %d, cleaning up", signum)
        self._exit_code = 128 + signum
        if self._running:
            return
        self.run()
        raise SystemExit(self._exit_code)
