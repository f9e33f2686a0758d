"""Keyboard input decoding with event abstraction."""

from __future__ import annotations

import os
import select
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO, Callable, Iterator, Optional, Union


class Key(Enum):
    """Named key constants."""
    CHAR = auto()
    ENTER = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    TAB = auto()
    SPACE = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F6 = auto()
    F7 = auto()
    F8 = auto()
    F9 = auto()
    F10 = auto()
    F11 = auto()
    F12 = auto()
    CTRL_C = auto()
    CTRL_D = auto()
    CTRL_Z = auto()
    UNKNOWN = auto()


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()
    NONE = auto()


class MouseAction(Enum):
    PRESS = auto()
    RELEASE = auto()
    MOVE = auto()
    DRAG = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A keyboard input event: the decoded key plus the raw sequence."""
    key: Key
    sequence: str = ""

    @property
    def char(self) -> Optional[str]:
        """The literal character for CHAR events, otherwise None."""
        return self.sequence if self.key is Key.CHAR else None

    @property
    def is_char(self) -> bool:
        return self.key is Key.CHAR


@dataclass(frozen=True)
class MouseEvent:
    x: int
    y: int
    button: MouseButton
    action: MouseAction


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    timestamp: float


Event = Union[KeyEvent, MouseEvent, ResizeEvent, TickEvent]


class _NoInput:
    """Returned by a timed read when nothing arrived in time."""

    _instance: Optional[_NoInput] = None

    def __new__(cls) -> _NoInput:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_INPUT"

    def __bool__(self) -> bool:
        return False


NO_INPUT = _NoInput()

# What a read can yield: an event, NO_INPUT on timeout, None at end of input
ReadResult = Union[KeyEvent, _NoInput, None]

# Bytes that decode to a named key on their own
SIMPLE_KEYS: dict[int, Key] = {
    0x03: Key.CTRL_C,
    0x04: Key.CTRL_D,
    0x09: Key.TAB,
    0x0A: Key.ENTER,
    0x0D: Key.ENTER,
    0x7F: Key.BACKSPACE,
}

# Final byte of ESC [ x sequences
CSI_KEYS: dict[str, Key] = {
    'A': Key.UP,
    'B': Key.DOWN,
    'C': Key.RIGHT,
    'D': Key.LEFT,
    'H': Key.HOME,
    'F': Key.END,
}

ESC = 0x1B

ReadNext = Callable[[], Optional[int]]
Unread = Callable[[int], None]


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _is_continuation(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


def decode_event(first: int, read_next: ReadNext, unread: Unread) -> KeyEvent:
    """
    Decode one event starting at byte ``first``.

    ``read_next`` supplies follow-up bytes for escape sequences and multi-byte
    characters, returning None when no further byte is available. A byte that
    cannot continue a UTF-8 character is handed back through ``unread`` so it
    starts the next event.
    """
    if first in SIMPLE_KEYS:
        return KeyEvent(SIMPLE_KEYS[first], chr(first))

    if first == ESC:
        nxt = read_next()
        if nxt is None:
            return KeyEvent(Key.ESCAPE, '\x1b')
        if nxt != ord('['):
            return KeyEvent(Key.UNKNOWN, '\x1b' + chr(nxt))
        code = read_next()
        if code is None:
            return KeyEvent(Key.UNKNOWN, '\x1b[')
        final = chr(code)
        key = CSI_KEYS.get(final, Key.UNKNOWN)
        return KeyEvent(key, '\x1b[' + final)

    # Collect the rest of a UTF-8 character so it arrives as one CHAR event
    data = bytearray([first])
    for _ in range(_utf8_length(first) - 1):
        nxt = read_next()
        if nxt is None:
            break
        if not _is_continuation(nxt):
            unread(nxt)
            break
        data.append(nxt)
    return KeyEvent(Key.CHAR, data.decode('utf-8', errors='replace'))


def decode_bytes(data: bytes) -> list[KeyEvent]:
    """Decode a complete byte string into events (end of data ends sequences)."""
    it: Iterator[int] = iter(data)
    pending: list[int] = []

    def read_next() -> Optional[int]:
        if pending:
            return pending.pop()
        return next(it, None)

    events: list[KeyEvent] = []
    while True:
        first = read_next()
        if first is None:
            break
        events.append(decode_event(first, read_next, pending.append))
    return events


class InputReader:
    """
    Blocking event reader over a byte stream.

    Uses os.read() on a real file descriptor to bypass Python's I/O buffering,
    and waits briefly after ESC so a lone Escape press is not mistaken for the
    start of a sequence. Streams without a descriptor (pipes in tests, BytesIO)
    are read directly.
    """

    def __init__(self, stream: Optional[BinaryIO] = None, escape_timeout: float = 0.1) -> None:
        if stream is None:
            stream = sys.stdin.buffer
        self._stream = stream
        self._escape_timeout = escape_timeout
        self._pending: Optional[int] = None
        self._fd: Optional[int]
        try:
            self._fd = stream.fileno()
        except (AttributeError, OSError, ValueError):
            self._fd = None

    def read_event(self, timeout: Optional[float] = None) -> ReadResult:
        """
        Read one event.

        Returns None at end of input, or NO_INPUT if ``timeout`` elapsed
        before any byte arrived.
        """
        if (
            timeout is not None
            and self._pending is None
            and self._fd is not None
            and not self._has_input(timeout)
        ):
            return NO_INPUT
        first = self._read_byte()
        if first is None:
            return None
        return decode_event(first, self._read_follow_up, self._unread)

    def _unread(self, byte: int) -> None:
        self._pending = byte

    def _read_follow_up(self) -> Optional[int]:
        if self._pending is None and self._fd is not None and not self._has_input(self._escape_timeout):
            return None
        return self._read_byte()

    def _read_byte(self) -> Optional[int]:
        if self._pending is not None:
            byte, self._pending = self._pending, None
            return byte
        if self._fd is not None:
            data = os.read(self._fd, 1)
        else:
            data = self._stream.read(1)
        return data[0] if data else None

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            # Not selectable (e.g. a regular file): reads never block
            return True
