"""Core terminal infrastructure - terminal I/O, input decoding, styled text."""

from tuava.core.terminal import (
    CleanupGuard,
    Terminal,
    TerminalSize,
    TerminalStateError,
)
from tuava.core.input import (
    Event,
    InputReader,
    Key,
    KeyEvent,
    MouseAction,
    MouseButton,
    MouseEvent,
    NO_INPUT,
    ResizeEvent,
    TickEvent,
    decode_bytes,
    decode_event,
)
from tuava.core.color import Color, ColorMode
from tuava.core.style import Style
from tuava.core.ansi_text import (
    center,
    pad_left,
    pad_right,
    strip_ansi,
    truncate,
    truncate_and_pad,
    visible_len,
)

__all__ = [
    "CleanupGuard",
    "Terminal",
    "TerminalSize",
    "TerminalStateError",
    "Event",
    "InputReader",
    "Key",
    "KeyEvent",
    "MouseAction",
    "MouseButton",
    "MouseEvent",
    "NO_INPUT",
    "ResizeEvent",
    "TickEvent",
    "decode_bytes",
    "decode_event",
    "Color",
    "ColorMode",
    "Style",
    "center",
    "pad_left",
    "pad_right",
    "strip_ansi",
    "truncate",
    "truncate_and_pad",
    "visible_len",
]
