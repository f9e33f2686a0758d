"""
tuava: Elm Architecture toolkit for terminal UIs

An application supplies an immutable model with ``update`` and ``view``;
the Program runtime handles input, scheduling, rendering and cleanup.

Quick Start:
    >>> from tuava import Effect, Key, Program, Update
    >>> class Counter:
    ...     def __init__(self, n=0): self.n = n
    ...     def __eq__(self, other): return isinstance(other, Counter) and other.n == self.n
    ...     def update(self, msg):
    ...         if msg == "quit":
    ...             return Update(self, Effect.quit())
    ...         return Update(Counter(self.n + 1))
    ...     def view(self): return f"Count: {self.n}"
    >>> def keys(event):
    ...     return "quit" if event.char == "q" else "inc"
    >>> Program(keys).run(Counter())  # doctest: +SKIP

Features:
    - Raw-mode terminal handling with idempotent, signal-safe cleanup
    - Escape-sequence decoding into typed key events
    - Flex/box layout engine with ANSI-aware width measurement
    - Declarative effects run on a worker pool, timer and resize streams
"""

__version__ = "0.1.0"

# Terminal and input
from tuava.core.terminal import Terminal, TerminalSize, TerminalStateError
from tuava.core.input import Key, KeyEvent, MouseEvent, ResizeEvent, TickEvent

# Styling
from tuava.core.color import Color
from tuava.core.style import Style

# Layout
from tuava.layout import Align, Direction, Flex, Justify, Rect, Text, render, render_lines

# Runtime
from tuava.runtime import Effect, Model, Program, ProgramConfig, Stream, Update

__all__ = [
    # Version
    "__version__",
    # Terminal and input
    "Terminal",
    "TerminalSize",
    "TerminalStateError",
    "Key",
    "KeyEvent",
    "MouseEvent",
    "ResizeEvent",
    "TickEvent",
    # Styling
    "Color",
    "Style",
    # Layout
    "Align",
    "Direction",
    "Flex",
    "Justify",
    "Rect",
    "Text",
    "render",
    "render_lines",
    # Runtime
    "Effect",
    "Model",
    "Program",
    "ProgramConfig",
    "Stream",
    "Update",
]
