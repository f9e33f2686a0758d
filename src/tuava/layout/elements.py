"""Declarative element tree: Text, Rect and Flex nodes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Union

from tuava.core.color import Color
from tuava.core.style import PLAIN, Style


class Direction(Enum):
    """Main axis of a Flex container."""
    ROW = "row"
    COLUMN = "column"


class Justify(Enum):
    """How slack on the main axis is distributed."""
    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"


class Align(Enum):
    """Where each child sits on the cross axis."""
    START = "start"
    CENTER = "center"
    END = "end"


@dataclass(frozen=True)
class Text:
    """
    Styled text leaf. Content may span several lines.

    The style helpers return a new Text, mirroring Style itself.
    """
    content: str = ""
    style: Style = PLAIN

    def bold(self) -> Text:
        return replace(self, style=self.style.with_bold())

    def italic(self) -> Text:
        return replace(self, style=self.style.with_italic())

    def underline(self) -> Text:
        return replace(self, style=self.style.with_underline())

    def reverse(self) -> Text:
        return replace(self, style=self.style.with_reverse())

    def fg(self, color: Color) -> Text:
        return replace(self, style=self.style.fg(color))

    def bg(self, color: Color) -> Text:
        return replace(self, style=self.style.bg(color))


@dataclass(frozen=True)
class Rect:
    """
    Vertical stack of children, optionally drawn inside a border.

    A boxed Rect is exactly ``max(2, width)`` by ``max(2, height)``; an
    unboxed one grows to at least ``width`` by ``height`` but never clips.
    """
    width: int = 0
    height: int = 0
    children: tuple[Child, ...] = field(default_factory=tuple)
    boxed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def of(cls, *children: Child, width: int = 0, height: int = 0, boxed: bool = False) -> Rect:
        return cls(width=width, height=height, children=children, boxed=boxed)


@dataclass(frozen=True)
class Flex:
    """Container that lays children out along a row or a column."""
    direction: Direction = Direction.COLUMN
    justify: Justify = Justify.START
    align: Align = Align.START
    gap: int = 0
    width: Optional[int] = None
    height: Optional[int] = None
    children: tuple[Child, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "gap", max(0, self.gap))

    @classmethod
    def row(cls, *children: Child, **options) -> Flex:
        return cls(direction=Direction.ROW, children=children, **options)

    @classmethod
    def column(cls, *children: Child, **options) -> Flex:
        return cls(direction=Direction.COLUMN, children=children, **options)

    def with_children(self, children: Iterable[Child]) -> Flex:
        return replace(self, children=tuple(children))


Element = Union[Text, Rect, Flex]

# Plain strings are accepted wherever a child is expected and render as Text
Child = Union[Element, str]
