"""Box-model layout engine - element tree to text grid."""

from tuava.layout.elements import Align, Child, Direction, Element, Flex, Justify, Rect, Text
from tuava.layout.flex import Spacing, align_split, distribute
from tuava.layout.blocks import box, join_horizontal, join_vertical
from tuava.layout.render import render, render_lines

__all__ = [
    "Align",
    "Child",
    "Direction",
    "Element",
    "Flex",
    "Justify",
    "Rect",
    "Text",
    "Spacing",
    "align_split",
    "distribute",
    "box",
    "join_horizontal",
    "join_vertical",
    "render",
    "render_lines",
]
