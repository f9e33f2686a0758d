"""Render an element tree into a rectangular grid of display lines."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from tuava.layout.blocks import box_lines, fit_block, to_block
from tuava.layout.elements import Child, Flex, Rect, Text
from tuava.layout.flex import layout_flex


def render_block(element: Child) -> list[str]:
    """
    Render one element (children first) into its own block of lines.

    This is the only place that dispatches on the element variant.
    """
    if isinstance(element, str):
        element = Text(element)

    if isinstance(element, Text):
        lines = to_block(element.content)
        if element.style.is_plain:
            return lines
        return [element.style.render(line) for line in lines]

    if isinstance(element, Rect):
        content: list[str] = []
        for child in element.children:
            content.extend(render_block(child))
        if element.boxed:
            return box_lines(content, element.width, element.height)
        return fit_block(content, element.width, element.height)

    if isinstance(element, Flex):
        blocks = [render_block(child) for child in element.children]
        return layout_flex(element, blocks)

    raise TypeError(f"Cannot render {type(element).__name__}")


def render_lines(element: Child, width: Optional[int] = None, height: Optional[int] = None) -> list[str]:
    """
    Render an element into lines of equal visible width.

    An explicit ``width``/``height`` sizes a Flex root's container (so
    justification sees the slack) and pads any other root. Content larger
    than the requested size is never clipped.
    """
    if isinstance(element, Flex) and (width is not None or height is not None):
        element = replace(
            element,
            width=width if width is not None else element.width,
            height=height if height is not None else element.height,
        )
    lines = render_block(element)
    return fit_block(lines, width or 0, height or 0)


def render(element: Child, width: Optional[int] = None, height: Optional[int] = None) -> str:
    return '\n'.join(render_lines(element, width, height))
