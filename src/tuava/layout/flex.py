"""
Flex layout - slack distribution and row/column composition.

Both directions follow the same steps: measure the already-rendered child
blocks, resolve the container extent on each axis (explicit size wins,
otherwise the content size), distribute the main-axis slack according to
the justification, align every child on the cross axis, then pad the
result so every line has the same visible width.

Remainders always go to the earliest slots so output is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tuava.core.ansi_text import center, pad_left, pad_right, spaces
from tuava.layout.blocks import block_width, fit_block
from tuava.layout.elements import Align, Direction, Flex, Justify


@dataclass(frozen=True)
class Spacing:
    """Extra space placed before, between and after the children."""
    leading: int
    gaps: tuple[int, ...]
    trailing: int

    @property
    def total(self) -> int:
        return self.leading + sum(self.gaps) + self.trailing


def distribute(justify: Justify, slack: int, count: int) -> Spacing:
    """
    Split ``slack`` units of main-axis space among ``count`` children.

    ``space-evenly`` floors its share and drops the remainder; every other
    mode accounts for all of the slack. With fewer children than a spacing
    mode needs, the slack goes to the trailing edge.
    """
    slack = max(0, slack)
    inner = max(0, count - 1)
    no_gaps = (0,) * inner

    if justify is Justify.END:
        return Spacing(slack, no_gaps, 0)

    if justify is Justify.CENTER:
        leading = slack // 2
        return Spacing(leading, no_gaps, slack - leading)

    if justify is Justify.SPACE_BETWEEN and inner > 0:
        per, rem = divmod(slack, inner)
        gaps = tuple(per + (1 if i < rem else 0) for i in range(inner))
        return Spacing(0, gaps, 0)

    if justify is Justify.SPACE_AROUND and count > 0:
        per, rem = divmod(slack, count + 1)
        slots = [per + (1 if i < rem else 0) for i in range(count + 1)]
        return Spacing(slots[0], tuple(slots[1:-1]), slots[-1])

    if justify is Justify.SPACE_EVENLY and count > 0:
        per = slack // (count + 1)
        return Spacing(per, (per,) * inner, per)

    return Spacing(0, no_gaps, slack)


def align_split(align: Align, slack: int) -> tuple[int, int]:
    """Leading and trailing padding that places content per ``align``."""
    slack = max(0, slack)
    if align is Align.END:
        return slack, 0
    if align is Align.CENTER:
        leading = slack // 2
        return leading, slack - leading
    return 0, slack


def _align_line(align: Align, line: str, width: int) -> str:
    if align is Align.END:
        return pad_left(line, width)
    if align is Align.CENTER:
        return center(line, width)
    return pad_right(line, width)


def layout_column(flex: Flex, blocks: Sequence[list[str]]) -> list[str]:
    """Stack child blocks top to bottom."""
    count = len(blocks)
    content_width = max((block_width(b) for b in blocks), default=0)
    width = flex.width if flex.width is not None else content_width
    width = max(0, width)

    content_height = sum(len(b) for b in blocks) + flex.gap * max(0, count - 1)
    height = flex.height if flex.height is not None else content_height
    height = max(0, height)

    spacing = distribute(flex.justify, height - content_height, count)
    blank = spaces(width)

    lines = [blank] * spacing.leading
    for i, block in enumerate(blocks):
        lines.extend(_align_line(flex.align, line, width) for line in block)
        if i < count - 1:
            lines.extend([blank] * (flex.gap + spacing.gaps[i]))
    lines.extend([blank] * spacing.trailing)

    return fit_block(lines, width, height)


def layout_row(flex: Flex, blocks: Sequence[list[str]]) -> list[str]:
    """Place child blocks left to right."""
    count = len(blocks)
    content_height = max((len(b) for b in blocks), default=0)
    height = flex.height if flex.height is not None else content_height
    rows = max(0, height, content_height)

    aligned: list[list[str]] = []
    widths: list[int] = []
    for block in blocks:
        top, bottom = align_split(flex.align, rows - len(block))
        aligned.append([""] * top + list(block) + [""] * bottom)
        widths.append(block_width(block))

    content_width = sum(widths) + flex.gap * max(0, count - 1)
    width = flex.width if flex.width is not None else content_width
    width = max(0, width)

    spacing = distribute(flex.justify, width - content_width, count)

    lines: list[str] = []
    for row in range(rows):
        parts = [spaces(spacing.leading)]
        for i, block in enumerate(aligned):
            parts.append(pad_right(block[row], widths[i]))
            if i < count - 1:
                parts.append(spaces(flex.gap + spacing.gaps[i]))
        parts.append(spaces(spacing.trailing))
        lines.append(''.join(parts))

    return fit_block(lines, width, max(0, height))


def layout_flex(flex: Flex, blocks: Sequence[list[str]]) -> list[str]:
    if flex.direction is Direction.ROW:
        return layout_row(flex, blocks)
    return layout_column(flex, blocks)
