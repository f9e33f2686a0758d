"""Line-block helpers: measuring, fitting, joining and boxing rendered text."""

from __future__ import annotations

from typing import Iterable, Sequence

from tuava.core.ansi_text import pad_right, truncate, visible_len


def to_block(text: str) -> list[str]:
    """Split rendered text into its lines (an empty string is one empty line)."""
    return text.split('\n')


def block_width(lines: Iterable[str]) -> int:
    """Widest visible line in a block."""
    return max((visible_len(line) for line in lines), default=0)


def fit_block(lines: Sequence[str], width: int = 0, height: int = 0) -> list[str]:
    """
    Make a block rectangular without clipping it.

    Every line is padded to the wider of ``width`` and the block's own
    widest line, and blank lines are appended until ``height`` is reached.
    """
    target = max(width, block_width(lines))
    fitted = [pad_right(line, target) for line in lines]
    while len(fitted) < height:
        fitted.append(' ' * target)
    return fitted


def join_vertical(parts: Iterable[str]) -> str:
    """Stack rendered components on top of each other."""
    return '\n'.join(parts)


def join_horizontal(parts: Sequence[str]) -> str:
    """Place multi-line components side by side, top-aligned."""
    if not parts:
        return ""
    blocks = [to_block(part) for part in parts]
    widths = [block_width(block) for block in blocks]
    rows = max(len(block) for block in blocks)

    lines: list[str] = []
    for row in range(rows):
        cells = []
        for block, width in zip(blocks, widths):
            line = block[row] if row < len(block) else ""
            cells.append(pad_right(line, width))
        lines.append(''.join(cells))
    return '\n'.join(lines)


def box_lines(content: Sequence[str], width: int, height: int) -> list[str]:
    """
    Draw a single-line border of exactly width x height around content.

    Content wider than the interior is truncated without letting colour
    codes bleed; lines past the interior height are dropped.
    """
    width = max(2, width)
    height = max(2, height)
    inner = width - 2

    lines = ['┌' + '─' * inner + '┐']
    for i in range(height - 2):
        line = content[i] if i < len(content) else ""
        if visible_len(line) > inner:
            line = truncate(line, inner)
        lines.append('│' + pad_right(line, inner) + '│')
    lines.append('└' + '─' * inner + '┘')
    return lines


def box(content: str, width: int, height: int) -> str:
    return '\n'.join(box_lines(to_block(content), width, height))
