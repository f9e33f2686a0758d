"""ANSI text utilities - measuring, padding and truncating strings with escape codes."""

from __future__ import annotations

import re

# CSI sequences, including private-mode parameters (?25h) and the ~ terminator
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')


def strip_ansi(s: str) -> str:
    """Remove ANSI escape sequences, leaving only visible text."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    if not s:
        return 0
    return len(strip_ansi(s))


def spaces(count: int) -> str:
    return ' ' * count if count > 0 else ''


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Preserves ANSI codes but counts only visible characters.
    Ensures the result displays in exactly max_width columns or less.

    Args:
        s: String to truncate
        max_width: Maximum visible width
        reset: If True, append reset sequence to prevent color bleed
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    i = 0

    while i < len(s) and vis_len < max_width:
        match = _ANSI_ESCAPE.match(s, i) if s[i] == '\x1b' else None
        if match:
            result.append(match.group())
            i = match.end()
        else:
            result.append(s[i])
            vis_len += 1
            i += 1

    output = ''.join(result)

    if reset and i < len(s):
        output += '\x1b[0m'

    return output


def pad_right(s: str, width: int, char: str = ' ') -> str:
    """Pad string on the right to reach width visible characters. Never truncates."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)


def pad_left(s: str, width: int, char: str = ' ') -> str:
    """Pad string on the left to reach width visible characters. Never truncates."""
    current = visible_len(s)
    if current >= width:
        return s
    return char * (width - current) + s


def center(s: str, width: int) -> str:
    """
    Center string within width visible characters.

    The left side gets floor(slack / 2) spaces and the right side the rest.
    Strings already at least width wide come back unchanged.
    """
    current = visible_len(s)
    if current >= width:
        return s
    left = (width - current) // 2
    right = width - current - left
    return spaces(left) + s + spaces(right)


def truncate_and_pad(s: str, width: int) -> str:
    """Truncate if too long, pad if too short. Always returns exactly width visible chars."""
    vlen = visible_len(s)
    if vlen > width:
        return truncate(s, width)
    elif vlen < width:
        return s + ' ' * (width - vlen)
    return s
