"""Style - immutable set of text attributes rendered as SGR codes."""

from __future__ import annotations

from dataclasses import dataclass, replace

from tuava.core.color import Color

RESET = '\x1b[0m'


@dataclass(frozen=True)
class Style:
    """
    Text attributes: foreground, background, bold, italic, underline, reverse.

    Every mutator returns a new Style; instances are never changed in place.
    """
    foreground: Color = Color.DEFAULT
    background: Color = Color.DEFAULT
    bold: bool = False
    italic: bool = False
    underline: bool = False
    reverse: bool = False

    def fg(self, color: Color) -> Style:
        return replace(self, foreground=color)

    def bg(self, color: Color) -> Style:
        return replace(self, background=color)

    def with_bold(self, on: bool = True) -> Style:
        return replace(self, bold=on)

    def with_italic(self, on: bool = True) -> Style:
        return replace(self, italic=on)

    def with_underline(self, on: bool = True) -> Style:
        return replace(self, underline=on)

    def with_reverse(self, on: bool = True) -> Style:
        return replace(self, reverse=on)

    @property
    def is_plain(self) -> bool:
        """True when no attribute is set."""
        return self == PLAIN

    def sgr(self) -> str:
        """Return the escape sequence that switches these attributes on."""
        params: list[str] = []
        if not self.foreground.is_default:
            params.append(self.foreground.to_sgr_fg())
        if not self.background.is_default:
            params.append(self.background.to_sgr_bg())
        if self.bold:
            params.append('1')
        if self.italic:
            params.append('3')
        if self.underline:
            params.append('4')
        if self.reverse:
            params.append('7')
        if not params:
            return ''
        return f"\x1b[{';'.join(params)}m"

    def render(self, text: str) -> str:
        """Wrap text in this style's SGR codes followed by a reset."""
        return f"{self.sgr()}{text}{RESET}"


PLAIN = Style()
