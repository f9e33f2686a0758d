"""Tests for element rendering, boxes and join helpers."""

import pytest

from tuava.core.ansi_text import visible_len
from tuava.core.color import Color
from tuava.layout import (
    Flex,
    Justify,
    Rect,
    Text,
    box,
    join_horizontal,
    join_vertical,
    render,
    render_lines,
)


class TestText:
    def test_plain_text_is_unstyled(self) -> None:
        assert render(Text("hello")) == "hello"

    def test_styled_text_styles_each_line(self) -> None:
        lines = render_lines(Text("a\nb").fg(Color.RED))
        assert lines == ["\x1b[31ma\x1b[0m", "\x1b[31mb\x1b[0m"]

    def test_style_helpers_do_not_mutate(self) -> None:
        text = Text("x")
        bold = text.bold()
        assert text.style.bold is False
        assert bold.style.bold is True

    def test_strings_are_text(self) -> None:
        assert render("plain") == "plain"

    def test_multiline_text_is_rectangular(self) -> None:
        assert render_lines(Text("abc\nd")) == ["abc", "d  "]


class TestRect:
    def test_boxed(self) -> None:
        rect = Rect.of(Text("hi"), width=6, height=4, boxed=True)
        assert render_lines(rect) == [
            "┌────┐",
            "│hi  │",
            "│    │",
            "└────┘",
        ]

    def test_boxed_truncates_wide_content(self) -> None:
        lines = render_lines(Rect.of(Text("abcdefgh"), width=5, height=3, boxed=True))
        assert lines[1].startswith("│abc")
        assert all(visible_len(line) == 5 for line in lines)

    def test_boxed_drops_extra_lines(self) -> None:
        lines = render_lines(Rect.of("1", "2", "3", width=4, height=3, boxed=True))
        assert len(lines) == 3
        assert lines[1] == "│1 │"

    def test_boxed_minimum_size(self) -> None:
        assert render_lines(Rect(boxed=True)) == ["┌┐", "└┘"]

    def test_unboxed_stacks_and_pads(self) -> None:
        lines = render_lines(Rect.of("ab", "c", width=4, height=3))
        assert lines == ["ab  ", "c   ", "    "]

    def test_unboxed_never_clips(self) -> None:
        assert render_lines(Rect.of("abcdef", width=2, height=0)) == ["abcdef"]


class TestRootSize:
    def test_flex_root_uses_explicit_size_for_slack(self) -> None:
        lines = render_lines(Flex.row("ab", justify=Justify.END), width=5, height=2)
        assert lines == ["   ab", "     "]

    def test_non_flex_root_is_padded(self) -> None:
        lines = render_lines(Text("x"), width=3, height=2)
        assert lines == ["x  ", "   "]

    def test_grid_is_rectangular(self) -> None:
        tree = Flex.column(
            Flex.row(Text("Title").bold(), "v1", gap=3),
            Rect.of("body", width=8, height=3, boxed=True),
            "footer line",
            gap=1,
        )
        lines = render_lines(tree, width=20, height=10)
        assert len(lines) == 10
        assert {visible_len(line) for line in lines} == {20}


class TestJoins:
    def test_join_vertical(self) -> None:
        assert join_vertical(["a", "b"]) == "a\nb"

    def test_join_horizontal_pads_short_components(self) -> None:
        assert join_horizontal(["ab\nc", "X\nY\nZ"]) == "abX\nc Y\n  Z"

    def test_join_horizontal_empty(self) -> None:
        assert join_horizontal([]) == ""

    def test_box_helper(self) -> None:
        assert box("x", 3, 3) == "┌─┐\n│x│\n└─┘"


def test_unknown_element_type() -> None:
    with pytest.raises(TypeError):
        render_lines(42)  # type: ignore[arg-type]
