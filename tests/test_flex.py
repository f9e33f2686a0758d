"""Tests for slack distribution and flex composition."""

import pytest

from tuava.core.ansi_text import visible_len
from tuava.layout import Align, Direction, Flex, Justify, Text, distribute, align_split, render_lines
from tuava.layout.flex import Spacing


class TestDistribute:
    """Slack distribution per justification mode."""

    @pytest.mark.parametrize(
        "justify",
        [Justify.START, Justify.END, Justify.CENTER, Justify.SPACE_BETWEEN, Justify.SPACE_AROUND],
    )
    @pytest.mark.parametrize("slack", [0, 1, 2, 5, 7, 13])
    @pytest.mark.parametrize("count", [0, 1, 2, 3, 4])
    def test_all_slack_is_placed(self, justify: Justify, slack: int, count: int) -> None:
        spacing = distribute(justify, slack, count)
        assert spacing.total == slack
        assert len(spacing.gaps) == max(0, count - 1)

    @pytest.mark.parametrize("slack", [0, 1, 4, 5, 9])
    @pytest.mark.parametrize("count", [1, 2, 3, 4])
    def test_space_evenly_drops_remainder(self, slack: int, count: int) -> None:
        spacing = distribute(Justify.SPACE_EVENLY, slack, count)
        per = slack // (count + 1)
        assert spacing == Spacing(per, (per,) * (count - 1), per)
        assert spacing.total == slack - slack % (count + 1)

    def test_start(self) -> None:
        assert distribute(Justify.START, 4, 2) == Spacing(0, (0,), 4)

    def test_end(self) -> None:
        assert distribute(Justify.END, 4, 2) == Spacing(4, (0,), 0)

    def test_center_extra_unit_trails(self) -> None:
        assert distribute(Justify.CENTER, 5, 2) == Spacing(2, (0,), 3)

    def test_space_between_remainder_goes_to_earliest_gaps(self) -> None:
        assert distribute(Justify.SPACE_BETWEEN, 5, 4) == Spacing(0, (2, 2, 1), 0)

    def test_space_around_remainder_goes_to_leading_first(self) -> None:
        assert distribute(Justify.SPACE_AROUND, 5, 3) == Spacing(2, (1, 1), 1)
        assert distribute(Justify.SPACE_AROUND, 6, 3) == Spacing(2, (2, 1), 1)

    def test_negative_slack_clamps_to_zero(self) -> None:
        assert distribute(Justify.CENTER, -3, 2) == Spacing(0, (0,), 0)

    def test_align_split(self) -> None:
        assert align_split(Align.START, 3) == (0, 3)
        assert align_split(Align.END, 3) == (3, 0)
        assert align_split(Align.CENTER, 3) == (1, 2)


class TestColumn:
    def test_heights_and_gap_sum(self) -> None:
        flex = Flex.column(Text("a"), Text("b\nc"), Text("d"), gap=1)
        lines = render_lines(flex)
        assert len(lines) == 1 + 2 + 1 + 1 + 1
        assert lines == ["a", " ", "b", "c", " ", "d"]

    def test_explicit_height_justify_end(self) -> None:
        lines = render_lines(Flex.column(Text("x"), Text("y"), height=5, justify=Justify.END))
        assert lines == [" ", " ", " ", "x", "y"]

    def test_space_between(self) -> None:
        lines = render_lines(Flex.column("a", "b", "c", height=6, justify=Justify.SPACE_BETWEEN))
        assert lines == ["a", " ", " ", "b", " ", "c"]

    def test_space_evenly_pads_to_full_height(self) -> None:
        lines = render_lines(Flex.column("a", "b", height=7, justify=Justify.SPACE_EVENLY))
        assert len(lines) == 7
        assert lines[:5] == [" ", "a", " ", "b", " "]

    def test_cross_axis_alignment(self) -> None:
        lines = render_lines(Flex.column("abcd", "ab", align=Align.CENTER))
        assert lines == ["abcd", " ab "]
        lines = render_lines(Flex.column("abcd", "ab", align=Align.END))
        assert lines == ["abcd", "  ab"]

    def test_explicit_width_pads_every_line(self) -> None:
        lines = render_lines(Flex.column("ab", "c", width=6))
        assert all(visible_len(line) == 6 for line in lines)

    def test_smaller_container_does_not_truncate(self) -> None:
        lines = render_lines(Flex.column("abc", "d", "e", height=1, width=1))
        assert lines == ["abc", "d  ", "e  "]


class TestRow:
    def test_width_is_sum_plus_gaps(self) -> None:
        lines = render_lines(Flex.row("ab", "c", "def", gap=2))
        assert lines == ["ab  c  def"]

    def test_cross_axis_uses_tallest_child(self) -> None:
        lines = render_lines(Flex.row(Text("a\nb\nc"), Text("x"), align=Align.CENTER))
        assert lines == ["a ", "bx", "c "]

    def test_align_end(self) -> None:
        lines = render_lines(Flex.row(Text("a\nb"), Text("x"), align=Align.END))
        assert lines == ["a ", "bx"]

    def test_justify_center(self) -> None:
        lines = render_lines(Flex.row("ab", "cd", width=9, justify=Justify.CENTER))
        assert lines == ["  abcd   "]

    def test_space_around(self) -> None:
        lines = render_lines(Flex.row("a", "b", width=6, justify=Justify.SPACE_AROUND))
        assert lines == ["  a b "]

    def test_explicit_height_adds_blank_rows(self) -> None:
        lines = render_lines(Flex.row("a", "b", height=3, align=Align.CENTER))
        assert lines == ["  ", "ab", "  "]

    def test_ansi_children_measured_by_visible_width(self) -> None:
        lines = render_lines(Flex.row(Text("ab").bold(), Text("c"), width=5, justify=Justify.END))
        assert visible_len(lines[0]) == 5
        assert lines[0].startswith("  ")

    def test_nested_flex(self) -> None:
        inner = Flex.column("1", "2")
        lines = render_lines(Flex.row(inner, "|", inner, gap=1))
        assert lines == ["1 | 1", "2   2"]

    def test_empty_row(self) -> None:
        assert render_lines(Flex(direction=Direction.ROW)) == []

    def test_gap_is_never_negative(self) -> None:
        assert Flex.row("a", "b", gap=-3).gap == 0
