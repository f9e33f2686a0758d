"""Tests for escape-aware text measurement and padding."""

import pytest

from tuava.core.ansi_text import (
    center,
    pad_left,
    pad_right,
    strip_ansi,
    truncate,
    truncate_and_pad,
    visible_len,
)

RED = "\x1b[31m"
RESET = "\x1b[0m"


class TestVisibleLen:
    def test_plain(self) -> None:
        assert visible_len("hello") == 5

    def test_ignores_sgr_codes(self) -> None:
        assert visible_len(f"{RED}hello{RESET}") == 5

    def test_ignores_private_mode_codes(self) -> None:
        assert visible_len("\x1b[?25lab\x1b[?25h") == 2

    def test_empty(self) -> None:
        assert visible_len("") == 0

    def test_strip(self) -> None:
        assert strip_ansi(f"{RED}a{RESET}b") == "ab"


class TestPadding:
    """Padding never truncates and lands on max(width, visible length)."""

    @pytest.mark.parametrize("text", ["", "ab", "abcdef", f"{RED}abc{RESET}"])
    @pytest.mark.parametrize("width", [0, 1, 3, 6, 10])
    def test_pad_and_center_lengths(self, text: str, width: int) -> None:
        expected = max(width, visible_len(text))
        assert visible_len(pad_right(text, width)) == expected
        assert visible_len(pad_left(text, width)) == expected
        assert visible_len(center(text, width)) == expected

    def test_pad_right_keeps_text_first(self) -> None:
        assert pad_right("ab", 4) == "ab  "

    def test_pad_left_keeps_text_last(self) -> None:
        assert pad_left("ab", 4) == "  ab"

    def test_center_puts_extra_space_on_the_right(self) -> None:
        assert center("ab", 5) == " ab  "

    def test_center_counts_visible_width(self) -> None:
        assert center(f"{RED}ab{RESET}", 6) == f"  {RED}ab{RESET}  "

    def test_no_truncation(self) -> None:
        assert pad_right("abcdef", 3) == "abcdef"
        assert center("abcdef", 3) == "abcdef"


class TestTruncate:
    def test_truncate_plain(self) -> None:
        assert truncate("abcdef", 3, reset=False) == "abc"

    def test_truncate_keeps_codes_and_resets(self) -> None:
        result = truncate(f"{RED}abcdef{RESET}", 3)
        assert result == f"{RED}abc{RESET}"
        assert visible_len(result) == 3

    def test_no_reset_when_not_truncated(self) -> None:
        assert truncate("ab", 5) == "ab"

    def test_zero_width(self) -> None:
        assert truncate("abc", 0) == ""

    def test_truncate_and_pad(self) -> None:
        assert truncate_and_pad("abcdef", 3) == "abc\x1b[0m"
        assert truncate_and_pad("ab", 4) == "ab  "
