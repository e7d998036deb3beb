"""Tests for pi.textinput.utils -- width measurement and character classes."""

from __future__ import annotations

from pi.textinput.utils import (
    char_width,
    clamp,
    is_control_char,
    is_whitespace_char,
    string_width,
    strip_ansi,
    visible_width,
)


# ---------------------------------------------------------------------------
# char_width / string_width
# ---------------------------------------------------------------------------


class TestCharWidth:
    def test_ascii(self) -> None:
        assert char_width("a") == 1
        assert char_width(" ") == 1

    def test_wide(self) -> None:
        assert char_width("日") == 2
        assert char_width("\uff21") == 2  # fullwidth A

    def test_control_is_zero(self) -> None:
        assert char_width("\x00") == 0
        assert char_width("\x1b") == 0
        assert char_width("\x7f") == 0

    def test_combining_is_zero(self) -> None:
        assert char_width("\u0301") == 0

    def test_empty(self) -> None:
        assert char_width("") == 0


class TestStringWidth:
    def test_mixed(self) -> None:
        assert string_width("ab日本") == 6

    def test_custom_width_fn(self) -> None:
        assert string_width("abc", lambda ch: 3) == 9


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[7mhi\x1b[27m") == 2
        assert visible_width("\x1b[38;5;240mabc\x1b[39m") == 3

    def test_wide_characters(self) -> None:
        assert visible_width("日本語") == 6

    def test_combining_sequence_is_one_column(self) -> None:
        assert visible_width("e\u0301") == 1

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[7m \x1b[27mx") == " x"


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


class TestCharacterClasses:
    def test_whitespace(self) -> None:
        for ch in [" ", "\t", "\u3000", "\u00a0"]:
            assert is_whitespace_char(ch), repr(ch)
        for ch in ["a", "-", "日", "_"]:
            assert not is_whitespace_char(ch), repr(ch)

    def test_control(self) -> None:
        assert is_control_char("\x01")
        assert is_control_char("\x7f")
        assert is_control_char("\x85")
        assert not is_control_char("a")
        assert not is_control_char("日")

    def test_clamp(self) -> None:
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2
