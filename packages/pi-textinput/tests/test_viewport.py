"""Tests for the horizontal scroll window."""

from __future__ import annotations

from pi.textinput.components.text_input import CursorMode, TextInput, TextInputOptions
from pi.textinput.messages import KeyMsg
from pi.textinput.utils import string_width
from pi.textinput.viewport import compute_viewport, grow_left, grow_right


def viewport(text: str, pos: int, width: int, offset: int = 0) -> tuple[int, int]:
    return compute_viewport(list(text), pos, offset, width)


class TestGrow:
    def test_grow_right_fills_budget(self) -> None:
        assert grow_right(list("abcdefgh"), 2, 3) == 5

    def test_grow_right_stops_at_end(self) -> None:
        assert grow_right(list("abc"), 1, 10) == 3

    def test_grow_right_keeps_first_wide_glyph(self) -> None:
        # A two-column glyph in a one-column window is still shown
        assert grow_right(list("日本"), 0, 1) == 1

    def test_grow_left_fills_budget(self) -> None:
        assert grow_left(list("abcdefgh"), 8, 3) == 5

    def test_grow_left_wide(self) -> None:
        assert grow_left(list("ab日本"), 4, 3) == 3


class TestComputeViewport:
    def test_disabled_without_width(self) -> None:
        assert viewport("hello world", 3, 0) == (0, 11)

    def test_fits_entirely(self) -> None:
        assert viewport("hello", 5, 5) == (0, 5)
        assert viewport("", 0, 5) == (0, 0)

    def test_scenario_scroll_right(self) -> None:
        # Typing past the end scrolls to keep the cursor visible
        assert viewport("hello world", 11, 5) == (6, 11)

    def test_scenario_then_home(self) -> None:
        assert viewport("hello world", 0, 5, 6) == (0, 5)

    def test_inside_window_does_not_move(self) -> None:
        assert viewport("hello world", 4, 5, 2) == (2, 7)

    def test_cursor_right_of_window_slides(self) -> None:
        assert viewport("hello world", 8, 5, 2) == (3, 8)

    def test_cursor_left_of_window_slides(self) -> None:
        assert viewport("hello world", 1, 5, 2) == (1, 6)

    def test_stale_offsets_after_deletion(self) -> None:
        offset, offset_right = viewport("abcdefg", 7, 5, 6)
        assert (offset, offset_right) == (2, 7)

    def test_wide_glyphs_budgeted_in_columns(self) -> None:
        text = "日本語テキスト"
        assert viewport(text, 7, 6) == (4, 7)
        assert viewport(text, 0, 6, 4) == (0, 3)

    def test_window_never_exceeds_width(self) -> None:
        text = "ab日本語cdテキストef"
        offset, offset_right = 0, 0
        for pos in list(range(len(text) + 1)) + list(range(len(text), -1, -1)):
            offset, offset_right = compute_viewport(list(text), pos, offset, 5)
            assert offset <= pos
            assert pos <= offset_right or pos == len(text)
            assert string_width(text[offset:offset_right]) <= 5

    def test_custom_width_function(self) -> None:
        # Every rune counts as two columns
        result = compute_viewport(list("abcdef"), 6, 0, 4, lambda ch: 2)
        assert result == (4, 6)

    def test_wide_glyph_inserted_inside_window_refits(self) -> None:
        # "ab|cde" visible, then a wide glyph is typed at the cursor
        assert viewport("abcdefgh", 2, 5) == (0, 5)
        offset, offset_right = viewport("ab日cdefgh", 3, 5, 0)
        assert (offset, offset_right) == (0, 4)
        assert string_width("ab日cdefgh"[offset:offset_right]) <= 5

    def test_refit_moves_window_when_cursor_falls_off(self) -> None:
        # Cursor at the old right edge is pushed out by a wider window
        offset, offset_right = viewport("ab日日cdef", 4, 5, 0)
        assert offset_right == 4
        assert string_width("ab日日cdef"[offset:offset_right]) <= 5

    def test_typing_wide_glyphs_keeps_budget(self) -> None:
        ti = TextInput(TextInputOptions(width=5, cursor_mode=CursorMode.STATIC))
        ti.focus()
        ti.set_value("abcdefgh")
        ti.cursor_start()
        ti.set_cursor(2)
        for _ in range(3):
            ti.update(KeyMsg("日"))
            offset, offset_right = ti.viewport
            assert offset <= ti.cursor_position <= offset_right
            assert string_width(ti.value[offset:offset_right]) <= 5
