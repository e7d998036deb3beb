"""Horizontal scrolling window for a single-line input.

The window is the half-open range ``[offset, offset_right)`` of the value that
is drawn. It is budgeted in terminal columns, not characters, because wide
glyphs take two columns. The cursor cell at the right edge of the window uses
one column beyond the budget.
"""

from __future__ import annotations

from typing import Sequence

from pi.textinput.utils import CharWidthFn, char_width


def grow_right(
    value: Sequence[str], start: int, width: int, width_fn: CharWidthFn = char_width
) -> int:
    """Return the end of the widest window starting at *start* that fits *width*."""
    used = 0
    end = start
    while end < len(value):
        w = width_fn(value[end])
        # Always show at least the glyph under the cursor
        if used + w > width and end > start:
            break
        used += w
        end += 1
    return end


def grow_left(
    value: Sequence[str], end: int, width: int, width_fn: CharWidthFn = char_width
) -> int:
    """Return the start of the widest window ending at *end* that fits *width*."""
    used = 0
    start = end
    while start > 0:
        w = width_fn(value[start - 1])
        if used + w > width:
            break
        used += w
        start -= 1
    return start


def compute_viewport(
    value: Sequence[str],
    pos: int,
    offset: int,
    width: int,
    width_fn: CharWidthFn = char_width,
) -> tuple[int, int]:
    """Return the new ``(offset, offset_right)`` keeping *pos* visible.

    ``width <= 0`` disables windowing. When the whole value fits, the window
    is the whole value. Otherwise the window start only moves when the cursor
    leaves it: to the left it restarts at the cursor and extends right, to the
    right it ends at the cursor and extends left. While the cursor stays
    inside, the right edge is re-fitted from the start, since edits may have
    changed the width of the text in the window.
    """
    length = len(value)
    if width <= 0 or sum(width_fn(ch) for ch in value) <= width:
        return 0, length

    # Deletions may have shortened the value
    offset = min(offset, length)

    if pos < offset:
        offset = pos
        return offset, grow_right(value, offset, width, width_fn)

    offset_right = grow_right(value, offset, width, width_fn)
    if pos >= offset_right:
        offset_right = pos
        offset = grow_left(value, offset_right, width, width_fn)

    return offset, offset_right
