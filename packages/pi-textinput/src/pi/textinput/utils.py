"""Terminal text utilities: display width measurement and character classes.

``char_width`` is the per-rune display width used by the viewport; it is the
default width oracle and can be swapped through ``TextInputOptions``.
``visible_width`` measures already-rendered strings (ANSI codes stripped,
grapheme clusters measured as a unit).
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from typing import Callable

import grapheme
import wcwidth as _wcwidth

CharWidthFn = Callable[[str], int]

# CSI sequences and OSC / APC strings
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)


@lru_cache(maxsize=4096)
def char_width(ch: str) -> int:
    """Return the number of terminal columns a single code point occupies.

    Control characters and combining marks occupy no columns; East Asian wide
    and fullwidth characters occupy two.
    """
    if not ch:
        return 0
    cp = ord(ch[0])
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    if cp < 0x7F:
        return 1
    return max(_wcwidth.wcwidth(ch[0]), 0)


def string_width(text: str, width_fn: CharWidthFn = char_width) -> int:
    """Sum of the per-rune widths of *text*."""
    return sum(width_fn(ch) for ch in text)


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    if len(g) == 1:
        return char_width(g)
    # ZWJ sequences, flags, skin tones and VS16 presentation are emoji
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2
    if unicodedata.category(g[0]).startswith("M"):
        return 0
    return char_width(g[0])


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of rendered *text*.

    * Strips ANSI escape sequences.
    * Measures grapheme clusters rather than code points.
    """
    if not text:
        return 0
    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is Unicode whitespace."""
    return char.isspace()


def is_control_char(char: str) -> bool:
    cp = ord(char)
    return cp < 0x20 or cp == 0x7F or 0x80 <= cp <= 0x9F


def clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))
