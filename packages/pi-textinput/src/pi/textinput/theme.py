"""Styling for the text input.

Styles are plain ``Callable[[str], str]`` functions that wrap text in ANSI
SGR codes, so any colour library (or a lambda) can be plugged in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

StyleFn = Callable[[str], str]

# Marker drawn in front of the glyph under the cursor in plain mode
ASCII_CURSOR_MARKER = "¦"


def identity(text: str) -> str:
    return text


def reverse(text: str) -> str:
    return f"\x1b[7m{text}\x1b[27m"


def fg256(color: int) -> StyleFn:
    """Return a style painting the foreground with a 256-colour palette entry."""

    def _style(text: str) -> str:
        return f"\x1b[38;5;{color}m{text}\x1b[39m"

    return _style


@dataclass
class TextInputTheme:
    prompt: StyleFn = field(default=identity)
    text: StyleFn = field(default=identity)
    placeholder: StyleFn = field(default=fg256(240))
    cursor: StyleFn = field(default=reverse)


def plain_theme() -> TextInputTheme:
    """Theme without colours: the cursor is marked with an ASCII glyph instead."""
    return TextInputTheme(placeholder=identity, cursor=identity)
