"""Messages consumed by ``TextInput.update``.

Key presses and focus reports come from the terminal; the remaining messages
are produced by commands (clipboard reads and blink timers) and are posted
back into the same queue the owning event loop reads from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# --- Terminal input ---


@dataclass(frozen=True)
class KeyMsg:
    """Raw terminal data for one key press (or one bracketed paste)."""

    data: str


@dataclass(frozen=True)
class FocusMsg:
    pass


@dataclass(frozen=True)
class BlurMsg:
    pass


# --- Clipboard ---


@dataclass(frozen=True)
class PasteMsg:
    text: str


@dataclass(frozen=True)
class PasteErrorMsg:
    error: Exception


# --- Cursor blink ---


@dataclass(frozen=True)
class InitialBlinkMsg:
    """Starts blinking on whichever focused input receives it."""


@dataclass(frozen=True)
class BlinkMsg:
    """A blink timer expired.

    ``id`` and ``tag`` identify the timer; ``time`` is the monotonic clock
    reading at expiry.
    """

    id: int
    tag: int
    time: float = field(default=0.0, compare=False)


@dataclass(frozen=True)
class BlinkCanceledMsg:
    id: int
    tag: int


Msg = Union[
    KeyMsg,
    FocusMsg,
    BlurMsg,
    PasteMsg,
    PasteErrorMsg,
    InitialBlinkMsg,
    BlinkMsg,
    BlinkCanceledMsg,
]
