"""Keyboard input parsing and matching for the text input.

Decodes raw terminal key data (legacy xterm sequences, ``modifyOtherKeys``
and the kitty keyboard protocol) into key identifiers such as ``"ctrl+a"``,
``"alt+left"`` or ``"backspace"``, and matches them against identifiers used
in keybinding tables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by the kitty protocol
LOCK_MASK = 64 + 128

CODEPOINTS: dict[int, str] = {
    27: "escape",
    9: "tab",
    13: "enter",
    32: "space",
    127: "backspace",
    8: "backspace",
    57414: "enter",  # keypad enter
}

# Final byte of CSI / SS3 cursor sequences
_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number of CSI <n> ~ sequences
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
    "del": "delete",
    "pageup": "pageUp",
    "pagedown": "pageDown",
}

BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

KeyEventType = Literal["press", "repeat", "release"]

_EVENT_TYPES: dict[int, KeyEventType] = {1: "press", 2: "repeat", 3: "release"}


@dataclass
class ParsedKittySequence:
    codepoint: int
    modifier: int
    event_type: KeyEventType


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# CSI u: ESC[<codepoint>(:<shifted>(:<base>))?(;<modifier>(:<event>))?u
_KITTY_CSI_U_RE = re.compile(
    r"^\x1b\[(\d+)(?::\d*(?::\d+)?)?(?:;(\d+)(?::(\d+))?)?u$"
)
# ESC[1;<modifier>(:<event>)?<letter>
_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1;(\d+)(?::(\d+))?)?([ABCDHF])$")
# ESC[<number>(;<modifier>(:<event>)?)?~
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+)(?::(\d+))?)?~$")
# ESC O <letter>
_SS3_RE = re.compile(r"^\x1bO([ABCDHF])$")
# modifyOtherKeys: ESC[27;<modifier>;<keycode>~
_MODIFY_OTHER_KEYS_RE = re.compile(r"^\x1b\[27;(\d+);(\d+)~$")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _prefix(mod: int) -> str:
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def _mod_from_param(raw: str | None) -> int:
    if not raw:
        return 0
    return (int(raw) - 1) & ~LOCK_MASK


def _event_type(raw: str | None) -> KeyEventType:
    if not raw:
        return "press"
    return _EVENT_TYPES.get(int(raw), "press")


def _codepoint_key(cp: int) -> str | None:
    named = CODEPOINTS.get(cp)
    if named is not None:
        return named
    if cp <= 0:
        return None
    ch = chr(cp)
    if ch.isprintable():
        return ch.lower()
    return None


def parse_kitty_sequence(data: str) -> ParsedKittySequence | None:
    """Parse a kitty CSI-u sequence, or ``None`` when *data* is not one."""
    m = _KITTY_CSI_U_RE.match(data)
    if m is None:
        return None
    return ParsedKittySequence(
        codepoint=int(m.group(1)),
        modifier=_mod_from_param(m.group(2)),
        event_type=_event_type(m.group(3)),
    )


def key_event_type(data: str) -> KeyEventType:
    """Return the press/repeat/release type reported for *data*.

    Only the kitty protocol reports repeats and releases; everything else is
    a press.
    """
    if data.startswith(BRACKETED_PASTE_START):
        return "press"
    for pattern, group in ((_KITTY_CSI_U_RE, 3), (_CSI_LETTER_RE, 2), (_CSI_TILDE_RE, 3)):
        m = pattern.match(data)
        if m is not None:
            return _event_type(m.group(group))
    return "press"


def is_key_release(data: str) -> bool:
    return key_event_type(data) == "release"


# ---------------------------------------------------------------------------
# parse_key / normalize_key_id / matches_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return its key identifier, or ``None``.

    Modifiers are always emitted in ``ctrl+shift+alt+`` order so the result
    can be compared with :func:`normalize_key_id`.
    """
    if not data:
        return None

    kitty = parse_kitty_sequence(data)
    if kitty is not None:
        key = _codepoint_key(kitty.codepoint)
        return _prefix(kitty.modifier) + key if key else None

    m = _MODIFY_OTHER_KEYS_RE.match(data)
    if m is not None:
        key = _codepoint_key(int(m.group(2)))
        return _prefix(_mod_from_param(m.group(1))) + key if key else None

    m = _CSI_LETTER_RE.match(data)
    if m is not None:
        return _prefix(_mod_from_param(m.group(1))) + _LETTER_KEYS[m.group(3)]

    m = _CSI_TILDE_RE.match(data)
    if m is not None:
        key = _TILDE_KEYS.get(int(m.group(1)))
        return _prefix(_mod_from_param(m.group(2))) + key if key else None

    m = _SS3_RE.match(data)
    if m is not None:
        return _LETTER_KEYS[m.group(1)]

    if data == "\x1b[Z":
        return "shift+tab"

    if len(data) == 1:
        code = ord(data)
        if data == "\x1b":
            return "escape"
        if data in ("\r", "\n"):
            return "enter"
        if data == "\t":
            return "tab"
        if data == " ":
            return "space"
        if data in ("\x7f", "\x08"):
            return "backspace"
        if code == 0:
            return "ctrl+space"
        if 1 <= code <= 26:
            return "ctrl+" + chr(code + ord("a") - 1)
        if 27 < code < 32:
            return "ctrl+" + "\\]^_"[code - 28]
        if data.isprintable():
            return data
        return None

    # Alt is sent as an ESC prefix in front of the unmodified key
    if data[0] == "\x1b":
        inner = parse_key(data[1:])
        if inner is None or "alt+" in inner:
            return None
        if len(data) == 2 and data[1].isupper():
            return "shift+alt+" + data[1].lower()
        return _insert_alt(inner)

    return None


def _insert_alt(key_id: KeyId) -> KeyId:
    # key_id comes from parse_key, so modifiers are already in canonical order
    mod = MODIFIERS["alt"]
    rest = key_id
    for name in ("ctrl", "shift"):
        if rest.startswith(name + "+") and len(rest) > len(name) + 1:
            mod |= MODIFIERS[name]
            rest = rest[len(name) + 1:]
    return _prefix(mod) + rest


def normalize_key_id(key_id: str) -> KeyId | None:
    """Return *key_id* with canonical modifier order and key name.

    ``"Alt+Ctrl+Left"`` becomes ``"ctrl+alt+left"``. Returns ``None`` for an
    empty identifier.
    """
    if not key_id:
        return None
    if key_id.endswith("+") and len(key_id) > 1 and key_id[-2] == "+":
        # "ctrl++" - the key itself is a plus sign
        parts = key_id[:-2].split("+") + ["+"]
    else:
        parts = key_id.split("+")

    mod = 0
    key = ""
    for part in parts:
        lower = part.lower()
        if lower in MODIFIERS:
            mod |= MODIFIERS[lower]
        else:
            key = part

    if not key:
        return None
    if len(key) > 1:
        key = _ALIASES.get(key.lower(), key)
        if key not in ("pageUp", "pageDown"):
            key = key.lower()
    elif key.isalpha() and key.isupper():
        mod |= MODIFIERS["shift"]
        key = key.lower()
    return _prefix(mod) + key


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw terminal *data* is the key named by *key_id*."""
    expected = normalize_key_id(key_id)
    if expected is None:
        return False
    actual = parse_key(data)
    if actual is None:
        return False
    if actual == expected:
        return True
    # A plain uppercase letter is reported as the letter itself
    if len(data) == 1 and data.isalpha() and data.isupper():
        return expected == "shift+" + data.lower()
    return False


def _has_control_chars(data: str) -> bool:
    return any(
        ord(ch) < 0x20 or ord(ch) == 0x7F or 0x80 <= ord(ch) <= 0x9F for ch in data
    )


def decode_printable(data: str) -> str | None:
    """Return the text that *data* types, or ``None`` for non-text input.

    Plain printable data is returned as is. Kitty CSI-u presses of printable
    keys without ctrl/alt are decoded to their character.
    """
    if not data:
        return None

    kitty = parse_kitty_sequence(data)
    if kitty is not None:
        if kitty.event_type == "release" or kitty.modifier & ~MODIFIERS["shift"]:
            return None
        if kitty.codepoint == 32:
            return " "
        if kitty.codepoint in CODEPOINTS or kitty.codepoint <= 0:
            return None
        ch = chr(kitty.codepoint)
        if not ch.isprintable():
            return None
        return ch.upper() if kitty.modifier & MODIFIERS["shift"] else ch

    if _has_control_chars(data):
        return None
    return data
