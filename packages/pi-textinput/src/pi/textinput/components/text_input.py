"""TextInput component - single-line text input with a blinking cursor.

The component owns the value, the cursor, the horizontal scroll window and
the blink state. The owning event loop feeds it messages through
:meth:`TextInput.update`, which mutates the component and may return a
command to run off the update path (a blink timer or a clipboard read).
:meth:`TextInput.view` draws the current state.

Example::

    ti = TextInput(TextInputOptions(placeholder="table name", width=20))
    cmd = ti.focus()
    ti, cmd = ti.update(KeyMsg("a"))
    print(ti.view())
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field

from pi.textinput import commands
from pi.textinput.blink import DEFAULT_BLINK_SPEED, BlinkScheduler
from pi.textinput.clipboard import read_clipboard
from pi.textinput.commands import ClipboardReader, Cmd
from pi.textinput.ids import IdAllocator, default_id_allocator
from pi.textinput.keybindings import KeybindingsConfig, KeybindingsManager, get_keybindings
from pi.textinput.keys import (
    BRACKETED_PASTE_END,
    BRACKETED_PASTE_START,
    decode_printable,
    is_key_release,
)
from pi.textinput.messages import (
    BlinkCanceledMsg,
    BlinkMsg,
    BlurMsg,
    FocusMsg,
    InitialBlinkMsg,
    KeyMsg,
    Msg,
    PasteErrorMsg,
    PasteMsg,
)
from pi.textinput.theme import ASCII_CURSOR_MARKER, TextInputTheme, plain_theme
from pi.textinput.utils import (
    CharWidthFn,
    char_width,
    clamp,
    is_control_char,
    is_whitespace_char,
    string_width,
    visible_width,
)
from pi.textinput.viewport import compute_viewport

logger = logging.getLogger(__name__)


class EchoMode(enum.Enum):
    """How the value is displayed. Never affects the stored value."""

    NORMAL = "normal"
    # Mask character in place of every column of text
    PASSWORD = "password"
    # Nothing at all, like a command-line password prompt
    NONE = "none"


class CursorMode(enum.Enum):
    BLINK = "blink"
    STATIC = "static"
    HIDE = "hidden"

    def __str__(self) -> str:
        return self.value


def _no_color() -> bool:
    return bool(os.environ.get("NO_COLOR"))


@dataclass
class TextInputOptions:
    prompt: str = "> "
    placeholder: str = ""
    # Seconds between blink phases
    blink_speed: float = DEFAULT_BLINK_SPEED
    echo_mode: EchoMode = EchoMode.NORMAL
    echo_character: str = "*"
    # Maximum number of characters; 0 or less means no limit
    char_limit: int = 0
    # Display columns of the scroll window; 0 or less disables scrolling
    width: int = 0
    cursor_mode: CursorMode = CursorMode.BLINK
    # No colours: ASCII cursor marker and unstyled placeholder
    plain: bool = field(default_factory=_no_color)
    theme: TextInputTheme | None = None
    keybindings: KeybindingsConfig | None = None
    clipboard_reader: ClipboardReader = read_clipboard
    width_fn: CharWidthFn = char_width
    id_allocator: IdAllocator | None = None

    def __post_init__(self) -> None:
        if self.blink_speed <= 0:
            raise ValueError(f"blink_speed must be positive, got {self.blink_speed!r}")
        if len(self.echo_character) != 1:
            raise ValueError(
                f"echo_character must be a single character, got {self.echo_character!r}"
            )


class TextInput:
    """Single-line text input with a blinking cursor and horizontal scrolling."""

    def __init__(self, options: TextInputOptions | None = None) -> None:
        opts = options or TextInputOptions()

        self.prompt = opts.prompt
        self.placeholder = opts.placeholder
        self.echo_mode = opts.echo_mode
        self.echo_character = opts.echo_character
        self.char_limit = opts.char_limit
        self.width = opts.width
        self.plain = opts.plain
        self.theme = opts.theme or (plain_theme() if opts.plain else TextInputTheme())

        # Last clipboard error
        self.err: Exception | None = None

        self._keybindings = (
            KeybindingsManager(opts.keybindings) if opts.keybindings else get_keybindings()
        )
        self._read_clipboard = opts.clipboard_reader
        self._width_fn = opts.width_fn

        self.id = (opts.id_allocator or default_id_allocator()).next_id()
        self._blink = BlinkScheduler(self.id, opts.blink_speed)
        self._cursor_mode = opts.cursor_mode

        self._value: list[str] = []
        self._pos = 0

        # Focusable interface
        self.focused = False
        self.cursor_visible = False

        # Scroll window [offset, offset_right)
        self.offset = 0
        self.offset_right = 0

        # Bracketed paste mode
        self._paste_buffer = ""
        self._is_in_paste = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def value(self) -> str:
        return "".join(self._value)

    def get_value(self) -> str:
        return self.value

    @property
    def cursor_position(self) -> int:
        return self._pos

    @property
    def cursor_mode(self) -> CursorMode:
        return self._cursor_mode

    @property
    def last_error(self) -> Exception | None:
        return self.err

    @property
    def viewport(self) -> tuple[int, int]:
        return self.offset, self.offset_right

    @property
    def blink_speed(self) -> float:
        return self._blink.interval

    @blink_speed.setter
    def blink_speed(self, seconds: float) -> None:
        self._blink.interval = seconds

    @property
    def blink_tag(self) -> int:
        """Tag of the blink message the input currently expects."""
        return self._blink.tag

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_value(self, value: str) -> None:
        runes = list(value)
        if self.char_limit > 0:
            runes = runes[: self.char_limit]
        self._value = runes
        if self._pos == 0 or self._pos > len(self._value):
            self._set_cursor(len(self._value))
        else:
            self._handle_overflow()

    def set_cursor(self, pos: int) -> None:
        """Move the cursor, clamping it to the value."""
        self._set_cursor(pos)

    def cursor_start(self) -> None:
        self._set_cursor(0)

    def cursor_end(self) -> None:
        self._set_cursor(len(self._value))

    def set_cursor_mode(self, mode: CursorMode) -> Cmd | None:
        """Change the cursor mode; returns the command that starts blinking."""
        self._cursor_mode = mode
        self.cursor_visible = self.focused and mode is not CursorMode.HIDE
        match mode:
            case CursorMode.BLINK:
                return commands.blink
            case CursorMode.STATIC | CursorMode.HIDE:
                self._blink.cancel()
                return None

    def focus(self) -> Cmd | None:
        """Give the input focus; in blink mode returns the first blink timer."""
        self.focused = True
        self.cursor_visible = self._cursor_mode is not CursorMode.HIDE
        if self._cursor_mode is CursorMode.BLINK:
            return self._blink.arm()
        return None

    def blur(self) -> None:
        self.focused = False
        self.cursor_visible = False
        self._blink.cancel()
        # A paste cut off by the focus change is dropped
        self._clear_paste()

    def reset(self) -> Cmd | None:
        """Clear the value; returns the command that restarts the blink."""
        self._value = []
        self._clear_paste()
        if self._set_cursor(0) and self.focused:
            return self._blink.arm()
        return None

    def dispose(self) -> None:
        """Cancel the armed blink timer of an input that is being discarded."""
        self._blink.cancel()

    # ------------------------------------------------------------------
    # Cursor and buffer operations
    #
    # Each returns whether the cursor blink should restart.
    # ------------------------------------------------------------------

    def _set_cursor(self, pos: int) -> bool:
        self._pos = clamp(pos, 0, len(self._value))
        self._handle_overflow()
        # Show the cursor unless it's been explicitly hidden
        self.cursor_visible = self.focused and self._cursor_mode is not CursorMode.HIDE
        return self._cursor_mode is CursorMode.BLINK

    def _cursor_start(self) -> bool:
        return self._set_cursor(0)

    def _cursor_end(self) -> bool:
        return self._set_cursor(len(self._value))

    def _clear_paste(self) -> None:
        self._is_in_paste = False
        self._paste_buffer = ""

    def _handle_overflow(self) -> None:
        self.offset, self.offset_right = compute_viewport(
            self._value,
            self._pos,
            self.offset,
            self.width,
            self._width_fn,
        )

    def _insert_runes(self, runes: list[str]) -> bool:
        if self.char_limit > 0:
            available = self.char_limit - len(self._value)
            if available <= 0:
                return False
            runes = runes[:available]
        if not runes:
            return False
        self._value[self._pos:self._pos] = runes
        return self._set_cursor(self._pos + len(runes))

    def _handle_paste(self, text: str) -> bool:
        # Single-line input: drop line breaks and other control characters
        clean = text.replace("\r\n", "").replace("\r", "").replace("\n", "")
        return self._insert_runes([ch for ch in clean if not is_control_char(ch)])

    def _delete_char_backward(self) -> bool:
        if self._pos == 0:
            return False
        del self._value[self._pos - 1]
        return self._set_cursor(self._pos - 1)

    def _delete_char_forward(self) -> bool:
        if self._pos >= len(self._value):
            return False
        del self._value[self._pos]
        return self._set_cursor(self._pos)

    def _delete_before_cursor(self) -> bool:
        del self._value[: self._pos]
        self.offset = 0
        return self._set_cursor(0)

    def _delete_after_cursor(self) -> bool:
        del self._value[self._pos:]
        return self._set_cursor(len(self._value))

    def _word_left_target(self) -> int:
        i = self._pos
        while i > 0 and is_whitespace_char(self._value[i - 1]):
            i -= 1
        while i > 0 and not is_whitespace_char(self._value[i - 1]):
            i -= 1
        return i

    def _word_right_target(self) -> int:
        i = self._pos
        while i < len(self._value) and is_whitespace_char(self._value[i]):
            i += 1
        while i < len(self._value) and not is_whitespace_char(self._value[i]):
            i += 1
        return i

    # Word operations on masked input act on the whole line so that the
    # cursor never reveals where the hidden words break.

    def _word_left(self) -> bool:
        if self._pos == 0 or not self._value:
            return False
        if self.echo_mode is not EchoMode.NORMAL:
            return self._cursor_start()
        return self._set_cursor(self._word_left_target())

    def _word_right(self) -> bool:
        if self._pos >= len(self._value):
            return False
        if self.echo_mode is not EchoMode.NORMAL:
            return self._cursor_end()
        return self._set_cursor(self._word_right_target())

    def _delete_word_left(self) -> bool:
        if self.echo_mode is not EchoMode.NORMAL:
            return self._delete_before_cursor()
        if self._pos == 0:
            return False
        start = self._word_left_target()
        del self._value[start:self._pos]
        return self._set_cursor(start)

    def _delete_word_right(self) -> bool:
        if self.echo_mode is not EchoMode.NORMAL:
            return self._delete_after_cursor()
        if self._pos >= len(self._value):
            return False
        end = self._word_right_target()
        del self._value[self._pos:end]
        return self._set_cursor(self._pos)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, msg: Msg) -> tuple[TextInput, Cmd | None]:
        """Apply one message; returns the input and an optional command."""
        match msg:
            case FocusMsg():
                return self, self.focus()
            case BlurMsg():
                self.blur()
                return self, None

        if not self.focused:
            self.cursor_visible = False
            return self, None

        reset_blink = False
        cmd: Cmd | None = None

        match msg:
            case KeyMsg(data=data):
                if is_key_release(data):
                    return self, None
                reset_blink, cmd = self._handle_key(data)

            case PasteMsg(text=text):
                reset_blink = self._handle_paste(text)

            case PasteErrorMsg(error=error):
                self.err = error

            case InitialBlinkMsg():
                if self._cursor_mode is not CursorMode.BLINK:
                    return self, None
                return self, self._blink.arm()

            case BlinkMsg():
                if self._cursor_mode is not CursorMode.BLINK or not self._blink.accepts(msg):
                    logger.debug(
                        "Ignoring stale blink id=%d tag=%d (expecting id=%d tag=%d)",
                        msg.id,
                        msg.tag,
                        self.id,
                        self._blink.tag,
                    )
                    return self, None
                self.cursor_visible = not self.cursor_visible
                return self, self._blink.arm()

            case BlinkCanceledMsg():
                return self, None

        self._handle_overflow()
        if reset_blink and self._cursor_mode is CursorMode.BLINK:
            return self, commands.batch(cmd, self._blink.arm())
        return self, cmd

    def _handle_key(self, data: str) -> tuple[bool, Cmd | None]:
        """Handle one chunk of key data.

        Returns whether the blink should restart and the command to run, if
        any (the clipboard read for the paste key).
        """
        if self._is_in_paste or BRACKETED_PASTE_START in data:
            return self._handle_bracketed_paste(data)
        if self._keybindings.matches(data, "paste"):
            return False, commands.paste(self._read_clipboard)
        return self._apply_key(data), None

    def _handle_bracketed_paste(self, data: str) -> tuple[bool, Cmd | None]:
        reset_blink = False
        cmd: Cmd | None = None

        if not self._is_in_paste:
            # Keys ahead of the paste marker are typed first
            typed, _, data = data.partition(BRACKETED_PASTE_START)
            if typed:
                reset_blink, cmd = self._handle_key(typed)
            self._is_in_paste = True
            self._paste_buffer = ""

        self._paste_buffer += data
        end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end_index == -1:
            return reset_blink, cmd

        content = self._paste_buffer[:end_index]
        remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END):]
        self._clear_paste()
        reset_blink = self._handle_paste(content) or reset_blink
        if remaining:
            more_blink, more_cmd = self._handle_key(remaining)
            reset_blink = more_blink or reset_blink
            cmd = commands.batch(cmd, more_cmd)
        return reset_blink, cmd

    def _apply_key(self, data: str) -> bool:  # noqa: C901
        action = self._keybindings.action_for(data)
        match action:
            case "cursorLeft":
                if self._pos > 0:
                    return self._set_cursor(self._pos - 1)
                return False
            case "cursorRight":
                if self._pos < len(self._value):
                    return self._set_cursor(self._pos + 1)
                return False
            case "cursorWordLeft":
                return self._word_left()
            case "cursorWordRight":
                return self._word_right()
            case "cursorLineStart":
                return self._cursor_start()
            case "cursorLineEnd":
                return self._cursor_end()
            case "deleteCharBackward":
                return self._delete_char_backward()
            case "deleteCharForward":
                return self._delete_char_forward()
            case "deleteWordBackward":
                return self._delete_word_left()
            case "deleteWordForward":
                return self._delete_word_right()
            case "deleteToLineStart":
                return self._delete_before_cursor()
            case "deleteToLineEnd":
                return self._delete_after_cursor()

        text = decode_printable(data)
        if text is None:
            return False
        return self._insert_runes(list(text))

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def _echo_transform(self, text: str) -> str:
        match self.echo_mode:
            case EchoMode.NORMAL:
                return text
            case EchoMode.PASSWORD:
                return self.echo_character * string_width(text, self._width_fn)
            case EchoMode.NONE:
                return ""

    def _cursor_view(self, text: str, *, at_end: bool = False) -> str:
        if not self.cursor_visible:
            return self.theme.text(text)
        if self.plain:
            # The marker stands in for the blank cell after the value
            if at_end:
                return ASCII_CURSOR_MARKER
            return ASCII_CURSOR_MARKER + self.theme.cursor(text)
        return self.theme.cursor(text)

    def view(self) -> str:
        """Render the prompt, the visible window of the value and the cursor."""
        if not self._value and self.placeholder:
            return self._placeholder_view()

        style_text = self.theme.text
        window = self._value[self.offset:self.offset_right]
        pos = max(0, self._pos - self.offset)

        v = style_text(self._echo_transform("".join(window[:pos])))
        if pos < len(window):
            v += self._cursor_view(self._echo_transform(window[pos]))
            v += style_text(self._echo_transform("".join(window[pos + 1:])))
        elif self._pos < len(self._value):
            # Cursor sits in the column just right of the window
            v += self._cursor_view(self._echo_transform(self._value[self._pos]))
        else:
            v += self._cursor_view(" ", at_end=True)

        # Pad to the window width plus the cursor column
        if self.width > 0:
            padding = max(0, self.width + 1 - visible_width(v))
            if padding:
                v += style_text(" " * padding)

        return self.theme.prompt(self.prompt) + v

    def _placeholder_view(self) -> str:
        p = self.placeholder
        style = self.theme.placeholder

        if self.cursor_visible:
            v = self._cursor_view(p[:1])
        else:
            v = self._cursor_view(style(p[:1]))
        v += style(p[1:])

        return self.theme.prompt(self.prompt) + v

    def render(self, width: int) -> list[str]:
        """Component interface: the input always renders as one line."""
        return [self.view()]
