"""pi-textinput: single-line text input for terminal user interfaces."""

# Blink scheduling
from pi.textinput.blink import DEFAULT_BLINK_SPEED, BlinkScheduler, BlinkTimer

# Clipboard
from pi.textinput.clipboard import ClipboardError, read_clipboard

# Commands
from pi.textinput.commands import BatchMsg, Cmd, batch, blink, paste

# Components
from pi.textinput.components import CursorMode, EchoMode, TextInput, TextInputOptions

# Instance IDs
from pi.textinput.ids import CounterIdAllocator, IdAllocator, default_id_allocator

# Keybindings
from pi.textinput.keybindings import (
    DEFAULT_TEXT_INPUT_KEYBINDINGS,
    KeybindingsManager,
    TextInputAction,
    get_keybindings,
    set_keybindings,
)

# Keyboard input handling
from pi.textinput.keys import Key, KeyId, matches_key, parse_key

# Messages
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

# Event loop
from pi.textinput.program import Program

# Styling
from pi.textinput.theme import TextInputTheme, plain_theme

# Utilities
from pi.textinput.utils import char_width, string_width, visible_width
from pi.textinput.viewport import compute_viewport

__all__ = [
    # blink
    "DEFAULT_BLINK_SPEED",
    "BlinkScheduler",
    "BlinkTimer",
    # clipboard
    "ClipboardError",
    "read_clipboard",
    # commands
    "BatchMsg",
    "Cmd",
    "batch",
    "blink",
    "paste",
    # components
    "CursorMode",
    "EchoMode",
    "TextInput",
    "TextInputOptions",
    # ids
    "CounterIdAllocator",
    "IdAllocator",
    "default_id_allocator",
    # keybindings
    "DEFAULT_TEXT_INPUT_KEYBINDINGS",
    "KeybindingsManager",
    "TextInputAction",
    "get_keybindings",
    "set_keybindings",
    # keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # messages
    "BlinkCanceledMsg",
    "BlinkMsg",
    "BlurMsg",
    "FocusMsg",
    "InitialBlinkMsg",
    "KeyMsg",
    "Msg",
    "PasteErrorMsg",
    "PasteMsg",
    # program
    "Program",
    # theme
    "TextInputTheme",
    "plain_theme",
    # utils
    "char_width",
    "compute_viewport",
    "string_width",
    "visible_width",
]
