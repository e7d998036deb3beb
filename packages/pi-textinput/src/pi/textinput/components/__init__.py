"""Text input components."""

from pi.textinput.components.text_input import (
    CursorMode,
    EchoMode,
    TextInput,
    TextInputOptions,
)

__all__ = [
    "CursorMode",
    "EchoMode",
    "TextInput",
    "TextInputOptions",
]
