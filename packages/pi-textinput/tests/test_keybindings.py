"""Tests for pi.textinput.keybindings: the text input keybindings manager."""

from __future__ import annotations

import pytest

from pi.textinput.keybindings import (
    DEFAULT_TEXT_INPUT_KEYBINDINGS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)


# ---------------------------------------------------------------------------
# DEFAULT_TEXT_INPUT_KEYBINDINGS constant
# ---------------------------------------------------------------------------


class TestDefaultKeybindings:
    def test_has_every_action(self):
        for action in [
            "cursorLeft", "cursorRight", "cursorWordLeft", "cursorWordRight",
            "cursorLineStart", "cursorLineEnd",
            "deleteCharBackward", "deleteCharForward",
            "deleteWordBackward", "deleteWordForward",
            "deleteToLineStart", "deleteToLineEnd",
            "paste",
        ]:
            assert action in DEFAULT_TEXT_INPUT_KEYBINDINGS, f"Missing action: {action}"

    def test_no_key_is_bound_twice(self):
        seen: set[str] = set()
        for keys in DEFAULT_TEXT_INPUT_KEYBINDINGS.values():
            for key in keys if isinstance(keys, list) else [keys]:
                assert key not in seen, f"Duplicate binding: {key}"
                seen.add(key)


# ---------------------------------------------------------------------------
# KeybindingsManager
# ---------------------------------------------------------------------------


class TestKeybindingsManager:
    @pytest.mark.parametrize(
        ("data", "action"),
        [
            ("\x1b[D", "cursorLeft"),
            ("\x02", "cursorLeft"),
            ("\x06", "cursorRight"),
            ("\x1bb", "cursorWordLeft"),
            ("\x1b[1;5C", "cursorWordRight"),
            ("\x01", "cursorLineStart"),
            ("\x05", "cursorLineEnd"),
            ("\x7f", "deleteCharBackward"),
            ("\x04", "deleteCharForward"),
            ("\x17", "deleteWordBackward"),
            ("\x1bd", "deleteWordForward"),
            ("\x15", "deleteToLineStart"),
            ("\x0b", "deleteToLineEnd"),
            ("\x16", "paste"),
        ],
    )
    def test_default_actions(self, data: str, action: str):
        assert KeybindingsManager().action_for(data) == action

    def test_unbound_input(self):
        manager = KeybindingsManager()
        assert manager.action_for("a") is None
        assert manager.action_for("\r") is None

    def test_override_replaces_action_keys(self):
        manager = KeybindingsManager({"deleteWordBackward": "ctrl+h"})
        assert manager.get_keys("deleteWordBackward") == ["ctrl+h"]
        assert manager.action_for("\x17") is None
        # Other actions keep their defaults
        assert manager.get_keys("cursorLeft") == ["left", "ctrl+b"]

    def test_set_config_rebuilds(self):
        manager = KeybindingsManager({"paste": "alt+v"})
        manager.set_config({})
        assert manager.matches("\x16", "paste")
        assert not manager.matches("\x1bv", "paste")

    def test_get_keys_unknown_action(self):
        assert KeybindingsManager().get_keys("submit") == []  # type: ignore[arg-type]


class TestGlobalKeybindings:
    def test_default_singleton(self):
        assert get_keybindings() is get_keybindings()

    def test_set_keybindings(self):
        previous = get_keybindings()
        custom = KeybindingsManager({"paste": "alt+v"})
        try:
            set_keybindings(custom)
            assert get_keybindings() is custom
        finally:
            set_keybindings(previous)
