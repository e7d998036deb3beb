"""Tests for system clipboard access."""

from __future__ import annotations

import subprocess
import sys

import pytest

from pi.textinput import clipboard
from pi.textinput.clipboard import ClipboardError, read_clipboard


@pytest.fixture
def linux_x11(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.delenv("TERMUX_VERSION", raising=False)


class TestCandidateCommands:
    def test_macos(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "darwin")
        assert clipboard._candidate_commands() == [["pbpaste"]]

    def test_x11(self, linux_x11: None) -> None:
        tools = [cmd[0] for cmd in clipboard._candidate_commands()]
        assert tools == ["xclip", "xsel"]

    def test_wayland_first(self, linux_x11: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
        tools = [cmd[0] for cmd in clipboard._candidate_commands()]
        assert tools == ["wl-paste", "xclip", "xsel"]


class TestReadClipboard:
    def test_reads_first_available_tool(
        self, linux_x11: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[list[str]] = []

        def fake_run(command, **kwargs):
            calls.append(command)
            return subprocess.CompletedProcess(command, 0, stdout="héllo".encode())

        monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

        assert read_clipboard() == "héllo"
        assert calls == [["xclip", "-selection", "clipboard", "-o"]]

    def test_falls_back_when_tool_fails(
        self, linux_x11: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fake_run(command, **kwargs):
            if command[0] == "xclip":
                raise subprocess.CalledProcessError(1, command)
            return subprocess.CompletedProcess(command, 0, stdout=b"from xsel")

        monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

        assert read_clipboard() == "from xsel"

    def test_no_tool_available(self, linux_x11: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
        with pytest.raises(ClipboardError, match="no clipboard tool"):
            read_clipboard()

    def test_every_tool_fails(self, linux_x11: None, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(command, **kwargs):
            raise subprocess.TimeoutExpired(command, 5)

        monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

        with pytest.raises(ClipboardError, match="xclip, xsel"):
            read_clipboard()
