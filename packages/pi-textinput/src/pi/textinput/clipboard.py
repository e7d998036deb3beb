"""System clipboard access.

Reads text from the clipboard through the platform's native tools: macOS,
Windows, and Linux (Termux, Wayland, X11). This is a blocking call; the text
input only ever runs it from a command, off the update path.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)

_TIMEOUT = 5


class ClipboardError(Exception):
    """Raised when no clipboard tool could provide the clipboard contents."""


def _is_wayland_session() -> bool:
    return bool(os.environ.get("WAYLAND_DISPLAY"))


def _candidate_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbpaste"]]
    if sys.platform == "win32":
        return [["powershell", "-NoProfile", "-Command", "Get-Clipboard"]]

    candidates: list[list[str]] = []
    if os.environ.get("TERMUX_VERSION"):
        candidates.append(["termux-clipboard-get"])
    if _is_wayland_session():
        candidates.append(["wl-paste", "--no-newline"])
    # X11, or XWayland as a fallback
    candidates.append(["xclip", "-selection", "clipboard", "-o"])
    candidates.append(["xsel", "--clipboard", "--output"])
    return candidates


def read_clipboard() -> str:
    """Return the clipboard contents as text.

    Raises :class:`ClipboardError` if every available tool fails.
    """
    tried: list[str] = []
    for command in _candidate_commands():
        if shutil.which(command[0]) is None:
            continue
        tried.append(command[0])
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                timeout=_TIMEOUT,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Clipboard tool %s failed: %s", command[0], exc)
            continue
        text = result.stdout.decode("utf-8", errors="replace")
        if sys.platform == "win32":
            # Get-Clipboard terminates its output with CRLF
            text = text.removesuffix("\r\n")
        return text

    if not tried:
        raise ClipboardError("no clipboard tool available")
    raise ClipboardError(f"could not read clipboard (tried: {', '.join(tried)})")
