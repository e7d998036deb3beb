"""Follow-up commands returned by ``TextInput.update``.

A command is an argument-less coroutine function. The event loop that owns the
input awaits it off the update path and posts the message it returns (if any)
back into its queue. Commands never touch input state themselves.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from pi.textinput.messages import InitialBlinkMsg, Msg, PasteErrorMsg, PasteMsg

logger = logging.getLogger(__name__)

Cmd = Callable[[], Awaitable[Optional[Msg]]]

ClipboardReader = Callable[[], str]


@dataclass(frozen=True)
class BatchMsg:
    """Several commands to run concurrently; produced by :func:`batch`."""

    cmds: tuple[Cmd, ...]


async def blink() -> InitialBlinkMsg:
    """Command that starts cursor blinking on focused inputs."""
    return InitialBlinkMsg()


def paste(reader: ClipboardReader) -> Cmd:
    """Build a command that reads the clipboard with *reader*.

    The blocking read runs in the default executor. The command resolves to
    :class:`PasteMsg` on success and :class:`PasteErrorMsg` on failure.
    """

    async def _paste() -> PasteMsg | PasteErrorMsg:
        try:
            loop = asyncio.get_running_loop()
            text = await loop.run_in_executor(None, reader)
        except Exception as exc:
            logger.warning("Clipboard read failed: %s", exc)
            return PasteErrorMsg(exc)
        return PasteMsg(text)

    return _paste


def batch(*cmds: Cmd | None) -> Cmd | None:
    """Combine commands; ``None`` entries are dropped."""
    valid = tuple(cmd for cmd in cmds if cmd is not None)
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]

    async def _batch() -> BatchMsg:
        return BatchMsg(valid)

    return _batch
