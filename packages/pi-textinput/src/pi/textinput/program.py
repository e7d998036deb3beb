"""Asyncio event loop driver for message-driven components.

``Program`` is the single owner of a model such as :class:`TextInput`. It
reads messages from one queue, applies them with ``model.update`` and runs the
returned commands as tasks. Whatever a command returns is posted back into the
same queue, so commands (blink timers, clipboard reads) never touch the model
directly.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

from pi.textinput.commands import BatchMsg, Cmd
from pi.textinput.messages import Msg

logger = logging.getLogger(__name__)


class Model(Protocol):
    def update(self, msg: Msg) -> tuple[Any, Cmd | None]: ...

    def view(self) -> str: ...


class _Quit:
    pass


_QUIT = _Quit()


class Program:
    """Runs a model until :meth:`quit` is called."""

    def __init__(
        self,
        model: Model,
        on_render: Callable[[str], None] | None = None,
    ) -> None:
        self.model = model
        self._on_render = on_render
        self._queue: asyncio.Queue[Msg | BatchMsg | _Quit] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()

    def send(self, msg: Msg | BatchMsg) -> None:
        """Post a message for the model; safe to call from commands and callbacks."""
        self._queue.put_nowait(msg)

    def quit(self) -> None:
        self._queue.put_nowait(_QUIT)

    def run_command(self, cmd: Cmd) -> None:
        task = asyncio.get_running_loop().create_task(self._execute(cmd))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, cmd: Cmd) -> None:
        try:
            msg = await cmd()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Command %r failed", cmd)
            return
        if msg is not None:
            self.send(msg)

    def _render(self) -> None:
        if self._on_render is not None:
            self._on_render(self.model.view())

    async def run(self, init: Cmd | None = None) -> Model:
        """Process messages until quit; returns the final model."""
        if init is not None:
            self.run_command(init)
        self._render()

        try:
            while True:
                msg = await self._queue.get()
                if isinstance(msg, _Quit):
                    break
                if isinstance(msg, BatchMsg):
                    for cmd in msg.cmds:
                        self.run_command(cmd)
                    continue
                self.model, cmd = self.model.update(msg)
                if cmd is not None:
                    self.run_command(cmd)
                self._render()
        finally:
            pending = list(self._tasks)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug("Program stopped, cancelled %d pending command(s)", len(pending))

        return self.model
