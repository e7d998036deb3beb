"""Cursor blink scheduling.

Each text input owns one :class:`BlinkScheduler`. Arming the scheduler cancels
the previous timer and returns a command that sleeps for the blink interval
and then reports :class:`BlinkMsg`. Every timer carries the input ID and a tag
that is bumped on each arm/cancel, so an expiry that was already superseded is
recognised and ignored by ``TextInput.update``.
"""

from __future__ import annotations

import asyncio
import logging
import time

from pi.textinput.commands import Cmd
from pi.textinput.messages import BlinkCanceledMsg, BlinkMsg

logger = logging.getLogger(__name__)

DEFAULT_BLINK_SPEED = 0.53


class BlinkTimer:
    """Single-shot timer with a synchronous cancellation handle."""

    def __init__(self, instance_id: int, tag: int, interval: float) -> None:
        self.instance_id = instance_id
        self.tag = tag
        self.interval = interval
        self._cancelled = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    async def wait(self) -> BlinkMsg | BlinkCanceledMsg:
        """Sleep for the interval unless cancelled first."""
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            pass
        if self._cancelled.is_set():
            return BlinkCanceledMsg(self.instance_id, self.tag)
        return BlinkMsg(self.instance_id, self.tag, time.monotonic())


class BlinkScheduler:
    """Keeps at most one armed blink timer for an input."""

    def __init__(self, instance_id: int, interval: float = DEFAULT_BLINK_SPEED) -> None:
        self.instance_id = instance_id
        self.interval = interval
        self.tag = 0
        self._timer: BlinkTimer | None = None

    @property
    def armed(self) -> bool:
        return self._timer is not None and not self._timer.cancelled

    def arm(self) -> Cmd:
        """Cancel the current timer and return a command for a new one."""
        if self._timer is not None:
            self._timer.cancel()
        self.tag += 1
        self._timer = BlinkTimer(self.instance_id, self.tag, self.interval)
        logger.debug("Armed blink timer id=%d tag=%d", self.instance_id, self.tag)
        return self._timer.wait

    def cancel(self) -> None:
        """Cancel the armed timer, if any; its expiry becomes stale."""
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        self.tag += 1
        logger.debug("Cancelled blink timer id=%d", self.instance_id)

    def accepts(self, msg: BlinkMsg) -> bool:
        """Return ``True`` if *msg* comes from the currently armed timer."""
        return msg.id == self.instance_id and msg.tag == self.tag and self.armed
