"""Single-shot idle timer used to engage the lock."""

import asyncio
from typing import Any, Callable, Optional

from idle_lock.utils.logger import get_logger


class IdleTimer:
    """Holds at most one pending wake-up.

    ``scheduler`` is anything with an ``asyncio.AbstractEventLoop.call_later``
    compatible method. When omitted, the running event loop is used at the
    time of the first ``reset``.
    """

    def __init__(self, callback: Callable[[], None], scheduler: Optional[Any] = None):
        self._callback = callback
        self._scheduler = scheduler
        self._handle: Optional[asyncio.TimerHandle] = None
        self.logger = get_logger()

    @property
    def is_pending(self) -> bool:
        """Check if a timeout is currently scheduled."""
        return self._handle is not None

    def reset(self, duration_ms: int) -> None:
        """Cancel any pending timeout and schedule a new one."""
        self.cancel()
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(duration_ms / 1000, self._fire)
        self.logger.debug(f"Idle timer armed for {duration_ms}ms")

    def cancel(self) -> None:
        """Cancel the pending timeout, if any."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.logger.debug("Idle timer fired")
        self._callback()
