"""Lock state machine driven by activity, idle timeouts and authentication."""

import asyncio
from enum import Enum
from typing import Any, Optional

from idle_lock.core.state import LockContext, LockState
from idle_lock.core.timer import IdleTimer
from idle_lock.platforms.base import AuthenticationGateway, AuthOutcome, AuthResult
from idle_lock.utils.logger import get_logger

DEFAULT_TIMEOUT_MS = 3000
DEFAULT_PROMPT_MESSAGE = "Unlock the lock screen"


class FallbackPolicy(Enum):
    """What to do when a challenge cannot be presented or fails."""

    UNLOCK = "unlock"
    STAY_LOCKED = "stay_locked"


class LockController:
    """Owns the lock state and mediates between timer, activity and auth."""

    def __init__(
        self,
        gateway: AuthenticationGateway,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        prompt_message: str = DEFAULT_PROMPT_MESSAGE,
        fallback_policy: FallbackPolicy = FallbackPolicy.UNLOCK,
        scheduler: Optional[Any] = None,
    ):
        self.gateway = gateway
        self.timeout_ms = timeout_ms
        self.prompt_message = prompt_message
        self.fallback_policy = fallback_policy
        self.context = LockContext()
        self.logger = get_logger()

        self._timer = IdleTimer(self.on_timeout, scheduler)
        self._state = LockState.UNLOCKED
        self._mounted = False
        # Bumped on unmount so late challenge results are discarded
        self._generation = 0
        self._unlock_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> LockState:
        return self._state

    @property
    def is_locked(self) -> bool:
        return self._state is LockState.LOCKED

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def unlock_pending(self) -> bool:
        """Check if an unlock attempt is in flight."""
        return self._unlock_task is not None

    @property
    def timer_pending(self) -> bool:
        return self._timer.is_pending

    def mount(self) -> None:
        """Start the machine Unlocked with the idle clock running."""
        if self._mounted:
            self.logger.warning("Lock controller already mounted")
            return

        self.logger.info(f"Mounting lock controller (timeout {self.timeout_ms}ms)")
        self._mounted = True
        self._enter_unlocked()

    def unmount(self) -> None:
        """Stop the machine. Nothing transitions after this."""
        if not self._mounted:
            return

        self.logger.info("Unmounting lock controller")
        self._mounted = False
        self._generation += 1
        self._timer.cancel()
        self._unlock_task = None

    def on_activity(self) -> None:
        """Reset the idle clock. Ignored while locked."""
        if not self._mounted or self.is_locked:
            return
        self._timer.reset(self.timeout_ms)

    def on_timeout(self) -> None:
        """Engage the lock when the idle timer fires."""
        if not self._mounted or self.is_locked:
            return

        self.logger.info("Idle timeout reached, locking")
        self._state = LockState.LOCKED
        self.context._publish(True)

    def request_unlock(self) -> Optional[asyncio.Task]:
        """Start an unlock attempt.

        Returns the task resolving the attempt, or None when the request was
        ignored (not locked, not mounted, or an attempt is already pending).
        Must be called with an event loop running.
        """
        if not self._mounted or not self.is_locked:
            self.logger.debug("Unlock requested while not locked, ignoring")
            return None
        if self._unlock_task is not None:
            self.logger.debug("Unlock already in progress, ignoring")
            return None

        self.logger.info("Unlock requested")
        self._unlock_task = asyncio.get_running_loop().create_task(
            self._authenticate(self._generation)
        )
        return self._unlock_task

    async def _authenticate(self, generation: int) -> None:
        try:
            if await self.gateway.has_challenge():
                result = await self.gateway.challenge(self.prompt_message)
            else:
                self.logger.info("No authentication sensor available")
                result = None
        except Exception as e:
            self.logger.error(f"Authentication error: {e}")
            result = AuthResult.failed(str(e))

        if generation != self._generation:
            self.logger.debug("Discarding authentication result after unmount")
            return

        self._unlock_task = None
        self._resolve(result)

    def _resolve(self, result: Optional[AuthResult]) -> None:
        if result is None:
            self._fallback("no sensor")
        elif result.outcome is AuthOutcome.SUCCESS:
            self.logger.info("Authentication succeeded, unlocking")
            self._enter_unlocked()
        elif result.outcome is AuthOutcome.CANCELLED:
            self.logger.info("Authentication cancelled by user, staying locked")
        else:
            self.logger.warning(f"Authentication failed: {result.reason}")
            self._fallback(result.reason or "unknown")

    def _fallback(self, reason: str) -> None:
        if self.fallback_policy is FallbackPolicy.STAY_LOCKED:
            self.logger.info(f"Fallback ({reason}): staying locked")
            return
        self.logger.info(f"Fallback ({reason}): unlocking without authentication")
        self._enter_unlocked()

    def _enter_unlocked(self) -> None:
        self._state = LockState.UNLOCKED
        self._timer.reset(self.timeout_ms)
        self.context._publish(False)
