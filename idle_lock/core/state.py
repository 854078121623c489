"""Lock state and its broadcast to observers."""

from enum import Enum
from typing import Callable, List

from idle_lock.utils.logger import get_logger


class LockState(Enum):
    """Lock state enumeration."""

    UNLOCKED = "unlocked"
    LOCKED = "locked"


Subscriber = Callable[[bool], None]


class LockContext:
    """Read-only broadcast of the current lock flag.

    Observers receive the latest snapshot on subscription and after every
    transition. Only the owning controller publishes.
    """

    def __init__(self):
        self._locked = False
        self._subscribers: List[Subscriber] = []
        self.logger = get_logger()

    @property
    def locked(self) -> bool:
        """Latest published lock flag."""
        return self._locked

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register an observer. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        self._notify(callback, self._locked)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, locked: bool) -> None:
        if locked == self._locked:
            return
        self._locked = locked
        # Copy so observers may unsubscribe while being notified
        for callback in list(self._subscribers):
            self._notify(callback, locked)

    def _notify(self, callback: Subscriber, locked: bool) -> None:
        try:
            callback(locked)
        except Exception as e:
            self.logger.error(f"Error in lock state subscriber: {e}")
