"""Lock overlay view model."""

from typing import Callable, Optional, Protocol

from idle_lock.core.state import LockContext
from idle_lock.utils.logger import get_logger

DEFAULT_TITLE = "The screen has been locked\nbecause it was idle for a while"
DEFAULT_BUTTON_TEXT = "Unlock"


class OverlayRenderer(Protocol):
    """Anything able to show and hide the blocking view."""

    def show(self, overlay: "LockOverlay") -> None: ...

    def hide(self) -> None: ...


class LockOverlay:
    """Blocking view shown while locked, with an unlock affordance.

    Holds no lock state of its own: visibility follows the context snapshot.
    """

    def __init__(
        self,
        context: LockContext,
        on_unlock: Callable[[], object],
        title: str = DEFAULT_TITLE,
        button_text: str = DEFAULT_BUTTON_TEXT,
    ):
        self.context = context
        self.title = title
        self.button_text = button_text
        self.logger = get_logger()

        self._on_unlock = on_unlock
        self._renderer: Optional[OverlayRenderer] = None
        self._visible = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def visible(self) -> bool:
        return self._visible

    def attach(self, renderer: Optional[OverlayRenderer] = None) -> None:
        """Start following the lock state, optionally drawing through a renderer."""
        self._renderer = renderer
        if self._unsubscribe is None:
            self._unsubscribe = self.context.subscribe(self._on_lock_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._visible and self._renderer:
            self._renderer.hide()
        self._visible = False
        self._renderer = None

    def press_unlock(self):
        """Handle a press on the unlock button."""
        if not self._visible:
            return None
        return self._on_unlock()

    def _on_lock_changed(self, locked: bool) -> None:
        if locked == self._visible:
            return
        self._visible = locked
        if not self._renderer:
            return
        try:
            if locked:
                self._renderer.show(self)
            else:
                self._renderer.hide()
        except Exception as e:
            self.logger.error(f"Error rendering lock overlay: {e}")
