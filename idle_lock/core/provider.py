"""Idle lock provider wiring the controller to its surface and overlay."""

from typing import Any, Callable, Optional

from idle_lock.core.activity import ActivitySurface
from idle_lock.core.controller import (
    DEFAULT_PROMPT_MESSAGE,
    DEFAULT_TIMEOUT_MS,
    FallbackPolicy,
    LockController,
)
from idle_lock.core.overlay import (
    DEFAULT_BUTTON_TEXT,
    DEFAULT_TITLE,
    LockOverlay,
    OverlayRenderer,
)
from idle_lock.core.state import LockContext
from idle_lock.platforms.base import AuthenticationGateway
from idle_lock.utils.logger import get_logger


class LockScreenProvider:
    """Covers an application with a lock overlay after a period of inactivity.

    The provider must be mounted from inside a running event loop, either
    with ``mount()``/``unmount()`` or as a context manager. Descendants read
    the lock flag through ``context`` and never touch the controller.
    """

    def __init__(
        self,
        gateway: Optional[AuthenticationGateway] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        prompt_message: str = DEFAULT_PROMPT_MESSAGE,
        fallback_policy: FallbackPolicy = FallbackPolicy.UNLOCK,
        overlay_title: str = DEFAULT_TITLE,
        unlock_button_text: str = DEFAULT_BUTTON_TEXT,
        scheduler: Optional[Any] = None,
    ):
        if gateway is None:
            from idle_lock.platforms.factory import get_auth_gateway

            gateway = get_auth_gateway()

        self.logger = get_logger()
        self.controller = LockController(
            gateway,
            timeout_ms=timeout_ms,
            prompt_message=prompt_message,
            fallback_policy=fallback_policy,
            scheduler=scheduler,
        )
        self.surface = ActivitySurface(self.controller.on_activity)
        self.overlay = LockOverlay(
            self.controller.context,
            self.controller.request_unlock,
            title=overlay_title,
            button_text=unlock_button_text,
        )

    @property
    def context(self) -> LockContext:
        return self.controller.context

    def is_locked(self) -> bool:
        """Current lock flag as broadcast to descendants."""
        return self.context.locked

    def subscribe(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        return self.context.subscribe(callback)

    def mount(
        self, widget: Any = None, renderer: Optional[OverlayRenderer] = None
    ) -> None:
        """Mount the provider, optionally binding a widget and overlay renderer."""
        self.overlay.attach(renderer)
        if widget is not None:
            self.surface.bind(widget)
        self.controller.mount()

    def unmount(self) -> None:
        self.controller.unmount()
        self.surface.unbind()
        self.overlay.detach()

    def __enter__(self) -> "LockScreenProvider":
        self.mount()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unmount()
