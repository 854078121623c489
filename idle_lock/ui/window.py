"""Tkinter rendering for the lock overlay.

The overlay covers the whole application window rather than the screen,
and input reaching it is still forwarded to the activity surface; the
controller ignores that activity while locked.
"""

import asyncio
import os
import sys
import tkinter as tk
import tkinter.font as tkfont
from typing import Any, Literal, Optional, Tuple

from idle_lock.core.overlay import LockOverlay
from idle_lock.core.provider import LockScreenProvider
from idle_lock.core.state import LockContext
from idle_lock.utils.logger import get_logger

FRAME_INTERVAL_SECONDS = 0.02


class OverlayConfig:
    """Configuration class for overlay appearance."""

    FONT_FAMILIES = {
        "primary": ["Noto Sans", "Liberation Sans", "DejaVu Sans", "Ubuntu", "Arial"],
        "fallback": ["TkDefaultFont"],
    }

    FONT_SIZES = {
        "title": 20,
        "button": 20,
    }

    COLORS = {
        "background": "#333333",
        "text_primary": "#ffffff",
        "button_bg": "#333333",
        "button_text": "#007aff",
    }

    @staticmethod
    def get_best_font(
        font_type: str, size: int, weight: Literal["normal", "bold"] = "normal"
    ) -> Tuple[str, int, str]:
        """Get the best available font for the given type."""
        families = OverlayConfig.FONT_FAMILIES.get(
            font_type, OverlayConfig.FONT_FAMILIES["primary"]
        )

        for family in families:
            try:
                test_font = tkfont.Font(family=family, size=size, weight=weight)
                if test_font.actual("family").lower() == family.lower():
                    return (family, size, weight)
            except tk.TclError:
                continue

        return (OverlayConfig.FONT_FAMILIES["fallback"][0], size, weight)


def has_display() -> bool:
    """Check for a graphical display (X11 or Wayland) or a non-Linux desktop."""
    if sys.platform in ("win32", "darwin"):
        return True
    return any(key in os.environ for key in ("DISPLAY", "WAYLAND_DISPLAY"))


class TkOverlayView:
    """Draws the lock overlay as a frame stacked above the window content."""

    def __init__(self, root: tk.Misc, config: Optional[OverlayConfig] = None):
        self.root = root
        self.config = config or OverlayConfig()
        self.logger = get_logger()
        self._frame: Optional[tk.Frame] = None

    def show(self, overlay: LockOverlay) -> None:
        if self._frame is not None:
            return

        colors = self.config.COLORS
        frame = tk.Frame(self.root, bg=colors["background"])
        frame.place(relx=0, rely=0, relwidth=1, relheight=1)
        frame.lift()

        center = tk.Frame(frame, bg=colors["background"])
        center.place(relx=0.5, rely=0.5, anchor="center")

        title_font = self.config.get_best_font(
            "primary", self.config.FONT_SIZES["title"]
        )
        button_font = self.config.get_best_font(
            "primary", self.config.FONT_SIZES["button"]
        )

        tk.Label(
            center,
            text=overlay.title,
            font=title_font,
            fg=colors["text_primary"],
            bg=colors["background"],
            justify="center",
            bd=0,
            highlightthickness=0,
        ).pack(pady=(0, 20))

        tk.Button(
            center,
            text=overlay.button_text,
            font=button_font,
            fg=colors["button_text"],
            bg=colors["button_bg"],
            activeforeground=colors["button_text"],
            activebackground=colors["button_bg"],
            command=overlay.press_unlock,
            cursor="hand2",
            relief="flat",
            bd=0,
            highlightthickness=0,
            padx=12,
            pady=12,
        ).pack()

        self._frame = frame
        self.logger.debug("Lock overlay shown")

    def hide(self) -> None:
        if self._frame is None:
            return
        try:
            self._frame.destroy()
        except tk.TclError as e:
            self.logger.debug(f"Error destroying overlay frame: {e}")
        self._frame = None
        self.logger.debug("Lock overlay hidden")


def provide_lock_context(widget: tk.Misc, context: LockContext) -> None:
    """Make a lock context visible to every descendant of ``widget``."""
    setattr(widget, "_idle_lock_context", context)


def find_lock_context(widget: Any) -> Optional[LockContext]:
    """Find the nearest lock context above ``widget``."""
    while widget is not None:
        context = getattr(widget, "_idle_lock_context", None)
        if context is not None:
            return context
        widget = getattr(widget, "master", None)
    return None


def use_is_locked(widget: Any) -> bool:
    """Lock flag for ``widget``; False outside any provider."""
    context = find_lock_context(widget)
    return context.locked if context is not None else False


async def run_tk(root: tk.Tk, provider: LockScreenProvider) -> None:
    """Drive the Tk window and the lock provider from one asyncio loop."""
    logger = get_logger()
    closed = asyncio.Event()

    root.protocol("WM_DELETE_WINDOW", closed.set)
    provide_lock_context(root, provider.context)
    provider.mount(root, TkOverlayView(root))

    try:
        while not closed.is_set():
            root.update()
            await asyncio.sleep(FRAME_INTERVAL_SECONDS)
    except tk.TclError as e:
        logger.debug(f"Tk window closed: {e}")
    finally:
        provider.unmount()
        try:
            root.destroy()
        except tk.TclError:
            pass
