"""Forward raw interaction events to the lock controller."""

from typing import Any, Callable, List, Tuple

from idle_lock.utils.logger import get_logger

# Tk event sequences treated as interaction start, move and end
ACTIVITY_SEQUENCES = [
    "<ButtonPress>",
    "<Motion>",
    "<ButtonRelease>",
    "<KeyPress>",
    "<KeyRelease>",
    "<MouseWheel>",
]


class ActivitySurface:
    """Passive shim turning every interaction into one activity signal."""

    def __init__(self, on_activity: Callable[[], None]):
        self._on_activity = on_activity
        self._bindings: List[Tuple[Any, str, str]] = []
        self.logger = get_logger()

    def forward(self, event: Any = None) -> None:
        """Forward one interaction event, whatever its kind."""
        self._on_activity()

    def bind(self, widget: Any) -> None:
        """Receive interaction events from everywhere in the widget's application."""
        for sequence in ACTIVITY_SEQUENCES:
            funcid = widget.bind_all(sequence, self.forward, add="+")
            self._bindings.append((widget, sequence, funcid))
        self.logger.debug(f"Activity surface bound to {widget}")

    def unbind(self) -> None:
        """Remove the handlers added by ``bind``, leaving other bindings intact."""
        for widget, sequence, funcid in self._bindings:
            try:
                _remove_binding(widget, sequence, funcid)
            except Exception as e:
                self.logger.debug(f"Error unbinding {sequence}: {e}")
        self._bindings.clear()


def _remove_binding(widget: Any, sequence: str, funcid: str) -> None:
    # The "all" binding is one Tcl script with a line per handler
    script = widget.bind_all(sequence) or ""
    marker = f"[{funcid} "
    kept = [line for line in script.split("\n") if line.strip() and marker not in line]
    if kept:
        widget.bind_all(sequence, "\n".join(kept))
    else:
        widget.unbind_all(sequence)
    widget.deletecommand(funcid)
