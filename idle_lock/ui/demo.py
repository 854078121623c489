"""Demo content rendered inside the lock provider."""

import tkinter as tk

from idle_lock.ui.window import find_lock_context, use_is_locked


class CounterView:
    """Counter with a button; the count is masked while locked."""

    def __init__(self, parent: tk.Misc):
        self.count = 0
        self.frame = tk.Frame(parent, bg="#ffffff")
        self.frame.pack(fill="both", expand=True)

        self.label = tk.Label(
            self.frame, text="0", font=("TkDefaultFont", 48), bg="#ffffff"
        )
        self.label.pack(pady=(80, 20))
        tk.Button(self.frame, text="Press", command=self.count_up).pack()

        context = find_lock_context(parent)
        if context is not None:
            context.subscribe(self._render)

    def count_up(self) -> None:
        self.count += 1
        self._render(use_is_locked(self.frame))

    def _render(self, locked: bool) -> None:
        self.label.config(text="*" if locked else str(self.count))
