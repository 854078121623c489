"""Test doubles for the event loop and authentication gateway."""

import asyncio
from typing import List, Optional

from idle_lock.platforms.base import AuthenticationGateway, AuthResult


class ManualHandle:
    def __init__(self, clock: "ManualClock", when: float, callback):
        self.clock = clock
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Stands in for the event loop's call_later; time moves only on advance()."""

    def __init__(self):
        self.now = 0.0
        self.handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback) -> ManualHandle:
        handle = ManualHandle(self, round(self.now + delay, 6), callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = round(self.now + seconds, 6)
        while True:
            due = [h for h in self.live if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = handle.when
            self.handles.remove(handle)
            handle.callback()
        self.now = target


class FakeGateway(AuthenticationGateway):
    """Gateway whose challenges are resolved by the test."""

    def __init__(self, sensor: bool = True):
        self.sensor = sensor
        self.prompts: List[str] = []
        self.pending: Optional[asyncio.Future] = None

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def has_challenge(self) -> bool:
        return self.sensor

    async def challenge(self, prompt_message: str) -> AuthResult:
        self.prompts.append(prompt_message)
        self.pending = asyncio.get_running_loop().create_future()
        return await self.pending

    def resolve(self, result: AuthResult) -> None:
        self.pending.set_result(result)


class RaisingGateway(AuthenticationGateway):
    async def has_challenge(self) -> bool:
        return True

    async def challenge(self, prompt_message: str) -> AuthResult:
        raise RuntimeError("sensor exploded")


async def settle() -> None:
    """Let pending tasks run until they block again."""
    for _ in range(5):
        await asyncio.sleep(0)


class FakeWidget:
    """Mimics Tk's "all" bindings: one script per sequence, a line per handler."""

    def __init__(self):
        self.scripts = {}
        self.commands = {}
        self._next_id = 100

    def bind_all(self, sequence, func=None, add=None):
        if func is None:
            return "\n".join(self.scripts.get(sequence, []))
        if isinstance(func, str):
            self.scripts[sequence] = func.split("\n")
            return None
        funcid = f"{self._next_id}{getattr(func, '__name__', 'handler')}"
        self._next_id += 1
        self.commands[funcid] = func
        line = f'if {{"[{funcid} %# %b]" == "break"}} break'
        lines = self.scripts.get(sequence, []) if add else []
        self.scripts[sequence] = lines + [line]
        return funcid

    def unbind_all(self, sequence):
        self.scripts.pop(sequence, None)

    def deletecommand(self, name):
        self.commands.pop(name, None)

    def fire(self, sequence, event=None):
        for line in self.scripts.get(sequence, []):
            for funcid, handler in list(self.commands.items()):
                if f"[{funcid} " in line:
                    handler(event)


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def show(self, overlay):
        self.calls.append(("show", overlay.title))

    def hide(self):
        self.calls.append(("hide",))
