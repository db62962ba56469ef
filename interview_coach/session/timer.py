from __future__ import annotations

import asyncio
import contextlib


def format_elapsed(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


class Timer:
    """Elapsed-seconds counter ticking once per interval while active."""

    def __init__(self, interval_s: float = 1.0):
        self._interval_s = interval_s
        self._elapsed = 0
        self._active = False
        self._task: asyncio.Task | None = None

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def active(self) -> bool:
        return self._active

    def tick(self) -> None:
        if self._active:
            self._elapsed += 1

    def start(self) -> None:
        self._active = True
        if self._task is not None and not self._task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the host drives tick() itself.
            return
        self._task = loop.create_task(self._run())

    def stop(self) -> None:
        self._active = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def reset(self) -> None:
        self._elapsed = 0

    def restart(self) -> None:
        self.stop()
        self.reset()
        self.start()

    async def _run(self) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            while self._active:
                await asyncio.sleep(self._interval_s)
                self.tick()

    def __repr__(self) -> str:
        return f"Timer(elapsed={format_elapsed(self._elapsed)}, active={self._active})"
