from __future__ import annotations

import asyncio
from typing import Any, Callable


class Debouncer:
    """Fire a callback once a quiet period has elapsed since the last call.

    Each :meth:`schedule` cancels the pending timer and starts a new one, so a
    burst of calls closer together than ``delay`` runs the callback once with
    whatever state is current when the timer finally fires. The callback runs
    synchronously on the loop; anything slow it starts must be its own task.
    """

    def __init__(self, delay: float) -> None:
        self._delay = delay
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], Any]) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(callback))

    async def _fire(self, callback: Callable[[], Any]) -> None:
        await asyncio.sleep(self._delay)
        callback()

    def cancel(self) -> bool:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def wait(self) -> None:
        """Block until the pending timer (if any) has fired or been cancelled."""

        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
