"""Cancel-and-resubmit debouncing on the running asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs an async callback once input has been quiet for `delay` seconds.

    Every schedule() cancels the pending run and starts a fresh timer, so
    only the latest request ever executes.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[object]]):
        self._delay = delay
        self._callback = callback
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self) -> None:
        """(Re)start the timer. Must be called from inside a running loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self) -> None:
        """Wait until no run is pending, including runs scheduled while waiting."""
        while self.pending:
            task = self._task
            await asyncio.wait({task})

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        try:
            await self._callback()
        except Exception:
            logger.exception("Debounced callback failed")
