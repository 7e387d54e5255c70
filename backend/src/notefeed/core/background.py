"""Fire-and-forget side effects dispatched after a write commits."""

import asyncio
import logging
from typing import Awaitable, Optional, Set

logger = logging.getLogger(__name__)


class SideEffectRunner:
    """Runs best-effort coroutines as background tasks.

    Failures are logged and never reach the caller that spawned them.
    A strong reference to each pending task is held until it finishes.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Awaitable, name: str) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        task.set_name(name)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Side effect '{task.get_name()}' was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Side effect '{task.get_name()}' failed: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait until every spawned side effect has finished."""
        while self._tasks:
            await asyncio.wait(set(self._tasks), timeout=timeout)
            if timeout is not None:
                break


_runner: Optional[SideEffectRunner] = None


def get_side_effect_runner() -> SideEffectRunner:
    global _runner
    if _runner is None:
        _runner = SideEffectRunner()
    return _runner
