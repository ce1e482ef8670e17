"""
Cancellation scope for view-bound async work.

A view hands a ``CancellationToken`` to everything it starts and cancels it
on teardown; each owner checks the token before touching shared state.
``TaskScope`` keeps the spawned tasks so teardown can cancel them all.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Coroutine, Optional

from hoopcoach.errors import AnalysisCancelled

logger = logging.getLogger("hoopcoach.cancellation")


class CancellationToken:
    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise AnalysisCancelled("operation cancelled")


class TaskScope:
    """Owns a set of asyncio tasks and a token; ``close`` cancels both."""

    def __init__(self, token: Optional[CancellationToken] = None):
        self.token = token or CancellationToken()
        self._tasks: set[asyncio.Task] = set()

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    def spawn(self, coro: Coroutine, name: Optional[str] = None) -> asyncio.Task:
        if self.closed:
            coro.close()
            raise AnalysisCancelled("scope already closed")
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        self.token.cancel()
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug("Cancelled %d pending task(s)", len(pending))
        self._tasks.clear()

    async def aclose(self) -> None:
        """Cancel and wait for the tasks to unwind."""
        tasks = [t for t in self._tasks if not t.done()]
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
