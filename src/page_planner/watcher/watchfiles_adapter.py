"""Content-directory watcher used by ``page-planner watch``.

The watcher reports every changed path; deciding which changes warrant a
rebuild is left to the callback.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from watchfiles import awatch

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[set[Path]], Awaitable[None]]


class ContentWatcher:
    """Run ``on_change`` with the batch of paths touched under ``content_dir``.

    Implements the ``FileWatcherPort`` protocol. A failing callback is logged
    and the watcher keeps waiting for the next batch.
    """

    def __init__(self, content_dir: str | Path, on_change: ChangeCallback) -> None:
        self.content_dir = Path(content_dir)
        self.on_change = on_change
        self._loop_task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def start(self) -> None:
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self._dispatch_changes())
            logger.debug("Watching %s", self.content_dir)

    async def stop(self) -> None:
        task, self._loop_task = self._loop_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("Stopped watching %s", self.content_dir)

    async def _dispatch_changes(self) -> None:
        async for batch in awatch(self.content_dir):
            changed = {Path(raw_path) for _, raw_path in batch}
            try:
                await self.on_change(changed)
            except Exception:
                logger.exception("Content change handler failed for %d path(s)", len(changed))
