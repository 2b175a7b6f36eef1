"""One-shot background refresh started with the service."""

from __future__ import annotations

import asyncio

from .loader import SnapshotLoader
from .logging import get_logger

logger = get_logger(__name__)


class BackgroundRefresh:
    """Loads the remote sheets once, shortly after startup.

    The first responses are served from the demo snapshot while this runs.
    There is no retry; ``POST /refresh`` is the way to try again.
    """

    def __init__(self, loader: SnapshotLoader, delay: float = 0.5) -> None:
        self.loader = loader
        self.delay = delay
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        if self._task:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("background_refresh_scheduled", delay=self.delay)

    async def stop(self) -> None:
        if not self._task:
            return
        if not self._task.done():
            self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("background_refresh_stopped")

    async def wait(self) -> None:
        if self._task:
            await asyncio.shield(self._task)

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        await self.loader.refresh()
