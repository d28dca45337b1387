from typing import Any, Awaitable, Callable

import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger


class PeriodicJobRunner:
    """Run an async job every `interval` seconds inside the app's task group."""

    def __init__(
        self,
        *,
        name: str,
        job: Callable[[], Awaitable[Any]],
        interval: float,
        initial_delay: float = 0.0,
    ) -> None:
        self.name = name
        self.job = job
        self.interval = interval
        self.initial_delay = initial_delay

    async def start(self, *, task_group: TaskGroup) -> None:
        if self.interval <= 0:
            Logger.base.info(f'⏸️ [Scheduler] {self.name} disabled (interval={self.interval})')
            return
        task_group.start_soon(self._run_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'⏰ [Scheduler] {self.name} started, every {self.interval}s')

    async def _run_loop(self) -> None:
        if self.initial_delay > 0:
            await anyio.sleep(self.initial_delay)

        while True:
            try:
                await self.job()
            except Exception as e:
                # Next tick retries
                Logger.base.error(f'❌ [Scheduler] {self.name} failed: {e}')

            await anyio.sleep(self.interval)
