"""
Cooperative Scheduler - Runs queued jobs one per tick.

Single-threaded and cooperative:
- Each tick pops at most one job and runs it to completion
- Between ticks the loop suspends for a fixed interval
- pause() stops future ticks; it never interrupts a running job
- resume() restarts the tick loop

The timer primitive is injectable so tests can single-step with tick()
or drive run() with a fake sleep.
"""

from __future__ import annotations
from collections import deque
from typing import Awaitable, Callable
import asyncio
import logging

logger = logging.getLogger(__name__)

Job = Callable[[], object]
Sleep = Callable[[float], Awaitable[object]]


class CooperativeScheduler:
    """
    FIFO job queue plus a pause/resume flag.

    Usage:
        scheduler = CooperativeScheduler(interval=0.1)
        scheduler.schedule(lambda: print("hello"))

        # Starts paused; inside an event loop resume() also starts ticking
        scheduler.resume()

        # Or synchronously, one tick at a time
        scheduler.tick()
    """

    def __init__(
        self,
        interval: float = 0.1,
        sleep: Sleep | None = None,
        running: bool = False,
    ):
        self.interval = interval
        self._sleep = sleep or asyncio.sleep
        self._jobs: deque[Job] = deque()
        self._running = running
        self._task: asyncio.Task | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        """True once resumed, until paused or a job fails."""
        return self._running

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def schedule(self, job: Job):
        """Queue a job behind every job already scheduled."""
        self._jobs.append(job)

    def tick(self) -> bool:
        """
        Run at most one job.

        Returns True if a job ran. A paused scheduler runs nothing.
        """
        if not self._running:
            return False

        self.ticks += 1
        if not self._jobs:
            return False

        job = self._jobs.popleft()
        job()
        return True

    def pause(self):
        self._running = False
        logger.debug("Scheduler paused with %d pending jobs", len(self._jobs))

    def resume(self) -> asyncio.Task | None:
        """
        Set the running flag and restart the tick loop.

        When called inside an event loop, a new run() task is started unless
        the previous one is still alive. Outside an event loop only the flag
        changes; drive the scheduler with tick() or run().
        """
        self._running = True
        logger.debug("Scheduler resumed with %d pending jobs", len(self._jobs))

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None

        if self._task is None or self._task.done():
            self._task = loop.create_task(self.run())
        return self._task

    def _guarded_tick(self) -> bool:
        try:
            return self.tick()
        except Exception:
            self._running = False
            logger.exception("Scheduled job failed; scheduler stopped")
            raise

    async def run(self, max_ticks: int | None = None):
        """
        Tick until paused.

        Only resume() sets the running flag, so a paused scheduler returns
        at once. A failing job stops the scheduler and its error propagates.
        max_ticks bounds the loop for callers that need it to end by itself.
        """
        ticks = 0
        while self._running:
            self._guarded_tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            await self._sleep(self.interval)

    async def run_until_idle(self):
        """Tick until the queue is empty or the scheduler is paused."""
        while self._running and self._jobs:
            self._guarded_tick()
            await self._sleep(self.interval)
