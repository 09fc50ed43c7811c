# session/scheduler.py

import asyncio
from typing import Optional, Set

from ..errors import TransportError
from .state import ViewState


class PollScheduler:
    """
    Fires a reconciliation cycle immediately and then on a fixed period.

    Each cycle runs as its own task, so a slow fetch does not delay the next
    firing. Firings are skipped while a submission is in flight.
    """

    def __init__(self, state: ViewState, client, reconciler,
                 poll_interval: float = 0.3,
                 stop_when_finished: bool = False,
                 logger=None):
        self.state = state
        self.client = client
        self.reconciler = reconciler
        self.poll_interval = poll_interval
        self.stop_when_finished = stop_when_finished
        self.logger = logger
        self._cycles: Set[asyncio.Task] = set()
        self._stopped = asyncio.Event()

    def fire(self) -> Optional[asyncio.Task]:
        """Start one cycle unless a submission is in flight."""
        if self.state.submitting:
            if self.logger:
                self.logger.debug("Poll skipped: submission in flight")
            return None
        task = asyncio.create_task(self.cycle())
        self._cycles.add(task)
        task.add_done_callback(self._cycle_done)
        return task

    def _cycle_done(self, task: asyncio.Task) -> None:
        self._cycles.discard(task)
        if not task.cancelled() and task.exception() is not None and self.logger:
            self.logger.error(f"Poll cycle error: {task.exception()}")

    async def cycle(self) -> bool:
        """Fetch one snapshot and reconcile it. Returns True if the view was rebuilt."""
        try:
            snapshot = await self.client.fetch_state()
        except TransportError as e:
            # Dropped silently for the user; the next tick tries again
            if self.logger:
                self.logger.warning(f"Poll failed: {e}")
            return False

        if snapshot.program_finished and not self.state.program_finished and self.logger:
            self.logger.info("Remote program finished")
        self.state.program_finished = snapshot.program_finished
        rebuilt = self.reconciler.reconcile(self.state, snapshot.output)

        if self.stop_when_finished and snapshot.program_finished and self.state.request is None:
            self.stop()
        return rebuilt

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def run(self) -> None:
        """Poll until stopped. Runs indefinitely unless stop() is called."""
        if self.logger:
            self.logger.debug(f"Polling every {self.poll_interval}s")
        while not self._stopped.is_set():
            self.fire()
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass
        await self.drain()

    async def drain(self) -> None:
        """Wait for in-flight cycles to finish."""
        if self._cycles:
            await asyncio.gather(*self._cycles, return_exceptions=True)
