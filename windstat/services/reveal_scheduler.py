"""Service for revealing a new window one slot at a time."""
import asyncio
import logging
from datetime import datetime
from typing import Optional

from windstat.models.snapshot import Renderer, Snapshot
from windstat.models.window import RevealState, ScaleState, Window

logger = logging.getLogger(__name__)

REVEAL_STEP_DELAY = 0.05  # seconds


class RevealScheduler:
    """Commits a target window into the displayed window, newest slot first.

    Each fetch cycle takes a new generation. A reveal loop checks its
    generation before every commit and stops silently once superseded, so the
    last target handed in always wins and no stale slot survives it.
    """

    def __init__(
        self,
        minutes: int,
        renderer: Renderer,
        step_delay: float = REVEAL_STEP_DELAY,
    ):
        self.minutes = minutes
        self.renderer = renderer
        self.step_delay = step_delay
        self.state = RevealState(displayed=Window.zeros(minutes), target=Window.zeros(minutes))
        self._generation = 0
        self._activated = False
        self._task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def displayed(self) -> Window:
        """Copy of the displayed window."""
        return self.state.displayed.copy()

    def next_generation(self) -> int:
        """Start a new generation; any in-flight reveal is superseded."""
        self._generation += 1
        return self._generation

    def abandon(self) -> None:
        """Stop the in-flight reveal without starting a new one."""
        self.next_generation()

    def handle(
        self,
        target: Window,
        scale: ScaleState,
        last_updated: datetime,
        generation: Optional[int] = None,
        no_data: bool = False,
    ) -> Optional[asyncio.Task]:
        """
        Start revealing a new target window.

        Args:
            target: Window of length `minutes`
            scale: Scale of the target window
            last_updated: Timestamp shown alongside the window
            generation: Generation of the fetch cycle that produced the target;
                a new generation is taken when omitted
            no_data: Flag snapshots as belonging to a no-data cycle

        Returns:
            The reveal task, or None when the target is stale
        """
        if len(target) != self.minutes:
            raise ValueError(f"target has {len(target)} slots, expected {self.minutes}")

        if generation is None:
            generation = self.next_generation()
        elif generation != self._generation:
            logger.debug("Dropping stale target of generation %d (current %d)",
                         generation, self._generation)
            return None

        self.state.target = target.copy()
        self.state.cursor = 0

        if not self._activated:
            self._activated = True
            self.state.displayed = Window.zeros(self.minutes)
            self._emit(scale, last_updated, generation, no_data)

        self._task = asyncio.get_running_loop().create_task(
            self._reveal(generation, scale, last_updated, no_data)
        )
        return self._task

    async def _reveal(
        self,
        generation: int,
        scale: ScaleState,
        last_updated: datetime,
        no_data: bool,
    ) -> None:
        target = self.state.target
        for k in range(self.minutes):
            if generation != self._generation:
                logger.debug("Reveal of generation %d superseded after %d slots", generation, k)
                return
            i = self.minutes - 1 - k
            self.state.displayed.slots[i] = target.slots[i]
            self.state.cursor = k + 1
            self._emit(scale, last_updated, generation, no_data)
            if k < self.minutes - 1:
                await asyncio.sleep(self.step_delay)

    def _emit(self, scale: ScaleState, last_updated: datetime, generation: int, no_data: bool) -> None:
        self.renderer.render(Snapshot(
            displayed=self.state.displayed.copy(),
            scale=scale,
            last_updated=last_updated,
            generation=generation,
            no_data=no_data,
        ))

    async def wait(self) -> None:
        """Wait until the latest reveal has finished or stopped."""
        if self._task is not None:
            await self._task

    async def close(self) -> None:
        """Abandon and cancel the in-flight reveal; nothing is emitted afterwards."""
        self.abandon()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
