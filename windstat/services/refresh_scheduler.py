"""Service for running the fetch cycle on every wall-clock minute."""
import asyncio
import enum
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class ScheduleState(enum.Enum):
    """Lifecycle of a RefreshScheduler."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    FETCHING = "fetching"
    DETACHED = "detached"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seconds_until_next_minute(now: datetime) -> float:
    """Delay from `now` to the next minute boundary, in (0, 60]."""
    return 60.0 - (now.second + now.microsecond / 1_000_000)


class RefreshScheduler:
    """Runs a fetch cycle on attach and then at every minute boundary.

    Cycles run as their own tasks so a slow fetch never delays the timer; the
    delay is recomputed from the clock before every cycle to absorb drift.
    A failing cycle is logged and the schedule continues.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[None]],
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize scheduler.

        Args:
            cycle: Coroutine function performing one fetch cycle
            clock: Source of the current time
            sleep: Coroutine function used to wait for the next boundary
        """
        self.cycle = cycle
        self.clock = clock
        self.sleep = sleep
        self.state = ScheduleState.IDLE
        self._timer: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()

    @property
    def attached(self) -> bool:
        return self._timer is not None

    def attach(self) -> None:
        """Run one cycle immediately and arm the minute timer."""
        if self.state == ScheduleState.DETACHED:
            raise RuntimeError("RefreshScheduler cannot be re-attached after detach")
        if self._timer is not None:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            delay = seconds_until_next_minute(self.clock())
            self._start_cycle()
            await self.sleep(delay)

    def _start_cycle(self) -> None:
        self.state = ScheduleState.FETCHING
        task = asyncio.get_running_loop().create_task(self.cycle())
        self._cycles.add(task)
        task.add_done_callback(self._cycle_done)

    def _cycle_done(self, task: asyncio.Task) -> None:
        self._cycles.discard(task)
        if self.state == ScheduleState.DETACHED:
            return
        if not task.cancelled() and task.exception() is not None:
            logger.error("Fetch cycle failed", exc_info=task.exception())
        if not self._cycles:
            self.state = ScheduleState.SCHEDULED

    async def detach(self) -> None:
        """Cancel the timer and every in-flight cycle."""
        self.state = ScheduleState.DETACHED
        tasks = list(self._cycles)
        if self._timer is not None:
            tasks.append(self._timer)
        self._timer = None
        self._cycles.clear()

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
