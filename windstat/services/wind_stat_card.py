"""Service wiring the fetch cycle of one wind stat card."""
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Sequence

from windstat.errors import FetchFailure
from windstat.models.sample import Sample, minute_key
from windstat.models.snapshot import Renderer
from windstat.models.window import Window
from windstat.schemas.card import CardConfig
from windstat.services.refresh_scheduler import RefreshScheduler, utc_now
from windstat.services.resampler import Resampler
from windstat.services.reveal_scheduler import REVEAL_STEP_DELAY, RevealScheduler
from windstat.services.scale_computer import GRID_STEP, ScaleComputer
from windstat.services.window_builder import MAX_SPEED, WindowBuilder

logger = logging.getLogger(__name__)

NO_DATA = "no_data"
FETCH_FAILED = "fetch_failed"


class WindStatCard:
    """One card: fetch -> resample -> window -> scale -> reveal, every minute.

    The history source only needs an async
    `fetch_history(series_ids, start, end) -> {series_id: [Sample]}`.
    """

    def __init__(
        self,
        config: CardConfig,
        source,
        renderer: Renderer,
        clock: Callable[[], datetime] = utc_now,
        max_speed: float = MAX_SPEED,
        grid_step: float = GRID_STEP,
        reveal_step_delay: float = REVEAL_STEP_DELAY,
    ):
        self.config = config
        self.source = source
        self.renderer = renderer
        self.clock = clock

        self.speed_resampler = Resampler.for_speed()
        self.direction_resampler = Resampler.for_direction()
        self.window_builder = WindowBuilder(config.minutes, max_speed=max_speed)
        self.scale_computer = ScaleComputer(
            autoscale=config.autoscale,
            multiplier=config.multiplier,
            y_max=config.graph_height_units,
            grid_step=grid_step,
        )
        self.reveal = RevealScheduler(config.minutes, renderer, step_delay=reveal_step_delay)
        self.scheduler = RefreshScheduler(self.run_cycle, clock=clock)

    def fetch_range(self, now: datetime):
        """Start and end of the history query covering the window ending at now."""
        start = minute_key(now) - timedelta(minutes=self.config.minutes - 1)
        return start, now

    async def run_cycle(self) -> None:
        """Perform one fetch cycle."""
        generation = self.reveal.next_generation()
        now = self.clock()
        start, end = self.fetch_range(now)

        try:
            history = await self.source.fetch_history(self.config.series_ids, start, end)
        except Exception as e:
            # Source errors stay inside this cycle; the next minute retries
            logger.warning(
                "Fetch failed for %s: %s", ", ".join(self.config.series_ids), e,
                exc_info=not isinstance(e, FetchFailure),
            )
            if generation == self.reveal.generation:
                self.renderer.render_no_data(now, FETCH_FAILED)
            return

        if generation != self.reveal.generation:
            logger.debug("Discarding fetch of superseded generation %d", generation)
            return

        wind_samples = self._samples(history, self.config.wind_series_id)
        gust_samples = self._samples(history, self.config.gust_series_id)
        dir_samples = self._samples(history, self.config.direction_series_id)

        no_data = not (wind_samples or gust_samples or dir_samples)
        if no_data:
            logger.info("No samples in range for %s", ", ".join(self.config.series_ids))
            self.renderer.render_no_data(now, NO_DATA)

        window, max_gust = self.window_builder.build(
            self.speed_resampler.resample(wind_samples),
            self.speed_resampler.resample(gust_samples),
            self.direction_resampler.resample(dir_samples),
            now,
        )
        scale = self.scale_computer.compute(max_gust)
        logger.debug("Cycle %d: %d slots, max gust %.1f", generation, len(window), max_gust)

        self.reveal.handle(window, scale, now, generation=generation, no_data=no_data)

    @staticmethod
    def _samples(history: Dict[str, List[Sample]], series_id: str) -> Sequence[Sample]:
        return history.get(series_id) or []

    def attach(self) -> None:
        """Start refreshing: one cycle now, then one per minute boundary."""
        logger.info("Attaching card for %s", ", ".join(self.config.series_ids))
        self.scheduler.attach()

    async def detach(self) -> None:
        """Stop refreshing and abandon any in-flight reveal."""
        await self.scheduler.detach()
        await self.reveal.close()
        logger.info("Detached card for %s", ", ".join(self.config.series_ids))

    @property
    def displayed(self) -> Window:
        """Copy of the window currently shown."""
        return self.reveal.displayed
