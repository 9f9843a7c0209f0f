"""Service for grid levels and bar heights."""
import math

from windstat.models.window import BarHeights, ScaleState, WindowSlot

GRID_STEP = 5.0


class ScaleComputer:
    """Derives the graph scale from the window's maximum gust.

    With autoscale, heights are fractions of max(max_gust, 1). Without it,
    heights are literal units: value * multiplier.
    """

    def __init__(
        self,
        autoscale: bool = True,
        multiplier: float = 1.0,
        y_max: float = 100.0,
        grid_step: float = GRID_STEP,
    ):
        """
        Initialize scale computer.

        Args:
            autoscale: Normalize heights by the observed maximum gust
            multiplier: Units per knot in fixed-scale mode
            y_max: Axis ceiling in units (graph height)
            grid_step: Knots between grid lines
        """
        if grid_step <= 0:
            raise ValueError("grid_step must be positive")
        self.autoscale = autoscale
        self.multiplier = multiplier
        self.y_max = y_max
        self.grid_step = grid_step

    def compute(self, max_gust: float) -> ScaleState:
        """Compute grid levels for a window whose largest gust is max_gust."""
        if self.autoscale:
            scale = max(max_gust, 1.0)
            top = math.floor(scale / self.grid_step) * self.grid_step
            labels = self._levels_up_to(top)
            levels = [label / scale for label in labels]
        else:
            scale = 1.0
            top = math.floor(self.y_max / self.multiplier / self.grid_step) * self.grid_step
            labels = [label for label in self._levels_up_to(top)
                      if label * self.multiplier <= self.y_max]
            levels = [label * self.multiplier for label in labels]

        return ScaleState(
            max_gust=max_gust,
            grid_levels=levels,
            grid_labels=labels,
            autoscale=self.autoscale,
            scale=scale,
            multiplier=self.multiplier,
        )

    def _levels_up_to(self, top: float) -> list:
        count = int(round(top / self.grid_step))
        return [self.grid_step * k for k in range(1, count + 1)]

    @staticmethod
    def height(value: float, scale: ScaleState) -> float:
        """Height of a value: a fraction of the scale, or units in fixed mode."""
        if scale.autoscale:
            return value / scale.scale
        return value * scale.multiplier

    @classmethod
    def bar_heights(cls, slot: WindowSlot, scale: ScaleState) -> BarHeights:
        """Heights of one slot; gust is rendered as its excess above wind."""
        excess = max(slot.gust - slot.wind, 0.0)
        return BarHeights(
            wind_height=cls.height(slot.wind, scale),
            gust_height=cls.height(excess, scale),
        )
