"""Service for assembling the fixed-length minute window."""
from datetime import datetime, timedelta
from typing import Mapping, Tuple

from windstat.models.sample import AggregatedPoint, AngularPoint, minute_key
from windstat.models.window import Window, WindowSlot
from windstat.services.circular_stats import normalize_angle

MAX_SPEED = 60.0


class WindowBuilder:
    """Builds a window of exactly `minutes` slots ending at a reference minute.

    Missing minutes are filled, never omitted:
    - wind missing -> 0
    - gust missing -> the wind value of the same minute
    - direction missing -> 0
    """

    def __init__(self, minutes: int, max_speed: float = MAX_SPEED):
        if minutes <= 0:
            raise ValueError("minutes must be positive")
        self.minutes = minutes
        self.max_speed = max_speed

    def _clamp_speed(self, value: float) -> float:
        return min(max(value, 0.0), self.max_speed)

    def build(
        self,
        wind: Mapping[datetime, AggregatedPoint],
        gust: Mapping[datetime, AggregatedPoint],
        direction: Mapping[datetime, AngularPoint],
        now: datetime,
    ) -> Tuple[Window, float]:
        """
        Build the window ending at `now`.

        Args:
            wind: Per-minute wind averages
            gust: Per-minute gust averages
            direction: Per-minute direction averages
            now: Reference end time; truncated to the minute

        Returns:
            (window, max_gust) where max_gust is the largest clamped gust
        """
        end = minute_key(now)
        slots = []
        max_gust = 0.0

        for i in range(self.minutes - 1, -1, -1):
            key = end - timedelta(minutes=i)

            wind_point = wind.get(key)
            wind_value = wind_point.value if wind_point is not None else 0.0

            gust_point = gust.get(key)
            gust_value = gust_point.value if gust_point is not None else wind_value

            dir_point = direction.get(key)
            dir_value = normalize_angle(dir_point.angle_deg) if dir_point is not None else 0.0

            wind_value = self._clamp_speed(wind_value)
            gust_value = self._clamp_speed(gust_value)
            max_gust = max(max_gust, gust_value)

            slots.append(WindowSlot(wind=wind_value, gust=gust_value, direction=dir_value))

        return Window(slots=slots), max_gust
