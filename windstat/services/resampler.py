"""Service for bucketing raw samples into per-minute averages."""
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional, Union
import numpy as np
import pandas as pd

from windstat.models.sample import AggregatedPoint, AngularPoint, Sample
from windstat.services.circular_stats import circular_mean, linear_mean

logger = logging.getLogger(__name__)


class Resampler:
    """Groups samples of one series by minute and averages each bucket.

    Buckets without a valid sample are left out of the result; that absence is
    how a missing minute is represented downstream.
    """

    def __init__(
        self,
        circular: bool = False,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
    ):
        """
        Initialize resampler.

        Args:
            circular: Average with the circular mean (direction series)
            min_value: Samples below this value are dropped
            max_value: Samples above this value are dropped
        """
        self.circular = circular
        self.min_value = min_value
        self.max_value = max_value

    @classmethod
    def for_speed(cls) -> "Resampler":
        """Resampler for wind or gust speed; negative speeds are implausible."""
        return cls(circular=False, min_value=0.0)

    @classmethod
    def for_direction(cls) -> "Resampler":
        """Resampler for wind direction in degrees."""
        return cls(circular=True, min_value=0.0, max_value=360.0)

    def _to_frame(self, samples: Iterable[Sample]) -> pd.DataFrame:
        """Build a frame of valid samples sorted by (timestamp, value)."""
        rows = [(s.timestamp, s.value) for s in samples]
        df = pd.DataFrame(rows, columns=["timestamp", "value"])
        if df.empty:
            return df

        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
        df["value"] = pd.to_numeric(df["value"], errors="coerce")

        mask = np.isfinite(df["value"].to_numpy(dtype=np.float64))
        if self.min_value is not None:
            mask &= (df["value"] >= self.min_value).to_numpy()
        if self.max_value is not None:
            mask &= (df["value"] <= self.max_value).to_numpy()

        dropped = int((~mask).sum())
        if dropped:
            logger.debug("Dropped %d malformed or out-of-range samples", dropped)

        # Sorting makes the bucket means independent of fetch order
        return df[mask].sort_values(["timestamp", "value"], kind="mergesort")

    def resample(
        self, samples: Iterable[Sample],
    ) -> Dict[datetime, Union[AggregatedPoint, AngularPoint]]:
        """
        Average samples per minute.

        Args:
            samples: Samples of one series, in any order

        Returns:
            Dict mapping minute (UTC, truncated) to its aggregated point
        """
        df = self._to_frame(samples)
        if df.empty:
            return {}

        minutes = df["timestamp"].dt.floor("min")
        result: Dict[datetime, Union[AggregatedPoint, AngularPoint]] = {}
        for minute, group in df.groupby(minutes, sort=True):
            key = pd.Timestamp(minute).to_pydatetime()
            values = group["value"].to_numpy(dtype=np.float64)
            if self.circular:
                result[key] = AngularPoint(minute=key, angle_deg=circular_mean(values))
            else:
                result[key] = AggregatedPoint(minute=key, value=linear_mean(values))
        return result
