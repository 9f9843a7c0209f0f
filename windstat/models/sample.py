"""Raw samples and per-minute aggregates."""
from datetime import datetime, timezone
from attrs import frozen


@frozen
class Sample:
    """One timestamped reading of a series."""

    series_id: str
    timestamp: datetime  # tz-aware
    value: float  # NaN when the source state was not numeric


@frozen
class AggregatedPoint:
    """Arithmetic mean of a linear series (speed, gust) over one minute."""

    minute: datetime
    value: float


@frozen
class AngularPoint:
    """Circular mean of the direction series over one minute."""

    minute: datetime
    angle_deg: float


def minute_key(timestamp: datetime) -> datetime:
    """Truncate a timestamp to minute resolution (naive timestamps are taken as UTC)."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).replace(second=0, microsecond=0)
