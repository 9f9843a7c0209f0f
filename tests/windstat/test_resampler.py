"""Tests for the minute resampler."""
from datetime import datetime, timezone
import random
import pytest

from windstat.models.sample import AggregatedPoint, AngularPoint, Sample
from windstat.services.resampler import Resampler

MINUTE = datetime(2024, 6, 21, 12, 30, tzinfo=timezone.utc)


def sample(second: int, value: float, minute: int = 30, series_id: str = "sensor.wind") -> Sample:
    return Sample(
        series_id=series_id,
        timestamp=datetime(2024, 6, 21, 12, minute, second, tzinfo=timezone.utc),
        value=value,
    )


class TestResampler:
    """Tests for Resampler."""

    def test_linear_mean_per_minute(self):
        """Samples at 0s and 30s of one minute average to 12."""
        result = Resampler.for_speed().resample([sample(0, 10.0), sample(30, 14.0)])

        assert list(result.keys()) == [MINUTE]
        assert result[MINUTE] == AggregatedPoint(minute=MINUTE, value=12.0)

    def test_separate_buckets(self):
        samples = [sample(10, 5.0, minute=29), sample(50, 7.0, minute=29), sample(5, 20.0)]
        result = Resampler.for_speed().resample(samples)

        earlier = datetime(2024, 6, 21, 12, 29, tzinfo=timezone.utc)
        assert result[earlier].value == 6.0
        assert result[MINUTE].value == 20.0

    def test_missing_minutes_are_absent(self):
        samples = [sample(0, 5.0, minute=25), sample(0, 7.0, minute=30)]
        result = Resampler.for_speed().resample(samples)
        assert len(result) == 2
        assert datetime(2024, 6, 21, 12, 27, tzinfo=timezone.utc) not in result

    def test_order_independent(self):
        """Shuffled input gives an identical result."""
        samples = [sample(s, 3.1 * s + 0.7, minute=28 + s % 3) for s in range(60)]
        shuffled = list(samples)
        random.Random(42).shuffle(shuffled)

        resampler = Resampler.for_speed()
        assert resampler.resample(samples) == resampler.resample(shuffled)

    def test_non_finite_values_dropped(self):
        samples = [sample(0, float("nan")), sample(10, float("inf")), sample(20, 9.0)]
        result = Resampler.for_speed().resample(samples)
        assert result[MINUTE].value == 9.0

    def test_bucket_with_only_invalid_samples_absent(self):
        samples = [sample(0, float("nan")), sample(10, -4.0)]
        assert Resampler.for_speed().resample(samples) == {}

    def test_negative_speed_dropped(self):
        result = Resampler.for_speed().resample([sample(0, -3.0), sample(5, 6.0)])
        assert result[MINUTE].value == 6.0

    def test_direction_uses_circular_mean(self):
        samples = [sample(0, 350.0, series_id="sensor.dir"), sample(30, 10.0, series_id="sensor.dir")]
        result = Resampler.for_direction().resample(samples)

        point = result[MINUTE]
        assert isinstance(point, AngularPoint)
        assert min(point.angle_deg, 360 - point.angle_deg) == pytest.approx(0.0, abs=1e-9)

    def test_direction_out_of_range_dropped(self):
        samples = [sample(0, 400.0, series_id="sensor.dir"), sample(5, 90.0, series_id="sensor.dir")]
        result = Resampler.for_direction().resample(samples)
        assert result[MINUTE].angle_deg == pytest.approx(90.0)

    def test_naive_timestamps_taken_as_utc(self):
        naive = Sample(series_id="sensor.wind", timestamp=datetime(2024, 6, 21, 12, 30, 15), value=4.0)
        result = Resampler.for_speed().resample([naive])
        assert MINUTE in result

    def test_other_timezone_bucketed_in_utc(self):
        from datetime import timedelta
        cest = timezone(timedelta(hours=2))
        local = Sample(
            series_id="sensor.wind",
            timestamp=datetime(2024, 6, 21, 14, 30, 45, tzinfo=cest),
            value=8.0,
        )
        result = Resampler.for_speed().resample([local])
        assert result[MINUTE].value == 8.0

    def test_empty_input(self):
        assert Resampler.for_speed().resample([]) == {}
