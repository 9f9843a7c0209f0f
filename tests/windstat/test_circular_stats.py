"""Tests for averaging primitives."""
import math
import pytest

from windstat.services.circular_stats import circular_mean, linear_mean, normalize_angle


def angular_distance(a: float, b: float) -> float:
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


class TestLinearMean:
    """Tests for linear_mean."""

    def test_mean_of_two_values(self):
        assert linear_mean([10.0, 14.0]) == 12.0

    def test_single_value(self):
        assert linear_mean([7.5]) == 7.5

    def test_empty_input_rejected(self):
        with pytest.raises(ValueError):
            linear_mean([])


class TestCircularMean:
    """Tests for circular_mean."""

    def test_wraparound_averages_to_north(self):
        """Averaging 350 and 10 must give 0, not 180."""
        result = circular_mean([350.0, 10.0])
        assert angular_distance(result, 0.0) < 1e-9
        assert 0.0 <= result < 360.0

    def test_same_side_angles(self):
        assert circular_mean([80.0, 100.0]) == pytest.approx(90.0)

    def test_result_in_range_for_western_angles(self):
        result = circular_mean([260.0, 280.0])
        assert result == pytest.approx(270.0)

    def test_single_angle(self):
        assert circular_mean([45.0]) == pytest.approx(45.0)

    def test_360_is_north(self):
        result = circular_mean([360.0])
        assert angular_distance(result, 0.0) < 1e-9
        assert result < 360.0

    def test_empty_input_rejected(self):
        with pytest.raises(ValueError):
            circular_mean([])


class TestNormalizeAngle:
    """Tests for normalize_angle."""

    def test_negative_angle(self):
        assert normalize_angle(-90.0) == 270.0

    def test_full_turn(self):
        assert normalize_angle(360.0) == 0.0

    def test_tiny_negative_never_reaches_360(self):
        result = normalize_angle(-1e-20)
        assert 0.0 <= result < 360.0

    def test_result_is_finite(self):
        assert math.isfinite(normalize_angle(725.0))
        assert normalize_angle(725.0) == pytest.approx(5.0)
