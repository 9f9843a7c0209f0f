"""Tests for the scale computer."""
import pytest

from windstat.models.window import WindowSlot
from windstat.services.scale_computer import ScaleComputer


class TestAutoscale:
    """Tests for autoscaled grid levels and heights."""

    def test_grid_levels_are_fractions_of_max_gust(self):
        scale = ScaleComputer(autoscale=True).compute(max_gust=12.0)

        assert scale.grid_labels == [5.0, 10.0]
        assert scale.grid_levels == pytest.approx([5.0 / 12.0, 10.0 / 12.0])
        assert scale.scale == 12.0

    def test_grid_level_on_exact_multiple(self):
        scale = ScaleComputer(autoscale=True).compute(max_gust=20.0)
        assert scale.grid_labels == [5.0, 10.0, 15.0, 20.0]
        assert scale.grid_levels[-1] == pytest.approx(1.0)

    def test_zero_gust_avoids_division_by_zero(self):
        scale = ScaleComputer(autoscale=True).compute(max_gust=0.0)

        assert scale.scale == 1.0
        assert scale.grid_levels == []
        heights = ScaleComputer.bar_heights(WindowSlot(0.0, 0.0, 0.0), scale)
        assert heights.wind_height == 0.0

    def test_bar_heights_normalized(self):
        scale = ScaleComputer(autoscale=True).compute(max_gust=12.0)
        heights = ScaleComputer.bar_heights(WindowSlot(wind=6.0, gust=12.0, direction=0.0), scale)

        assert heights.wind_height == pytest.approx(0.5)
        assert heights.gust_height == pytest.approx(0.5)


class TestFixedScale:
    """Tests for fixed-scale mode."""

    def test_grid_levels_in_units(self):
        scale = ScaleComputer(autoscale=False, multiplier=2.0, y_max=100.0).compute(max_gust=12.0)

        assert scale.grid_labels == [5.0 * k for k in range(1, 11)]
        assert scale.grid_levels == [10.0 * k for k in range(1, 11)]

    def test_bar_heights_not_normalized(self):
        scale = ScaleComputer(autoscale=False, multiplier=3.0).compute(max_gust=40.0)
        heights = ScaleComputer.bar_heights(WindowSlot(wind=10.0, gust=14.0, direction=0.0), scale)

        assert heights.wind_height == pytest.approx(30.0)
        assert heights.gust_height == pytest.approx(12.0)

    def test_grid_independent_of_data(self):
        computer = ScaleComputer(autoscale=False, multiplier=1.0, y_max=30.0)
        assert computer.compute(2.0).grid_levels == computer.compute(55.0).grid_levels


class TestGustExcess:
    """Gust is stacked as its excess above wind."""

    def test_gust_below_wind_clamps_to_zero(self):
        """gust=8, wind=10 renders a zero excess, not -2."""
        for computer in (ScaleComputer(autoscale=True), ScaleComputer(autoscale=False)):
            scale = computer.compute(max_gust=10.0)
            heights = ScaleComputer.bar_heights(WindowSlot(wind=10.0, gust=8.0, direction=0.0), scale)
            assert heights.gust_height == 0.0

    def test_invalid_grid_step_rejected(self):
        with pytest.raises(ValueError):
            ScaleComputer(grid_step=0)
