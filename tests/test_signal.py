"""Tests for motion signal aggregation, smoothing and statistics."""

from __future__ import annotations

import random

import pytest

from vert_estimator.analysis.signal import combine_region_motion, compute_statistics, smooth


class TestCombineRegionMotion:
    """Tests for summing region values."""

    def test_sums_regions_equally(self) -> None:
        """Each region contributes its value unweighted."""
        assert combine_region_motion({"feet": 1.5, "body": 2.5}) == 4.0

    def test_no_regions_is_zero(self) -> None:
        """An empty mapping yields zero motion."""
        assert combine_region_motion({}) == 0.0


class TestSmooth:
    """Tests for the centered moving average."""

    def test_preserves_length(self) -> None:
        """Output has the same length as the input."""
        series = [float(i % 7) for i in range(50)]
        assert len(smooth(series, 5)) == 50

    def test_window_shrinks_at_edges(self) -> None:
        """Boundary samples average over fewer points."""
        result = smooth([1.0, 2.0, 3.0, 4.0, 5.0], half_window=1)
        assert result == pytest.approx([1.5, 2.0, 3.0, 4.0, 4.5])

    def test_constant_series_is_unchanged(self) -> None:
        """A constant input maps to itself."""
        series = [1.1] * 30
        assert smooth(series, 5) == series

    def test_values_bounded_by_window(self) -> None:
        """Every output lies between the min and max of its window."""
        rng = random.Random(7)
        series = [rng.uniform(0, 50) for _ in range(80)]
        result = smooth(series, 5)

        for i, value in enumerate(result):
            window = series[max(0, i - 5) : min(len(series) - 1, i + 5) + 1]
            assert min(window) <= value <= max(window)

    def test_spike_is_not_a_fixed_point(self) -> None:
        """Smoothing twice keeps spreading a spike."""
        series = [0.0] * 30
        series[15] = 11.0
        once = smooth(series, 5)
        twice = smooth(once, 5)

        assert once[15] == pytest.approx(1.0)
        assert twice != once

    def test_empty_series(self) -> None:
        """Empty input gives empty output."""
        assert smooth([], 5) == []

    def test_negative_window_rejected(self) -> None:
        """Half window must be non-negative."""
        with pytest.raises(ValueError):
            smooth([1.0, 2.0], -1)


class TestComputeStatistics:
    """Tests for mean, standard deviation and threshold."""

    def test_population_standard_deviation(self) -> None:
        """Standard deviation divides by N, not N - 1."""
        stats = compute_statistics([1.0, 2.0, 3.0, 4.0], multiplier=2.5)

        assert stats.mean == pytest.approx(2.5)
        assert stats.std == pytest.approx(1.25**0.5)
        assert stats.threshold == pytest.approx(2.5 + 2.5 * 1.25**0.5)

    def test_flat_series_threshold_equals_mean(self) -> None:
        """Zero spread puts the threshold at the mean."""
        stats = compute_statistics([3.0] * 10)
        assert stats.std == 0.0
        assert stats.threshold == 3.0

    def test_empty_series_rejected(self) -> None:
        """Statistics are undefined for an empty series."""
        with pytest.raises(ValueError):
            compute_statistics([])
