"""Motion signal aggregation, smoothing and thresholding.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np

from vert_estimator.core.types import SignalStatistics


def combine_region_motion(values: Mapping[str, float]) -> float:
    """Sum per-region motion values with equal weight."""
    return float(sum(values.values()))


def smooth(series: Sequence[float], half_window: int = 5) -> list[float]:
    """Centered moving average with a window that shrinks at the edges.

    smoothed[i] = mean(series[max(0, i - w) : min(n - 1, i + w) + 1])

    Args:
        series: Raw values
        half_window: Samples on each side of the center

    Returns:
        Smoothed values, same length as the input
    """
    if half_window < 0:
        raise ValueError("half_window must be non-negative")

    values = np.asarray(series, dtype=np.float64)
    n = len(values)
    if n == 0:
        return []

    cumulative = np.concatenate(([0.0], np.cumsum(values)))
    idx = np.arange(n)
    lo = np.maximum(0, idx - half_window)
    hi = np.minimum(n - 1, idx + half_window)

    sums = cumulative[hi + 1] - cumulative[lo]
    counts = hi - lo + 1
    smoothed = sums / counts

    # Cumulative sums drift by a few ulps; keep each value inside its window range
    for i in range(n):
        window = values[lo[i] : hi[i] + 1]
        smoothed[i] = min(max(smoothed[i], window.min()), window.max())

    return smoothed.tolist()


def compute_statistics(series: Sequence[float], multiplier: float = 2.5) -> SignalStatistics:
    """Mean, population standard deviation and detection threshold.

    Args:
        series: Smoothed motion values (must be non-empty)
        multiplier: Standard deviations above the mean for the threshold

    Returns:
        SignalStatistics with threshold = mean + multiplier * std
    """
    if len(series) == 0:
        raise ValueError("Cannot compute statistics of an empty series")

    values = np.asarray(series, dtype=np.float64)
    mean = float(np.mean(values))
    std = float(np.std(values))

    return SignalStatistics(mean=mean, std=std, threshold=mean + multiplier * std)
