"""Peak finding over the smoothed motion series.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections.abc import Sequence

from vert_estimator.core.types import Peak


def is_local_peak(series: Sequence[float], index: int, span: int = 2) -> bool:
    """Check that series[index] strictly exceeds every neighbor within span.

    Callers guarantee index - span >= 0 and index + span < len(series).
    """
    value = series[index]
    for offset in range(1, span + 1):
        if value <= series[index - offset] or value <= series[index + offset]:
            return False
    return True


def find_peaks(
    series: Sequence[float],
    threshold: float,
    edge_margin: int = 5,
    span: int = 2,
) -> list[Peak]:
    """Find local maxima above a threshold, ranked by value.

    Indices edge_margin .. n - edge_margin - 1 are scanned. Ties in value are
    ordered by ascending index.

    Args:
        series: Smoothed motion values
        threshold: Values must strictly exceed this
        edge_margin: Samples skipped at each end
        span: Neighbor distance for the strict local maximum test

    Returns:
        Peaks sorted by descending value
    """
    start = max(edge_margin, span)
    stop = len(series) - max(edge_margin, span)

    peaks = [
        Peak(index=i, value=float(series[i]))
        for i in range(start, stop)
        if series[i] > threshold and is_local_peak(series, i, span)
    ]

    peaks.sort(key=lambda p: (-p.value, p.index))
    return peaks
