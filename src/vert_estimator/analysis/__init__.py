"""Pure analysis logic: motion signal, peak selection, and height calculation.

This module contains NO I/O operations and NO OpenCV imports.
All functions operate on typed dataclasses and return results.
"""

from vert_estimator.analysis.calculator import (
    HeightCalculator,
    calculate_jump_height,
    classify_performance,
)
from vert_estimator.analysis.peaks import find_peaks
from vert_estimator.analysis.selection import fallback_event, select_jump_event
from vert_estimator.analysis.signal import combine_region_motion, compute_statistics, smooth

__all__ = [
    "HeightCalculator",
    "calculate_jump_height",
    "classify_performance",
    "find_peaks",
    "fallback_event",
    "select_jump_event",
    "combine_region_motion",
    "compute_statistics",
    "smooth",
]
