"""Takeoff/landing selection from ranked peaks, with fallback.

This module is pure logic with NO I/O and NO OpenCV imports.

Transitions:
    fewer than 2 peaks                     -> NO_PEAKS (fallback pair)
    fewer than 2 peaks in relevant window  -> INSUFFICIENT_RELEVANT_PEAKS (fallback pair)
    otherwise                              -> RESOLVED (two strongest relevant peaks)
"""

from __future__ import annotations

from collections.abc import Sequence

from vert_estimator.core.config import DetectionSettings, FallbackSettings
from vert_estimator.core.logging import get_logger
from vert_estimator.core.types import EventSource, JumpEvent, Peak, SelectionState

logger = get_logger(__name__)


def fallback_event(settings: FallbackSettings | None = None) -> JumpEvent:
    """Build the fixed fallback pair.

    Args:
        settings: Fallback timestamps (uses defaults if None)

    Returns:
        JumpEvent tagged as FALLBACK
    """
    settings = settings or FallbackSettings()
    return JumpEvent(
        takeoff_time=settings.takeoff_s,
        landing_time=settings.landing_s,
        source=EventSource.FALLBACK,
    )


def relevant_peaks(
    peaks: Sequence[Peak],
    total_frames: int,
    start_fraction: float = 0.1,
    end_fraction: float = 0.7,
) -> list[Peak]:
    """Keep peaks strictly inside (start_fraction, end_fraction) of the clip.

    Ranking order is preserved.
    """
    lower = total_frames * start_fraction
    upper = total_frames * end_fraction
    return [p for p in peaks if lower < p.index < upper]


def select_jump_event(
    peaks: Sequence[Peak],
    total_frames: int,
    sample_rate: float,
    detection: DetectionSettings | None = None,
    fallback: FallbackSettings | None = None,
) -> tuple[JumpEvent, SelectionState]:
    """Resolve ranked peaks into a takeoff/landing pair.

    Args:
        peaks: Peaks sorted by descending value
        total_frames: Number of sampled frames in the series
        sample_rate: Sampling grid rate, used to convert indices to seconds
        detection: Relevant-window fractions (uses defaults if None)
        fallback: Fallback timestamps (uses defaults if None)

    Returns:
        Tuple of (event, selection state)
    """
    detection = detection or DetectionSettings()

    if len(peaks) < 2:
        logger.warning("Only %d motion peak(s) found, using fallback timestamps", len(peaks))
        return fallback_event(fallback), SelectionState.NO_PEAKS

    candidates = relevant_peaks(
        peaks,
        total_frames,
        detection.relevant_start_fraction,
        detection.relevant_end_fraction,
    )
    if len(candidates) < 2:
        logger.warning(
            "%d of %d peaks fall inside the jump window, using fallback timestamps",
            len(candidates),
            len(peaks),
        )
        return fallback_event(fallback), SelectionState.INSUFFICIENT_RELEVANT_PEAKS

    first, second = sorted(candidates[:2], key=lambda p: p.index)
    event = JumpEvent(
        takeoff_time=first.index / sample_rate,
        landing_time=second.index / sample_rate,
        source=EventSource.DETECTED,
    )
    return event, SelectionState.RESOLVED
