"""Automatic takeoff/landing detection from frame differencing."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import aclosing
from typing import Any

from vert_estimator.analysis.peaks import find_peaks
from vert_estimator.analysis.selection import fallback_event, select_jump_event
from vert_estimator.analysis.signal import combine_region_motion, compute_statistics, smooth
from vert_estimator.core.config import Settings, get_settings
from vert_estimator.core.exceptions import AcquisitionError, PlaybackError, RuntimeDetectionError
from vert_estimator.core.logging import get_logger
from vert_estimator.core.types import DetectionResult, JumpEvent, SelectionState
from vert_estimator.video.sampler import sample_frames
from vert_estimator.video.source import VideoSource, sampled_frame_count
from vert_estimator.vision.motion import RegionMotionExtractor
from vert_estimator.vision.regions import default_regions

logger = get_logger(__name__)

ProgressSink = Callable[[int], None]
ErrorSink = Callable[[str], None]
EventSink = Callable[[JumpEvent], None]


class MotionJumpDetector:
    """Finds takeoff and landing as the two strongest bursts of motion.

    Stages:
    - Sample frames on a fixed grid, one awaited seek at a time
    - Difference each region against its previous block
    - Sum regions into one motion series, then smooth it
    - Threshold at mean + k * std and rank local maxima
    - Pick two peaks inside the jump window, or fall back to fixed timestamps

    Failures never escape detect(): they go to the error sink and, once
    sampling has started, the fallback pair is still published.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        on_progress: ProgressSink | None = None,
        on_error: ErrorSink | None = None,
        on_event: EventSink | None = None,
    ) -> None:
        """Initialize detector.

        Args:
            settings: Application settings (uses defaults if None)
            on_progress: Receives integer percent complete, 0..100
            on_error: Receives user-facing error messages
            on_event: Receives the resolved takeoff/landing pair
        """
        self.settings = settings or get_settings()
        self._on_progress = on_progress
        self._on_error = on_error
        self._on_event = on_event
        self._running = False
        self._cancelled = False
        self._progress = 0

    @property
    def sample_rate(self) -> float:
        """Sampling grid rate in frames per second."""
        return float(self.settings.sampling.sample_rate)

    @property
    def is_running(self) -> bool:
        """Check if a detection run is in progress."""
        return self._running

    @property
    def progress(self) -> int:
        """Last reported percent complete."""
        return self._progress

    def cancel(self) -> None:
        """Stop the current run after the frame being processed."""
        if self._running:
            logger.info("Cancellation requested")
            self._cancelled = True

    async def detect(self, source: VideoSource | None) -> DetectionResult:
        """Run detection over a video source.

        Args:
            source: Loaded video source (None if no video is loaded)

        Returns:
            DetectionResult; its event is None only if the run was aborted
            (no video, or no pixels in the first raster) or cancelled
        """
        sample_rate = self.sample_rate
        result = DetectionResult(event=None, state=None, frame_count=0, sample_rate=sample_rate)

        if self._running:
            self._report_error("Detection is already running")
            result.error = "Detection is already running"
            return result

        if source is None:
            error = PlaybackError("No video loaded")
            self._report_error(error.message)
            result.error = error.message
            return result

        result.frame_count = sampled_frame_count(source.duration, sample_rate)
        logger.info(
            "Detecting jump: duration=%s, sample_rate=%.0f, frames=%d",
            source.duration,
            sample_rate,
            result.frame_count,
        )

        if result.frame_count == 0:
            logger.warning("Clip has no sampled frames, using fallback timestamps")
            result.event = fallback_event(self.settings.fallback)
            result.state = SelectionState.NO_PEAKS
            self._publish(result.event)
            return result

        self._running = True
        self._cancelled = False
        self._progress = 0

        try:
            result.raw_series = await self._collect_motion(source, sample_rate, result.frame_count)
        except AcquisitionError as e:
            logger.error("Frame surface unavailable: %s", e)
            self._report_error(e.message)
            result.error = e.message
            return result
        except Exception as e:
            error = RuntimeDetectionError(f"Motion analysis failed: {e}")
            logger.error("%s", error.message)
            self._report_error(error.message)
            result.error = error.message
            result.event = fallback_event(self.settings.fallback)
            result.state = SelectionState.NO_PEAKS
            self._publish(result.event)
            return result
        finally:
            self._running = False

        if self._cancelled:
            logger.info("Detection cancelled after %d frames", len(result.raw_series))
            result.cancelled = True
            return result

        self._resolve(result)
        self._publish(result.event)
        return result

    def detect_sync(self, source: VideoSource | None) -> DetectionResult:
        """Run detect() to completion on a fresh event loop."""
        return asyncio.run(self.detect(source))

    async def _collect_motion(
        self,
        source: VideoSource,
        sample_rate: float,
        frame_count: int,
    ) -> list[float]:
        """Build the raw motion series, one value per sampled frame.

        Regions come from the first decoded raster, not the container
        metadata, and stay fixed for the rest of the run.

        Raises:
            AcquisitionError: If the first raster has no pixels to analyze
        """
        extractor: RegionMotionExtractor | None = None
        series: list[float] = []
        self._emit_progress(0, force=True)

        frames = sample_frames(source, sample_rate, should_stop=lambda: self._cancelled)
        async with aclosing(frames):
            async for frame in frames:
                if extractor is None:
                    extractor = RegionMotionExtractor(default_regions(*frame.dimensions))
                    logger.debug("Regions from %dx%d raster", *frame.dimensions)
                values = extractor.measure(frame.image)
                series.append(combine_region_motion(values))
                self._emit_progress((frame.index + 1) * 100 // frame_count)

        return series

    def _resolve(self, result: DetectionResult) -> None:
        """Smooth, threshold and select peaks for a complete series."""
        detection = self.settings.detection

        result.smoothed_series = smooth(result.raw_series, detection.smoothing_half_window)
        result.statistics = compute_statistics(
            result.smoothed_series, detection.threshold_multiplier
        )
        result.peaks = find_peaks(
            result.smoothed_series,
            result.statistics.threshold,
            edge_margin=detection.edge_margin,
            span=detection.neighbor_span,
        )
        logger.debug(
            "Motion mean=%.3f std=%.3f threshold=%.3f peaks=%d",
            result.statistics.mean,
            result.statistics.std,
            result.statistics.threshold,
            len(result.peaks),
        )

        result.event, result.state = select_jump_event(
            result.peaks,
            result.frame_count,
            result.sample_rate,
            detection=detection,
            fallback=self.settings.fallback,
        )
        logger.info(
            "Jump event (%s): takeoff=%.3fs landing=%.3fs",
            result.event.source.name,
            result.event.takeoff_time,
            result.event.landing_time,
        )

    def _emit_progress(self, percent: int, force: bool = False) -> None:
        percent = min(max(percent, 0), 100)
        if percent == self._progress and not force:
            return
        self._progress = percent
        _notify(self._on_progress, percent, "progress")

    def _report_error(self, message: str) -> None:
        _notify(self._on_error, message, "error")

    def _publish(self, event: JumpEvent | None) -> None:
        if event is not None:
            _notify(self._on_event, event, "event")


def _notify(sink: Callable[[Any], None] | None, value: object, kind: str) -> None:
    """Deliver to a caller-supplied sink; sink failures are logged, not raised."""
    if sink is None:
        return
    try:
        sink(value)
    except Exception as e:
        logger.warning("%s sink failed: %s", kind.capitalize(), e)


def detect_jump(source: VideoSource, settings: Settings | None = None) -> DetectionResult:
    """Run one detection synchronously.

    Args:
        source: Loaded video source
        settings: Application settings

    Returns:
        DetectionResult for the clip
    """
    return MotionJumpDetector(settings).detect_sync(source)
