"""Tests for takeoff/landing selection and fallback."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from vert_estimator.analysis.selection import (
    fallback_event,
    relevant_peaks,
    select_jump_event,
)
from vert_estimator.core.config import DetectionSettings, FallbackSettings
from vert_estimator.core.types import EventSource, Peak, SelectionState


class TestSelectJumpEvent:
    """Tests for the selection state machine."""

    @pytest.mark.parametrize("peaks", [[], [Peak(index=40, value=9.0)]])
    def test_fewer_than_two_peaks_falls_back(self, peaks: list[Peak]) -> None:
        """Zero or one peak resolves to the fallback pair."""
        event, state = select_jump_event(peaks, total_frames=100, sample_rate=60.0)

        assert state is SelectionState.NO_PEAKS
        assert event.takeoff_time == 0.85
        assert event.landing_time == 1.55
        assert event.source is EventSource.FALLBACK

    def test_peaks_outside_window_fall_back(self) -> None:
        """Peaks at 5% and 95% of the clip are both irrelevant."""
        peaks = [Peak(index=95, value=10.0), Peak(index=5, value=8.0)]
        event, state = select_jump_event(peaks, total_frames=100, sample_rate=60.0)

        assert state is SelectionState.INSUFFICIENT_RELEVANT_PEAKS
        assert (event.takeoff_time, event.landing_time) == (0.85, 1.55)

    def test_two_strongest_relevant_peaks(self, ranked_peaks: list[Peak]) -> None:
        """Lower index becomes takeoff, higher index landing."""
        event, state = select_jump_event(ranked_peaks, total_frames=100, sample_rate=60.0)

        assert state is SelectionState.RESOLVED
        assert event.source is EventSource.DETECTED
        assert event.takeoff_time == pytest.approx(20 / 60)
        assert event.landing_time == pytest.approx(50 / 60)
        assert event.hang_time is not None and event.hang_time > 0

    def test_irrelevant_strong_peak_is_skipped(self) -> None:
        """Ranking is applied after filtering to the jump window."""
        peaks = [
            Peak(index=90, value=20.0),
            Peak(index=40, value=9.0),
            Peak(index=25, value=4.0),
        ]
        event, state = select_jump_event(peaks, total_frames=100, sample_rate=50.0)

        assert state is SelectionState.RESOLVED
        assert event.takeoff_time == pytest.approx(0.5)
        assert event.landing_time == pytest.approx(0.8)

    def test_custom_fallback(self) -> None:
        """Fallback timestamps come from settings."""
        fallback = FallbackSettings(takeoff_s=1.0, landing_s=1.6)
        event, _ = select_jump_event([], 100, 60.0, fallback=fallback)

        assert (event.takeoff_time, event.landing_time) == (1.0, 1.6)

    def test_custom_relevant_window(self, ranked_peaks: list[Peak]) -> None:
        """Window fractions come from settings."""
        detection = DetectionSettings(relevant_start_fraction=0.25, relevant_end_fraction=0.9)
        event, state = select_jump_event(ranked_peaks, 100, 60.0, detection=detection)

        assert state is SelectionState.RESOLVED
        assert event.takeoff_time == pytest.approx(30 / 60)
        assert event.landing_time == pytest.approx(50 / 60)


class TestRelevantPeaks:
    """Tests for the jump-window filter."""

    def test_bounds_are_exclusive(self) -> None:
        """Indices exactly at 10% and 70% are excluded."""
        peaks = [Peak(10, 5.0), Peak(11, 4.0), Peak(69, 3.0), Peak(70, 2.0)]
        assert [p.index for p in relevant_peaks(peaks, 100)] == [11, 69]

    def test_keeps_ranking_order(self, ranked_peaks: list[Peak]) -> None:
        """Filtering does not reorder peaks."""
        assert relevant_peaks(ranked_peaks, 100) == ranked_peaks


class TestFallbackSettings:
    """Tests for fallback configuration."""

    def test_default_event(self) -> None:
        """Defaults match the reference clip timestamps."""
        event = fallback_event()
        assert event.hang_time == pytest.approx(0.7)

    def test_landing_must_follow_takeoff(self) -> None:
        """A non-causal fallback pair is rejected."""
        with pytest.raises(ValidationError):
            FallbackSettings(takeoff_s=1.5, landing_s=1.0)
