"""Pytest fixtures for Vert Estimator tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from pathlib import Path

import cv2
import numpy as np
import pytest
from numpy.typing import NDArray

from vert_estimator.core.config import (
    DetectionSettings,
    FallbackSettings,
    SamplingSettings,
    Settings,
)
from vert_estimator.core.types import Peak
from vert_estimator.video.source import ArrayVideoSource

FRAME_WIDTH = 20
FRAME_HEIGHT = 16


def triangle_profile(
    length: int,
    centers: Sequence[int],
    peak: int = 40,
    slope: int = 5,
) -> list[int]:
    """Per-frame intensity changes forming triangular bursts around centers."""
    profile = [0] * length
    for i in range(length):
        for center in centers:
            profile[i] = max(profile[i], peak - slope * abs(i - center))
    return profile


def make_motion_clip(
    changes: Sequence[int],
    width: int = FRAME_WIDTH,
    height: int = FRAME_HEIGHT,
    channels: int = 3,
) -> list[NDArray[np.uint8]]:
    """Uniform frames whose brightness moves by changes[i] at frame i.

    Every region then sees a mean difference of exactly changes[i], so the
    combined motion value at frame i is 2 * changes[i].
    """
    level = 100
    frames = []
    for i, change in enumerate(changes):
        if i > 0:
            level = level + change if level < 128 else level - change
        frames.append(np.full((height, width, channels), level, dtype=np.uint8))
    return frames


class ScriptedSource:
    """Video source double with configurable metadata and failures."""

    def __init__(
        self,
        frames: Sequence[NDArray[np.uint8]] = (),
        duration: float | None = None,
        width: int = FRAME_WIDTH,
        height: int = FRAME_HEIGHT,
        fps: float = 60.0,
        fail_at: int | None = None,
        empty_at: int | None = None,
    ) -> None:
        self._frames = list(frames)
        if duration is None and self._frames:
            duration = len(self._frames) / fps
        self._duration = duration
        self._width = width
        self._height = height
        self.fps = fps
        self.fail_at = fail_at
        self.empty_at = empty_at
        self.seeks: list[float] = []
        self._frame: NDArray[np.uint8] | None = None
        self._busy = False

    @property
    def duration(self) -> float | None:
        return self._duration

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    async def seek(self, timestamp: float) -> None:
        if self._busy:
            raise AssertionError("Overlapping seek")
        self._busy = True
        try:
            call = len(self.seeks)
            self.seeks.append(timestamp)
            await asyncio.sleep(0)
            if self.fail_at is not None and call == self.fail_at:
                raise OSError("decoder crashed")
            if self.empty_at is not None and call == self.empty_at:
                self._frame = None
                return
            if self._frames:
                index = min(int(round(timestamp * self.fps)), len(self._frames) - 1)
                self._frame = self._frames[index]
            else:
                self._frame = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        finally:
            self._busy = False

    def current_frame(self) -> NDArray[np.uint8] | None:
        return self._frame


@pytest.fixture
def settings() -> Settings:
    """Default settings independent of the environment."""
    return Settings(
        sampling=SamplingSettings(sample_rate=60),
        detection=DetectionSettings(),
        fallback=FallbackSettings(),
    )


@pytest.fixture
def jump_clip() -> ArrayVideoSource:
    """Four seconds at 60 fps with motion bursts at frames 60 and 120."""
    frames = make_motion_clip(triangle_profile(240, centers=[60, 120]))
    return ArrayVideoSource(frames, fps=60.0)


@pytest.fixture
def still_clip() -> ArrayVideoSource:
    """Two seconds of an unchanging frame."""
    frames = make_motion_clip([0] * 120)
    return ArrayVideoSource(frames, fps=60.0)


@pytest.fixture
def ranked_peaks() -> list[Peak]:
    """Peaks already sorted by descending value, all inside a 100-frame window."""
    return [
        Peak(index=50, value=9.0),
        Peak(index=20, value=7.0),
        Peak(index=30, value=5.0),
    ]


@pytest.fixture
def scripted_source() -> type[ScriptedSource]:
    """Factory for configurable video source doubles."""
    return ScriptedSource


@pytest.fixture
def motion_clip() -> Callable[..., list[NDArray[np.uint8]]]:
    """Factory for synthetic clips with a chosen per-frame change profile."""
    return make_motion_clip


@pytest.fixture
def burst_profile() -> Callable[..., list[int]]:
    """Factory for triangular motion-burst profiles."""
    return triangle_profile


@pytest.fixture
def video_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing frames to an MJPG AVI file; skips if no writer exists."""

    def write(frames: Sequence[NDArray[np.uint8]], fps: float = 30.0) -> Path:
        height, width = frames[0].shape[:2]
        path = tmp_path / f"clip_{len(frames)}_{fps:g}.avi"
        writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (width, height))
        if not writer.isOpened():
            pytest.skip("MJPG writer unavailable")
        for frame in frames:
            writer.write(frame)
        writer.release()
        return path

    return write
