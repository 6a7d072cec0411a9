"""Core data types and structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class RegionOfInterest:
    """Axis-aligned rectangle in pixel coordinates.

    Attributes:
        name: Label used when reporting per-region motion
        x: Left edge in pixels
        y: Top edge in pixels
        width: Rectangle width in pixels
        height: Rectangle height in pixels
    """

    name: str
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        """Number of pixels covered by the region."""
        return self.width * self.height

    def crop(self, image: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """Return the pixel block addressed by this region."""
        return image[self.y : self.y + self.height, self.x : self.x + self.width]


@dataclass(slots=True)
class Frame:
    """A sampled video frame with metadata.

    Attributes:
        image: Raster array, (H, W) or (H, W, C) with C in {3, 4}
        timestamp: Sample instant in seconds
        index: Position on the sampling grid
    """

    image: NDArray[np.uint8]
    timestamp: float
    index: int

    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return int(self.image.shape[0])

    @property
    def dimensions(self) -> tuple[int, int]:
        """Frame dimensions as (width, height)."""
        return self.width, self.height


@dataclass(frozen=True, slots=True)
class Peak:
    """Local maximum of the smoothed motion series."""

    index: int
    value: float


class HeightUnit(Enum):
    """Display unit for jump height."""

    INCHES = "inches"
    CENTIMETERS = "cm"

    @classmethod
    def parse(cls, value: HeightUnit | str) -> HeightUnit:
        """Accept either an enum member or its string value."""
        if isinstance(value, cls):
            return value
        return cls(value)


class PerformanceCategory(Enum):
    """Jump rating by height in inches (inclusive lower bounds)."""

    ELITE = "Elite"
    EXCELLENT = "Excellent"
    VERY_GOOD = "Very good"
    GOOD = "Good"
    AVERAGE = "Average"
    BEGINNER = "Beginner"


class EventSource(Enum):
    """Where a takeoff/landing pair came from."""

    MANUAL = auto()
    DETECTED = auto()
    FALLBACK = auto()


class SelectionState(Enum):
    """Outcome of choosing takeoff/landing peaks."""

    NO_PEAKS = auto()
    INSUFFICIENT_RELEVANT_PEAKS = auto()
    RESOLVED = auto()


@dataclass(slots=True)
class JumpEvent:
    """Takeoff and landing timestamps for a single jump.

    Attributes:
        takeoff_time: Takeoff timestamp in seconds (None until marked)
        landing_time: Landing timestamp in seconds (None until marked)
        source: How the timestamps were obtained
    """

    takeoff_time: float | None = None
    landing_time: float | None = None
    source: EventSource = EventSource.MANUAL

    @property
    def hang_time(self) -> float | None:
        """Landing minus takeoff in seconds; not validated for sign."""
        if self.takeoff_time is None or self.landing_time is None:
            return None
        return self.landing_time - self.takeoff_time


@dataclass(frozen=True, slots=True)
class JumpHeight:
    """A computed jump height in a display unit."""

    value: float
    unit: HeightUnit
    hang_time: float


@dataclass(frozen=True, slots=True)
class SignalStatistics:
    """Summary statistics of the smoothed motion series."""

    mean: float
    std: float
    threshold: float


@dataclass(slots=True)
class DetectionResult:
    """Everything produced by one automatic detection run.

    Attributes:
        event: Selected takeoff/landing pair, None if the run was aborted
        state: Peak selection outcome, None if selection never ran
        frame_count: Number of sampled frames
        sample_rate: Sampling grid rate in frames per second
        raw_series: Combined per-frame motion values
        smoothed_series: Moving-average of the raw series
        statistics: Mean, standard deviation and threshold of the smoothed series
        peaks: Ranked peaks above threshold
        error: User-facing error message if the run failed
        cancelled: True if the run was cancelled before completion
    """

    event: JumpEvent | None
    state: SelectionState | None
    frame_count: int
    sample_rate: float
    raw_series: list[float] = field(default_factory=list)
    smoothed_series: list[float] = field(default_factory=list)
    statistics: SignalStatistics | None = None
    peaks: list[Peak] = field(default_factory=list)
    error: str | None = None
    cancelled: bool = False

    @property
    def used_fallback(self) -> bool:
        """True if the event is the fixed fallback pair."""
        return self.event is not None and self.event.source is EventSource.FALLBACK
