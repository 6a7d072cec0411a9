"""Core infrastructure: config, types, exceptions, and logging."""

from vert_estimator.core.config import Settings, get_settings
from vert_estimator.core.exceptions import (
    AcquisitionError,
    FrameDecodeError,
    JumpHeightError,
    PlaybackError,
    RuntimeDetectionError,
    VertEstimatorError,
)
from vert_estimator.core.logging import get_logger, setup_logging
from vert_estimator.core.types import (
    DetectionResult,
    EventSource,
    Frame,
    HeightUnit,
    JumpEvent,
    JumpHeight,
    Peak,
    PerformanceCategory,
    RegionOfInterest,
    SelectionState,
    SignalStatistics,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "RegionOfInterest",
    "Frame",
    "Peak",
    "HeightUnit",
    "PerformanceCategory",
    "EventSource",
    "SelectionState",
    "JumpEvent",
    "JumpHeight",
    "SignalStatistics",
    "DetectionResult",
    # Exceptions
    "VertEstimatorError",
    "PlaybackError",
    "AcquisitionError",
    "FrameDecodeError",
    "RuntimeDetectionError",
    "JumpHeightError",
    # Logging
    "setup_logging",
    "get_logger",
]
