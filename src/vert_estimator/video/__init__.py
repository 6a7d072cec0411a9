"""Video sources and fixed-rate frame sampling."""

from vert_estimator.video.sampler import sample_frames, sample_instants
from vert_estimator.video.source import (
    ArrayVideoSource,
    OpenCVVideoSource,
    VideoSource,
    sampled_frame_count,
)

__all__ = [
    "VideoSource",
    "OpenCVVideoSource",
    "ArrayVideoSource",
    "sample_frames",
    "sample_instants",
    "sampled_frame_count",
]
