"""Fixed-rate frame sampling over a seekable source."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable

from vert_estimator.core.exceptions import FrameDecodeError
from vert_estimator.core.logging import get_logger
from vert_estimator.core.types import Frame
from vert_estimator.video.source import VideoSource, sampled_frame_count

logger = get_logger(__name__)


def sample_instants(duration: float | None, sample_rate: float) -> list[float]:
    """Timestamps t_i = i / sample_rate for i in [0, floor(duration * sample_rate)).

    Args:
        duration: Clip length in seconds (None if unknown)
        sample_rate: Samples per second

    Returns:
        Sample instants in seconds, empty for unknown or zero duration
    """
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")

    count = sampled_frame_count(duration, sample_rate)
    return [i / sample_rate for i in range(count)]


async def sample_frames(
    source: VideoSource,
    sample_rate: float,
    should_stop: Callable[[], bool] | None = None,
) -> AsyncGenerator[Frame, None]:
    """Yield frames on a fixed grid, one seek at a time.

    Each seek is awaited to completion before the frame is yielded, and the
    next seek is not issued until the consumer asks for the next frame.

    Args:
        source: Seekable video source
        sample_rate: Samples per second
        should_stop: Polled between frames; returning True ends sampling

    Yields:
        Frame objects in grid order

    Raises:
        FrameDecodeError: If a seek completes without a frame
    """
    instants = sample_instants(source.duration, sample_rate)
    logger.debug("Sampling %d frames at %s fps", len(instants), sample_rate)

    for index, timestamp in enumerate(instants):
        if should_stop is not None and should_stop():
            logger.info("Sampling stopped at frame %d/%d", index, len(instants))
            return

        await source.seek(timestamp)
        image = source.current_frame()
        if image is None:
            raise FrameDecodeError(f"No frame available at {timestamp:.3f}s")

        yield Frame(image=image, timestamp=timestamp, index=index)
