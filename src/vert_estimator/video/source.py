"""Seekable video sources.

A source exposes its duration and native dimensions, seeks asynchronously to
an exact timestamp and hands back the decoded raster for that instant. Only one
seek may be outstanding at a time.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import cv2
import numpy as np
from numpy.typing import NDArray

from vert_estimator.core.exceptions import FrameDecodeError, PlaybackError
from vert_estimator.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class VideoSource(Protocol):
    """Read-only, seekable sequence of frames."""

    @property
    def duration(self) -> float | None:
        """Clip length in seconds, None if unknown."""
        ...

    @property
    def width(self) -> int:
        """Native frame width in pixels."""
        ...

    @property
    def height(self) -> int:
        """Native frame height in pixels."""
        ...

    async def seek(self, timestamp: float) -> None:
        """Seek to and decode the frame at timestamp (seconds)."""
        ...

    def current_frame(self) -> NDArray[np.uint8] | None:
        """Raster decoded by the last completed seek."""
        ...


class OpenCVVideoSource:
    """Video file decoded with OpenCV.

    Decoding runs in a worker thread so the event loop stays responsive, but
    calls are serialized by a lock because the capture handle is stateful.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize source for a video file.

        Args:
            path: Path to the video file
        """
        self.path = Path(path)
        self._capture: cv2.VideoCapture | None = None
        self._fps = 0.0
        self._frame_count = 0
        self._width = 0
        self._height = 0
        self._frame: NDArray[np.uint8] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        """Check if the capture handle is open."""
        return self._capture is not None

    @property
    def fps(self) -> float:
        """Native frame rate reported by the container."""
        return self._fps

    @property
    def duration(self) -> float | None:
        if self._fps <= 0 or self._frame_count <= 0:
            return None
        return self._frame_count / self._fps

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def open(self) -> None:
        """Open the video file and read its properties.

        Raises:
            PlaybackError: If the file is missing or cannot be decoded
        """
        if not self.path.exists():
            raise PlaybackError(f"Video file not found: {self.path}")

        capture = cv2.VideoCapture(str(self.path))
        if not capture.isOpened():
            capture.release()
            raise PlaybackError(f"Could not open video: {self.path}")

        self._capture = capture
        self._fps = float(capture.get(cv2.CAP_PROP_FPS) or 0.0)
        self._frame_count = int(capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
        self._width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
        self._height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)

        logger.info(
            "Opened %s (%dx%d, %.2f fps, %d frames)",
            self.path.name,
            self._width,
            self._height,
            self._fps,
            self._frame_count,
        )

    def close(self) -> None:
        """Release the capture handle."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None
        self._frame = None

    async def seek(self, timestamp: float) -> None:
        async with self._lock:
            self._frame = await asyncio.to_thread(self._read_at, timestamp)

    def current_frame(self) -> NDArray[np.uint8] | None:
        return self._frame

    def frame_index(self, timestamp: float) -> int:
        """Nearest native frame for a timestamp, clamped to the clip.

        Grid instants finer than the native rate can round past the last
        frame near the end of the clip; those map to the last frame.
        """
        index = int(round(timestamp * self.fps)) if self.fps > 0 else 0
        return min(max(index, 0), max(self._frame_count - 1, 0))

    def _read_at(self, timestamp: float) -> NDArray[np.uint8]:
        """Blocking seek and decode."""
        if self._capture is None:
            raise PlaybackError("Video is not open")

        index = self.frame_index(timestamp)
        self._capture.set(cv2.CAP_PROP_POS_FRAMES, index)
        ok, image = self._capture.read()
        if not ok or image is None:
            raise FrameDecodeError(f"No frame decoded at {timestamp:.3f}s (frame {index})")

        return np.asarray(image, dtype=np.uint8)

    def __enter__(self) -> OpenCVVideoSource:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()


class ArrayVideoSource:
    """In-memory clip backed by a list of raster arrays.

    Frame i covers [i / fps, (i + 1) / fps). Useful for synthetic clips and
    for replaying frames that were decoded elsewhere.
    """

    def __init__(self, frames: Sequence[NDArray[np.uint8]], fps: float = 60.0) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._frames = list(frames)
        self.fps = fps
        self._frame: NDArray[np.uint8] | None = None
        self.seeks: list[float] = []

    @property
    def duration(self) -> float | None:
        return len(self._frames) / self.fps

    @property
    def width(self) -> int:
        return int(self._frames[0].shape[1]) if self._frames else 0

    @property
    def height(self) -> int:
        return int(self._frames[0].shape[0]) if self._frames else 0

    async def seek(self, timestamp: float) -> None:
        self.seeks.append(timestamp)
        await asyncio.sleep(0)
        if not self._frames:
            raise FrameDecodeError("Clip has no frames")
        index = min(max(int(round(timestamp * self.fps)), 0), len(self._frames) - 1)
        self._frame = self._frames[index]

    def current_frame(self) -> NDArray[np.uint8] | None:
        return self._frame


def sampled_frame_count(duration: float | None, sample_rate: float) -> int:
    """Number of grid instants that fit in a clip.

    Unknown, non-finite or non-positive durations yield zero.
    """
    if duration is None or not math.isfinite(duration) or duration <= 0:
        return 0
    # Tolerate float error in duration * rate
    return int(math.floor(duration * sample_rate + 1e-9))
