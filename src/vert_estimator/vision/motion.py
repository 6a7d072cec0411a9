"""Per-region frame differencing."""

from __future__ import annotations

from collections.abc import Sequence

import cv2
import numpy as np
from numpy.typing import NDArray

from vert_estimator.core.exceptions import FrameDecodeError
from vert_estimator.core.types import RegionOfInterest


def color_channels(image: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Drop the alpha channel if present."""
    if image.ndim == 3 and image.shape[2] == 4:
        return np.ascontiguousarray(image[:, :, :3])
    return image


def region_difference(current: NDArray[np.uint8], previous: NDArray[np.uint8]) -> float:
    """Mean absolute color difference between two equally sized blocks.

    Each pixel contributes the mean of its per-channel absolute differences;
    the result is the average over all pixels.

    Args:
        current: Block from the current frame
        previous: Block from the previous frame at the same position

    Returns:
        Non-negative motion value (0 for empty blocks)
    """
    if current.shape != previous.shape:
        raise FrameDecodeError(
            f"Region shape changed between frames: {previous.shape} -> {current.shape}"
        )
    if current.size == 0:
        return 0.0

    diff = cv2.absdiff(color_channels(current), color_channels(previous))
    # Equal channel count per pixel, so the grand mean equals mean-of-pixel-means
    return float(np.mean(diff))


class RegionMotionExtractor:
    """Frame-to-frame motion measured independently in each region.

    Keeps the last raster block for every region. The first frame seen has
    nothing to compare against and contributes zero motion.
    """

    def __init__(self, regions: Sequence[RegionOfInterest]) -> None:
        """Initialize extractor.

        Args:
            regions: Fixed regions for the whole sampling pass
        """
        self.regions = list(regions)
        self._previous: dict[str, NDArray[np.uint8]] = {}

    def measure(self, image: NDArray[np.uint8]) -> dict[str, float]:
        """Compute motion per region and store the blocks for the next call.

        Args:
            image: Current full-frame raster

        Returns:
            Mapping of region name to motion value
        """
        values: dict[str, float] = {}

        for region in self.regions:
            block = region.crop(image).copy()
            previous = self._previous.get(region.name)
            values[region.name] = 0.0 if previous is None else region_difference(block, previous)
            self._previous[region.name] = block

        return values
