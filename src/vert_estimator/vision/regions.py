"""Regions of interest watched for motion."""

from __future__ import annotations

from vert_estimator.core.exceptions import AcquisitionError
from vert_estimator.core.types import RegionOfInterest

FEET_BAND_FRACTION = 0.4
BODY_WIDTH_FRACTION = 0.5
BODY_HEIGHT_FRACTION = 0.4


def feet_region(width: int, height: int) -> RegionOfInterest:
    """Full-width band covering the bottom 40% of the frame."""
    band = int(height * FEET_BAND_FRACTION)
    return RegionOfInterest(name="feet", x=0, y=height - band, width=width, height=band)


def body_region(width: int, height: int) -> RegionOfInterest:
    """Centered block, half the frame wide and 40% of it tall."""
    region_width = int(width * BODY_WIDTH_FRACTION)
    region_height = int(height * BODY_HEIGHT_FRACTION)
    return RegionOfInterest(
        name="body",
        x=(width - region_width) // 2,
        y=(height - region_height) // 2,
        width=region_width,
        height=region_height,
    )


def default_regions(width: int, height: int) -> list[RegionOfInterest]:
    """Build the feet and body regions for a frame size.

    Args:
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        Regions in fixed order: feet, body

    Raises:
        AcquisitionError: If the frame size leaves no pixels to analyze
    """
    if width <= 0 or height <= 0:
        raise AcquisitionError(f"Invalid frame dimensions {width}x{height}")

    regions = [feet_region(width, height), body_region(width, height)]
    empty = [r.name for r in regions if r.area == 0]
    if empty:
        raise AcquisitionError(
            f"Frame {width}x{height} is too small for regions: {', '.join(empty)}"
        )

    return regions
