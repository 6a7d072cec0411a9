"""Computer vision operations: regions of interest and frame differencing."""

from vert_estimator.vision.motion import RegionMotionExtractor, region_difference
from vert_estimator.vision.regions import default_regions

__all__ = [
    "RegionMotionExtractor",
    "region_difference",
    "default_regions",
]
