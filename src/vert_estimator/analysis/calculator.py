"""Jump height from hang time.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from vert_estimator.core.exceptions import JumpHeightError
from vert_estimator.core.logging import get_logger
from vert_estimator.core.types import HeightUnit, JumpEvent, JumpHeight, PerformanceCategory

logger = get_logger(__name__)

GRAVITY = 9.81  # m/s^2
INCHES_PER_METER = 39.3701
CENTIMETERS_PER_METER = 100.0

# Inclusive lower bounds in inches, best first
CATEGORY_BOUNDS: tuple[tuple[float, PerformanceCategory], ...] = (
    (40.0, PerformanceCategory.ELITE),
    (35.0, PerformanceCategory.EXCELLENT),
    (30.0, PerformanceCategory.VERY_GOOD),
    (24.0, PerformanceCategory.GOOD),
    (20.0, PerformanceCategory.AVERAGE),
)


def hang_time_to_meters(hang_time: float) -> float:
    """Free-fall height for a symmetric flight: h = g * t^2 / 8."""
    return GRAVITY * hang_time**2 / 8


def parse_unit(unit: HeightUnit | str) -> HeightUnit:
    """Resolve a unit name, rejecting anything but inches and cm."""
    try:
        return HeightUnit.parse(unit)
    except ValueError as e:
        raise JumpHeightError(f"Unknown height unit: {unit!r}") from e


def meters_to_unit(meters: float, unit: HeightUnit | str) -> float:
    """Convert a height in meters to the display unit."""
    if parse_unit(unit) is HeightUnit.INCHES:
        return meters * INCHES_PER_METER
    return meters * CENTIMETERS_PER_METER


def estimate_takeoff_velocity(hang_time: float) -> float:
    """Vertical takeoff velocity in m/s (v = g * t / 2)."""
    return GRAVITY * hang_time / 2


class HeightCalculator:
    """Converts takeoff/landing timestamps into a jump height.

    The calculation is stateless: the same inputs always give the same
    output. Landing before takeoff is not rejected; the hang time goes
    negative and the squared formula still yields a height.
    """

    def __init__(self, unit: HeightUnit | str = HeightUnit.INCHES) -> None:
        """Initialize calculator.

        Args:
            unit: Display unit for results
        """
        self.unit = parse_unit(unit)

    def calculate(
        self,
        takeoff_time: float | None,
        landing_time: float | None,
    ) -> JumpHeight | None:
        """Calculate jump height for a pair of timestamps.

        Args:
            takeoff_time: Takeoff in seconds (None if unset)
            landing_time: Landing in seconds (None if unset)

        Returns:
            JumpHeight, or None if either timestamp is unset
        """
        if takeoff_time is None or landing_time is None:
            return None

        hang_time = landing_time - takeoff_time
        if hang_time <= 0:
            logger.warning(
                "Landing (%.3fs) is not after takeoff (%.3fs); hang time %.3fs used as-is",
                landing_time,
                takeoff_time,
                hang_time,
            )

        value = meters_to_unit(hang_time_to_meters(hang_time), self.unit)
        return JumpHeight(value=value, unit=self.unit, hang_time=hang_time)

    def calculate_for_event(self, event: JumpEvent) -> JumpHeight | None:
        """Calculate jump height for an event's timestamps."""
        return self.calculate(event.takeoff_time, event.landing_time)


def calculate_jump_height(
    takeoff_time: float | None,
    landing_time: float | None,
    unit: HeightUnit | str = HeightUnit.INCHES,
) -> float | None:
    """Pure function to calculate jump height.

    Args:
        takeoff_time: Takeoff in seconds (None if unset)
        landing_time: Landing in seconds (None if unset)
        unit: "inches" or "cm"

    Returns:
        Height in the requested unit, or None if either timestamp is unset
    """
    height = HeightCalculator(unit).calculate(takeoff_time, landing_time)
    return None if height is None else height.value


def classify_performance(
    height: float | None,
    unit: HeightUnit | str = HeightUnit.INCHES,
) -> PerformanceCategory | None:
    """Rate a jump height.

    Args:
        height: Jump height (None if unset)
        unit: Unit the height is expressed in

    Returns:
        PerformanceCategory, or None if height is unset
    """
    if height is None:
        return None

    if parse_unit(unit) is HeightUnit.CENTIMETERS:
        height = height / CENTIMETERS_PER_METER * INCHES_PER_METER

    for lower_bound, category in CATEGORY_BOUNDS:
        if height >= lower_bound:
            return category

    return PerformanceCategory.BEGINNER
