"""Takeoff/landing marks and the height derived from them."""

from __future__ import annotations

from collections.abc import Callable

from vert_estimator.analysis.calculator import HeightCalculator, classify_performance, parse_unit
from vert_estimator.core.logging import get_logger
from vert_estimator.core.types import (
    EventSource,
    HeightUnit,
    JumpEvent,
    JumpHeight,
    PerformanceCategory,
)

logger = get_logger(__name__)

HeightSink = Callable[[JumpHeight | None], None]


class JumpSession:
    """Holds the current jump marks and display unit.

    The height is never converted from a previously displayed value; every
    change to the marks or the unit recomputes it from the hang time.
    """

    def __init__(
        self,
        unit: HeightUnit | str = HeightUnit.INCHES,
        on_height: HeightSink | None = None,
    ) -> None:
        """Initialize session.

        Args:
            unit: Display unit for heights
            on_height: Receives every recomputed height (None when unset)
        """
        self._unit = parse_unit(unit)
        self._on_height = on_height
        self._event = JumpEvent()
        self._height: JumpHeight | None = None

    @property
    def event(self) -> JumpEvent:
        """Current takeoff/landing marks."""
        return self._event

    @property
    def unit(self) -> HeightUnit:
        """Current display unit."""
        return self._unit

    @property
    def height(self) -> JumpHeight | None:
        """Last computed height, None while a mark is missing."""
        return self._height

    @property
    def category(self) -> PerformanceCategory | None:
        """Performance rating of the last computed height."""
        if self._height is None:
            return None
        return classify_performance(self._height.value, self._height.unit)

    def mark_takeoff(self, timestamp: float) -> JumpHeight | None:
        """Set takeoff from the current playback position."""
        self._event = JumpEvent(
            takeoff_time=timestamp,
            landing_time=self._event.landing_time,
            source=EventSource.MANUAL,
        )
        return self._recompute()

    def mark_landing(self, timestamp: float) -> JumpHeight | None:
        """Set landing from the current playback position."""
        self._event = JumpEvent(
            takeoff_time=self._event.takeoff_time,
            landing_time=timestamp,
            source=EventSource.MANUAL,
        )
        return self._recompute()

    def apply_event(self, event: JumpEvent) -> JumpHeight | None:
        """Replace both marks, e.g. with an automatic detection result."""
        self._event = JumpEvent(
            takeoff_time=event.takeoff_time,
            landing_time=event.landing_time,
            source=event.source,
        )
        logger.debug("Applied %s event", event.source.name)
        return self._recompute()

    def set_unit(self, unit: HeightUnit | str) -> JumpHeight | None:
        """Change the display unit and recompute."""
        self._unit = parse_unit(unit)
        return self._recompute()

    def clear(self) -> None:
        """Forget both marks."""
        self._event = JumpEvent()
        self._recompute()

    def _recompute(self) -> JumpHeight | None:
        self._height = HeightCalculator(self._unit).calculate_for_event(self._event)
        if self._on_height is not None:
            self._on_height(self._height)
        return self._height
