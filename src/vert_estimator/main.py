"""Main entry point for Vert Estimator."""

from __future__ import annotations

import argparse
import os
import sys

from vert_estimator.analysis.calculator import estimate_takeoff_velocity
from vert_estimator.core.config import Settings, get_settings
from vert_estimator.core.exceptions import PlaybackError, VertEstimatorError
from vert_estimator.core.logging import get_logger, setup_logging
from vert_estimator.core.types import DetectionResult, HeightUnit, JumpHeight
from vert_estimator.pipeline.detector import MotionJumpDetector
from vert_estimator.pipeline.session import JumpSession
from vert_estimator.video.source import OpenCVVideoSource

logger = get_logger(__name__)


def _log_progress(percent: int) -> None:
    if percent % 10 == 0:
        logger.info("Analyzing motion... %d%%", percent)


def _format_time(timestamp: float | None) -> str:
    return "-" if timestamp is None else f"{timestamp:.3f} s"


def _print_report(session: JumpSession, result: DetectionResult | None) -> None:
    event = session.event
    height: JumpHeight | None = session.height

    if result is not None and result.used_fallback:
        print("Automatic detection was inconclusive; showing fallback timestamps.")

    print(f"Takeoff:   {_format_time(event.takeoff_time)}")
    print(f"Landing:   {_format_time(event.landing_time)}")

    if height is None:
        print("Height:    -")
        return

    unit_label = "in" if height.unit is HeightUnit.INCHES else "cm"
    print(f"Hang time: {height.hang_time:.3f} s")
    print(f"Velocity:  {estimate_takeoff_velocity(height.hang_time):.2f} m/s")
    print(f"Height:    {height.value:.2f} {unit_label}")
    category = session.category
    if category is not None:
        print(f"Rating:    {category.value}")


def run_analysis(
    video: str,
    settings: Settings,
    takeoff: float | None = None,
    landing: float | None = None,
) -> int:
    """Analyze one clip and print the result.

    Manual marks skip automatic detection when both are given.

    Returns:
        Exit code: 0 success, 1 playback error, 2 analysis error,
        3 unexpected error, 130 interrupted
    """
    session = JumpSession(unit=settings.display.unit)

    if takeoff is not None and landing is not None:
        session.mark_takeoff(takeoff)
        session.mark_landing(landing)
        _print_report(session, None)
        return 0

    errors: list[str] = []
    detector = MotionJumpDetector(
        settings,
        on_progress=_log_progress,
        on_error=errors.append,
        on_event=session.apply_event,
    )

    try:
        with OpenCVVideoSource(video) as source:
            result = detector.detect_sync(source)

        for message in errors:
            print(f"Error: {message}", file=sys.stderr)

        if result.event is None:
            return 2

        _print_report(session, result)
        return 0

    except PlaybackError as e:
        logger.error("Playback failed: %s", e)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    except VertEstimatorError as e:
        logger.error("Analysis error: %s", e)
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 3


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Vert Estimator - Vertical jump height from video hang time"
    )
    parser.add_argument("video", help="Path to a video of the jump")
    parser.add_argument(
        "--unit",
        choices=["inches", "cm"],
        default=None,
        help="Height display unit",
    )
    parser.add_argument(
        "--sample-rate",
        type=int,
        choices=[30, 60, 120, 240],
        default=None,
        help="Frames per second sampled for motion analysis",
    )
    parser.add_argument(
        "--takeoff",
        type=float,
        default=None,
        help="Manual takeoff time in seconds (requires --landing)",
    )
    parser.add_argument(
        "--landing",
        type=float,
        default=None,
        help="Manual landing time in seconds (requires --takeoff)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if (args.takeoff is None) != (args.landing is None):
        parser.error("--takeoff and --landing must be given together")

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    settings = get_settings()
    updates: dict[str, object] = {}
    if args.unit is not None:
        updates["display"] = settings.display.model_copy(update={"unit": args.unit})
    if args.sample_rate is not None:
        updates["sampling"] = settings.sampling.model_copy(
            update={"sample_rate": args.sample_rate}
        )
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.logging.level, settings.logging.file)
    logger.info("Starting Vert Estimator")

    exit_code = run_analysis(args.video, settings, args.takeoff, args.landing)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
