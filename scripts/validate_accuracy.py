#!/usr/bin/env python3
"""Validate automatic takeoff/landing detection.

Run detection over a set of clips and compare the resulting hang time and
jump height against hand-marked reference hang times.
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from vert_estimator.analysis.calculator import calculate_jump_height
from vert_estimator.core.config import get_settings
from vert_estimator.core.exceptions import VertEstimatorError
from vert_estimator.core.logging import get_logger, setup_logging
from vert_estimator.core.types import HeightUnit
from vert_estimator.pipeline.detector import MotionJumpDetector
from vert_estimator.video.source import OpenCVVideoSource

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single clip."""

    video: str
    measured_hang_time_s: float | None
    reference_hang_time_s: float
    measured_height_cm: float | None
    reference_height_cm: float
    used_fallback: bool

    @property
    def error_cm(self) -> float | None:
        if self.measured_height_cm is None:
            return None
        return self.measured_height_cm - self.reference_height_cm


@dataclass
class ValidationSummary:
    """Summary statistics for validation run."""

    total_clips: int
    detected_clips: int
    fallback_clips: int
    mean_absolute_error_cm: float | None
    std_error_cm: float | None
    max_error_cm: float | None


def load_reference_data(csv_path: Path) -> list[tuple[Path, float]]:
    """Load reference hang times from CSV.

    Expected format: video,reference_hang_time_s. Relative video paths are
    resolved against the CSV's directory.

    Args:
        csv_path: Path to CSV file

    Returns:
        List of (video_path, hang_time_s) tuples
    """
    references = []

    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            video = Path(row["video"])
            if not video.is_absolute():
                video = csv_path.parent / video
            references.append((video, float(row["reference_hang_time_s"])))

    logger.info("Loaded %d reference clips", len(references))
    return references


def validate_clip(
    video: Path,
    reference_hang_time: float,
    detector: MotionJumpDetector,
) -> ValidationResult:
    """Detect a jump in one clip and compare it to the reference."""
    reference_height = calculate_jump_height(0.0, reference_hang_time, HeightUnit.CENTIMETERS)
    measured_hang_time = None
    measured_height = None
    used_fallback = False

    try:
        with OpenCVVideoSource(video) as source:
            result = detector.detect_sync(source)
        if result.event is not None:
            measured_hang_time = result.event.hang_time
            measured_height = calculate_jump_height(
                result.event.takeoff_time,
                result.event.landing_time,
                HeightUnit.CENTIMETERS,
            )
            used_fallback = result.used_fallback
    except VertEstimatorError as e:
        logger.error("Skipping %s: %s", video, e)

    return ValidationResult(
        video=video.name,
        measured_hang_time_s=measured_hang_time,
        reference_hang_time_s=reference_hang_time,
        measured_height_cm=measured_height,
        reference_height_cm=reference_height or 0.0,
        used_fallback=used_fallback,
    )


def compute_summary(results: list[ValidationResult]) -> ValidationSummary:
    """Compute summary statistics over clips that were not fallbacks."""
    detected = [r for r in results if r.error_cm is not None and not r.used_fallback]
    errors = [abs(r.error_cm) for r in detected if r.error_cm is not None]

    return ValidationSummary(
        total_clips=len(results),
        detected_clips=len(detected),
        fallback_clips=sum(1 for r in results if r.used_fallback),
        mean_absolute_error_cm=float(np.mean(errors)) if errors else None,
        std_error_cm=float(np.std(errors)) if errors else None,
        max_error_cm=max(errors) if errors else None,
    )


def print_results(results: list[ValidationResult], summary: ValidationSummary) -> None:
    """Print validation results to console."""
    print("\n" + "=" * 72)
    print("VALIDATION RESULTS")
    print("=" * 72)
    print(f"{'Clip':<24} {'Hang (s)':<10} {'Ref (s)':<10} {'Height':<10} {'Error':<10} Note")
    print("-" * 72)

    for r in results:
        hang = r.measured_hang_time_s
        hang_str = f"{hang:.3f}" if hang is not None else "N/A"
        height_str = f"{r.measured_height_cm:.1f}" if r.measured_height_cm is not None else "N/A"
        err_str = f"{r.error_cm:+.1f}" if r.error_cm is not None else "N/A"
        note = "fallback" if r.used_fallback else ""
        print(
            f"{r.video:<24} {hang_str:<10} {r.reference_hang_time_s:<10.3f} "
            f"{height_str:<10} {err_str:<10} {note}"
        )

    print("\n" + "=" * 72)
    print("SUMMARY")
    print("=" * 72)
    print(f"Clips:               {summary.total_clips}")
    print(f"Detected:            {summary.detected_clips}")
    print(f"Fell back:           {summary.fallback_clips}")

    if summary.mean_absolute_error_cm is not None:
        print(f"\nMean Absolute Error: {summary.mean_absolute_error_cm:.2f} cm")
        print(f"Std Dev Error:       {summary.std_error_cm:.2f} cm")
        print(f"Max Error:           {summary.max_error_cm:.2f} cm")


def main() -> int:
    """Run validation script."""
    parser = argparse.ArgumentParser(description="Validate automatic jump detection")
    parser.add_argument(
        "reference",
        type=Path,
        help="CSV with columns video,reference_hang_time_s",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output CSV for results",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level)

    if not args.reference.exists():
        logger.error("Reference file not found: %s", args.reference)
        return 1

    detector = MotionJumpDetector(settings)
    results = [
        validate_clip(video, hang_time, detector)
        for video, hang_time in load_reference_data(args.reference)
    ]
    summary = compute_summary(results)
    print_results(results, summary)

    if args.output:
        with open(args.output, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(
                ["video", "measured_hang_s", "reference_hang_s", "measured_cm", "error_cm"]
            )
            for r in results:
                writer.writerow(
                    [
                        r.video,
                        "" if r.measured_hang_time_s is None else r.measured_hang_time_s,
                        r.reference_hang_time_s,
                        "" if r.measured_height_cm is None else r.measured_height_cm,
                        "" if r.error_cm is None else r.error_cm,
                    ]
                )
        logger.info("Results saved to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
