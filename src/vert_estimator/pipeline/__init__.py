"""Detection pipeline orchestration and jump session state."""

from vert_estimator.pipeline.detector import MotionJumpDetector, detect_jump
from vert_estimator.pipeline.session import JumpSession

__all__ = ["MotionJumpDetector", "JumpSession", "detect_jump"]
