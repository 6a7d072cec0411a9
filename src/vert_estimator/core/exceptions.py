"""Custom exceptions for Vert Estimator."""


class VertEstimatorError(Exception):
    """Base exception for all Vert Estimator errors."""

    pass


class PlaybackError(VertEstimatorError):
    """Video could not be loaded or is missing."""

    def __init__(self, message: str = "Video could not be loaded") -> None:
        self.message = message
        super().__init__(self.message)


class AcquisitionError(VertEstimatorError):
    """No usable raster surface could be obtained for frame capture."""

    def __init__(self, message: str = "Could not acquire a frame surface") -> None:
        self.message = message
        super().__init__(self.message)


class FrameDecodeError(VertEstimatorError):
    """Seeking to a timestamp did not produce a frame."""

    def __init__(self, message: str = "Frame could not be decoded") -> None:
        self.message = message
        super().__init__(self.message)


class RuntimeDetectionError(VertEstimatorError):
    """Unexpected failure while sampling frames for motion detection."""

    def __init__(self, message: str = "Motion detection failed") -> None:
        self.message = message
        super().__init__(self.message)


class JumpHeightError(VertEstimatorError):
    """Invalid arguments for the jump height calculation."""

    def __init__(self, message: str = "Invalid jump height request") -> None:
        self.message = message
        super().__init__(self.message)
