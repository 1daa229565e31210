"""Exception hierarchy for the reading engine."""


class SpeedReadError(Exception):
    """Base exception for reading engine errors."""


class ExtractionError(SpeedReadError):
    """Raised when a document cannot be turned into text."""

    def __init__(self, message: str, file_name: str | None = None):
        self.file_name = file_name
        super().__init__(message)


class InvalidWpmError(SpeedReadError, ValueError):
    """Raised when a non-positive reading rate reaches the scheduler."""

    def __init__(self, wpm: int):
        self.wpm = wpm
        super().__init__(f"WPM must be positive, got {wpm}")
