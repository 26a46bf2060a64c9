from typing import Optional


class FlashdeckError(Exception):
    """Base exception for flashdeck errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FlashdeckError):
    """Raised when required input is missing or invalid."""

    pass


class NotFoundError(FlashdeckError):
    """Raised when an id does not resolve to a record."""

    pass


class StorageError(FlashdeckError):
    """Raised when the database or the media directory fails."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class StudySessionError(FlashdeckError):
    """Raised for study session operations invalid in the current state."""

    pass
