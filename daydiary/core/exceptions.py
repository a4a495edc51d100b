"""
Custom application exceptions.
"""

class DiaryAppException(Exception):
    """Base exception for the diary app."""
    pass


class ValidationError(DiaryAppException):
    """Raised when a request is missing required fields or carries invalid values."""
    pass


class EntryNotFoundError(DiaryAppException):
    """Raised when no entry exists for a date."""
    pass


class MediaNotFoundError(DiaryAppException):
    """Raised when a media item is not found."""
    pass


class MediaHostError(DiaryAppException):
    """Raised when the external media host rejects or fails a call."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MediaHostNotConfiguredError(MediaHostError):
    """Raised when media host credentials are missing."""
    pass


class ChatProviderError(DiaryAppException):
    """Raised when the chat completion provider fails."""
    pass
