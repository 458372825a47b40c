"""
Custom exceptions for media upload operations.

Every failure terminates the upload session and is surfaced once to the caller.
"""
from typing import Optional, Any


class MediaUploadException(Exception):
    """Base exception for all mediaupload errors."""
    pass


class OversizeError(MediaUploadException):
    """Raised when a file is at or above the size ceiling for its media type."""
    
    def __init__(self, limit: int, size: int) -> None:
        """
        Initialize the exception.
        
        Args:
            limit: Maximum allowed size in bytes (exclusive)
            size: Actual file size in bytes
        """
        self.limit = limit
        self.size = size
        super().__init__(
            f"This file is too large. Max size is {limit}B. Got: {size}B."
        )


class FileAccessError(MediaUploadException):
    """Raised when the file cannot be stat'ed or read."""
    
    def __init__(self, message: str, path: Optional[Any] = None) -> None:
        self.path = path
        super().__init__(message)


class TransportError(MediaUploadException):
    """
    Raised when a request to the media endpoint fails.
    
    The underlying cause (network error, HTTP error) is kept on ``cause``
    and chained with ``raise ... from``.
    """
    
    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class ProcessingFailedError(MediaUploadException):
    """Raised when the server reports that async media processing failed."""
    
    def __init__(self, message: str, media_id: Optional[str] = None) -> None:
        self.media_id = media_id
        super().__init__(message)


class ProcessingTimeoutError(ProcessingFailedError):
    """Raised when processing is still pending after the configured number of status checks."""
    
    def __init__(self, checks: int, media_id: Optional[str] = None) -> None:
        self.checks = checks
        super().__init__(
            f"Media {media_id} still processing after {checks} status checks",
            media_id
        )
