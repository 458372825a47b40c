"""
mediaupload - Async Python library for chunked media uploads.

Usage:
    >>> from mediaupload import MediaClient
    >>> 
    >>> async with MediaClient(token="...") as client:
    ...     result = await client.upload("clip.mp4")
    ...     print(result.media_id)
"""
from .client import MediaClient

from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    RawResponse,
    MediaAPIError
)

from .core.upload import (
    UploadFacade,
    UploadSession,
    ProcessingPoller,
    MediaCategory,
    MediaPolicy,
    MediaDescriptor,
    ProcessingInfo,
    ProcessingState,
    UploadConfig,
    UploadResult,
    UploadProgress
)

from .core.exceptions import (
    MediaUploadException,
    OversizeError,
    FileAccessError,
    TransportError,
    ProcessingFailedError,
    ProcessingTimeoutError
)

from .core.logging import setup_logging, get_logger

__version__ = '1.0.0'


__all__ = [
    'MediaClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'RawResponse',
    'MediaAPIError',
    'UploadFacade',
    'UploadSession',
    'ProcessingPoller',
    'MediaCategory',
    'MediaPolicy',
    'MediaDescriptor',
    'ProcessingInfo',
    'ProcessingState',
    'UploadConfig',
    'UploadResult',
    'UploadProgress',
    'MediaUploadException',
    'OversizeError',
    'FileAccessError',
    'TransportError',
    'ProcessingFailedError',
    'ProcessingTimeoutError',
    'setup_logging',
    'get_logger',
]
