"""Media API transport module."""
from .errors import MediaAPIError, HTTPStatusMessages
from .events import EventEmitter
from .config import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    MEDIA_UPLOAD_ENDPOINT
)
from .async_client import AsyncAPIClient, RawResponse

__all__ = [
    # Async client
    'AsyncAPIClient',
    'RawResponse',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'MEDIA_UPLOAD_ENDPOINT',
    
    # Errors
    'MediaAPIError',
    'HTTPStatusMessages',
    
    # Events
    'EventEmitter',
]
