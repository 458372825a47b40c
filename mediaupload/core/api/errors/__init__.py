"""Media API errors and exceptions."""
from .api_errors import MediaAPIError, HTTPStatusMessages

__all__ = [
    'MediaAPIError',
    'HTTPStatusMessages',
]
