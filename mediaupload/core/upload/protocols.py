"""
Protocol definitions for upload module.

Defines the collaborators the upload session depends on, so transports,
file readers and MIME lookups can be swapped or faked in tests.
"""
from typing import Protocol, Dict, Any, Tuple, Optional, AsyncIterator, Union
from pathlib import Path


class TransportProtocol(Protocol):
    """
    Protocol for the HTTP/API transport.
    
    Both calls return ``(parsed_body, raw_response)`` and raise
    TransportError on any failure.
    """
    
    async def get(self, endpoint: str, params: Dict[str, Any]) -> Tuple[Any, Any]:
        """Send a GET request."""
        ...
    
    async def post(self, endpoint: str, params: Dict[str, Any]) -> Tuple[Any, Any]:
        """Send a POST request."""
        ...


class ChunkSourceProtocol(Protocol):
    """
    Protocol for chunked file sources.
    
    An async iterator of byte chunks used as an async context manager.
    ``pause()`` holds back the next chunk until ``resume()`` is called.
    """
    
    async def __aenter__(self) -> 'ChunkSourceProtocol':
        ...
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...
    
    def __aiter__(self) -> AsyncIterator[bytes]:
        ...
    
    async def __anext__(self) -> bytes:
        ...
    
    def pause(self) -> None:
        """Stop producing chunks."""
        ...
    
    def resume(self) -> None:
        """Resume producing chunks."""
        ...


class ChunkSourceFactory(Protocol):
    """Creates a chunk source for a file."""
    
    def __call__(
        self,
        file_path: Path,
        chunk_size: int,
        total_bytes: Optional[int] = None
    ) -> ChunkSourceProtocol:
        ...


class FileValidatorProtocol(Protocol):
    """Protocol for file validation operations."""
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated path, file size)
            
        Raises:
            FileAccessError: If the file cannot be stat'ed
        """
        ...


class MediaTypeResolverProtocol(Protocol):
    """Protocol for MIME type lookup from a file name."""
    
    def resolve(self, file_path: Union[str, Path]) -> str:
        """Returns the MIME type (application/octet-stream when unknown)."""
        ...
