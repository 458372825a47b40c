"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Optional, Union
import asyncio
import mimetypes
import aiofiles

from ...exceptions import FileAccessError
from ...logging import get_logger
from ..models import MAX_FILE_CHUNK_BYTES


class FileValidator:
    """
    Validates files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileAccessError: If the file is missing, not a regular file, or cannot be stat'ed
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        try:
            stat = path.stat()
        except OSError as e:
            raise FileAccessError(f"Cannot access file: {path} ({e})", path) from e
        
        if not path.is_file():
            raise FileAccessError(f"Path is not a file: {path}", path)
        
        return path, stat.st_size


class MediaTypeResolver:
    """MIME type lookup from the file extension."""
    
    DEFAULT_TYPE = 'application/octet-stream'
    
    def __init__(self):
        # Not registered by default on older interpreters
        mimetypes.add_type('image/webp', '.webp')
    
    def resolve(self, file_path: Union[str, Path]) -> str:
        media_type, _ = mimetypes.guess_type(str(file_path))
        return media_type or self.DEFAULT_TYPE


class AsyncChunkReader:
    """
    Asynchronous chunk source over a file.
    
    Uses aiofiles for non-blocking reads. Yields chunks of at most
    ``chunk_size`` bytes in file order. While paused, the next read waits
    until ``resume()`` is called, so at most one unread chunk is held.
    
    When ``total_bytes`` is known the source reports exhaustion as soon as
    that many bytes were produced, without waiting for another read.
    
    Example:
        >>> async with AsyncChunkReader(path, 5 * 1024 * 1024) as reader:
        ...     async for chunk in reader:
        ...         reader.pause()
        ...         await send(chunk)
        ...         reader.resume()
    """
    
    def __init__(
        self,
        file_path: Union[str, Path],
        chunk_size: int = MAX_FILE_CHUNK_BYTES,
        total_bytes: Optional[int] = None
    ):
        """
        Initialize file reader.
        
        Args:
            file_path: File to read
            chunk_size: Maximum bytes per chunk
            total_bytes: Expected file size, if already known
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self._file_path = Path(file_path)
        self._chunk_size = chunk_size
        self._total_bytes = total_bytes
        self._position = 0
        self._file_handle = None
        self._flowing = asyncio.Event()
        self._flowing.set()
        self._logger = get_logger('mediaupload.upload.file')
    
    @property
    def position(self) -> int:
        """Bytes produced so far."""
        return self._position
    
    @property
    def paused(self) -> bool:
        return not self._flowing.is_set()
    
    def pause(self) -> None:
        self._flowing.clear()
    
    def resume(self) -> None:
        self._flowing.set()
    
    async def open(self) -> None:
        """
        Open the file for reading.
        
        Raises:
            FileAccessError: If the file cannot be opened
        """
        if self._file_handle is not None:
            return
        try:
            self._file_handle = await aiofiles.open(self._file_path, 'rb')
        except OSError as e:
            raise FileAccessError(f"Cannot open file: {self._file_path} ({e})", self._file_path) from e
        self._logger.debug(f"Opened {self._file_path} for chunked reading ({self._chunk_size} bytes per chunk)")
    
    async def close(self) -> None:
        """Close the currently open file."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None
    
    async def __aenter__(self) -> 'AsyncChunkReader':
        await self.open()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
    
    def __aiter__(self) -> 'AsyncChunkReader':
        return self
    
    async def __anext__(self) -> bytes:
        if self._total_bytes is not None and self._position >= self._total_bytes:
            raise StopAsyncIteration
        
        await self._flowing.wait()
        
        if self._file_handle is None:
            await self.open()
        
        try:
            data = await self._file_handle.read(self._next_read_size())
        except OSError as e:
            self._logger.error(f"Failed to read {self._file_path} at {self._position}: {e}")
            raise FileAccessError(f"Cannot read file: {self._file_path} ({e})", self._file_path) from e
        
        if not data:
            raise StopAsyncIteration
        
        start = self._position
        self._position += len(data)
        self._logger.debug(f"Read chunk: {start}-{self._position} ({len(data)} bytes)")
        return data
    
    def _next_read_size(self) -> int:
        # Never read past the size the upload was declared with
        if self._total_bytes is None:
            return self._chunk_size
        return min(self._chunk_size, self._total_bytes - self._position)
