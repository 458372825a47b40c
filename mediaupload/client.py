"""
MediaClient - High-level async client for chunked media uploads.

Example:
    >>> async with MediaClient(token="...") as client:
    ...     result = await client.upload("clip.mp4")
    ...     print(result.media_id)
"""
from pathlib import Path
from typing import Optional, Union, Callable

from .core.api import AsyncAPIClient, APIConfig
from .core.upload import (
    UploadFacade,
    UploadResult,
    UploadProgress,
    ProcessingInfo,
    MediaPolicy,
    MediaDescriptor,
)
from .core.upload.models import MAX_FILE_CHUNK_BYTES
from .core.logging import get_logger

logger = get_logger('mediaupload')


class MediaClient:
    """
    High-level async client owning its HTTP transport.
    
    Supports two modes:
    
    1. Token (builds an APIConfig):
        >>> client = MediaClient(token="...")
    
    2. Explicit configuration:
        >>> client = MediaClient(config=APIConfig.with_proxy("http://proxy:8080", bearer_token="..."))
    """
    
    def __init__(
        self,
        token: Optional[str] = None,
        config: Optional[APIConfig] = None,
        policy: Optional[MediaPolicy] = None,
        chunk_size: int = MAX_FILE_CHUNK_BYTES
    ):
        """
        Initialize media client.
        
        Args:
            token: Bearer token (ignored when config is given)
            config: Full API configuration
            policy: Optional custom MIME type policy
            chunk_size: Maximum bytes per APPEND segment
        """
        if config is None:
            config = APIConfig.with_token(token) if token else APIConfig.default()
        self._config = config
        self._api = AsyncAPIClient(config)
        self._uploader = UploadFacade(
            self._api,
            policy=policy,
            chunk_size=chunk_size,
            log_level=config.log_level
        )
    
    @property
    def config(self) -> APIConfig:
        return self._config
    
    async def __aenter__(self) -> 'MediaClient':
        await self._api.__aenter__()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._api.close()
    
    def classify(self, file_path: Union[str, Path]) -> MediaDescriptor:
        """Classify a file (type, size, ceiling, category) without uploading."""
        return self._uploader.classify(file_path)
    
    async def upload(
        self,
        file_path: Union[str, Path],
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        processing_callback: Optional[Callable[[ProcessingInfo], None]] = None,
        max_status_checks: Optional[int] = None
    ) -> UploadResult:
        """
        Upload a file and wait for server-side processing.
        
        Args:
            file_path: Local file path
            progress_callback: Called after each appended segment
            processing_callback: Called with each in-progress processing status
            max_status_checks: Optional cap on processing status checks
            
        Returns:
            UploadResult; attach ``result.media_id`` to a later API call
            
        Example:
            await client.upload("photo.jpg")
            
            await client.upload("clip.mp4", processing_callback=lambda info: print(info.progress_percent))
        """
        logger.debug(f"Uploading {file_path}")
        return await self._uploader.upload(
            file_path,
            progress_callback=progress_callback,
            processing_callback=processing_callback,
            max_status_checks=max_status_checks
        )
