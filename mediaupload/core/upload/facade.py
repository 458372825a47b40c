"""
Upload facade.

Provides a simplified interface for media uploads.
Follows Facade Pattern - hides the session, poller and classifier wiring.
"""
from pathlib import Path
from typing import Optional, Union, Callable
import logging

from .session import UploadSession, UploadCallback
from .models import UploadResult, UploadProgress, ProcessingInfo, MediaPolicy, MediaDescriptor, MAX_FILE_CHUNK_BYTES
from .protocols import TransportProtocol
from .services import MediaClassifier


class UploadFacade:
    """
    Simplified interface for chunked media uploads.
    
    This is the main entry point for uploading files over an existing
    transport.
    
    Example:
        >>> from mediaupload.core.upload import UploadFacade
        >>> uploader = UploadFacade(api_client)
        >>> result = await uploader.upload("clip.mp4")
        >>> print(f"Uploaded: {result.media_id}")
    """
    
    def __init__(
        self,
        transport: TransportProtocol,
        policy: Optional[MediaPolicy] = None,
        chunk_size: int = MAX_FILE_CHUNK_BYTES,
        log_level: int = logging.INFO
    ):
        """
        Initialize upload facade.
        
        Args:
            transport: Transport used for every request
            policy: Optional custom MIME type policy
            chunk_size: Maximum bytes per APPEND segment
            log_level: Logging level
        """
        self._logger = logging.getLogger('mediaupload.upload')
        self._logger.setLevel(log_level)
        
        self._transport = transport
        self._policy = policy or MediaPolicy.default()
        self._chunk_size = chunk_size
    
    def classify(self, file_path: Union[str, Path]) -> MediaDescriptor:
        """Classify a file without uploading it."""
        return MediaClassifier(self._policy).classify(file_path)
    
    def create_session(
        self,
        file_path: Union[str, Path],
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        processing_callback: Optional[Callable[[ProcessingInfo], None]] = None,
        max_status_checks: Optional[int] = None
    ) -> UploadSession:
        """Create an upload session with callbacks registered."""
        session = UploadSession(
            file_path,
            self._transport,
            chunk_size=self._chunk_size,
            policy=self._policy,
            max_status_checks=max_status_checks
        )
        if progress_callback:
            session.on('progress', progress_callback)
        if processing_callback:
            session.on('processing', processing_callback)
        return session
    
    async def upload(
        self,
        file_path: Union[str, Path],
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        processing_callback: Optional[Callable[[ProcessingInfo], None]] = None,
        max_status_checks: Optional[int] = None
    ) -> UploadResult:
        """
        Upload a file.
        
        Args:
            file_path: Path to file to upload
            progress_callback: Called after each appended segment
            processing_callback: Called with each in-progress processing status
            max_status_checks: Optional cap on processing status checks
            
        Returns:
            UploadResult with the media id
        """
        session = self.create_session(
            file_path,
            progress_callback=progress_callback,
            processing_callback=processing_callback,
            max_status_checks=max_status_checks
        )
        return await session.upload()
    
    def upload_with_callback(self, file_path: Union[str, Path], callback: UploadCallback):
        """Start an upload reporting ``(error, body, response)`` to a callback once."""
        return self.create_session(file_path).upload_with_callback(callback)
