"""
Media classification service.

Decides the size ceiling and INIT category for a file from the policy table.
"""
from pathlib import Path
from typing import Optional, Union

from ...exceptions import OversizeError
from ...logging import get_logger
from ..models import MediaDescriptor, MediaPolicy
from ..protocols import FileValidatorProtocol, MediaTypeResolverProtocol
from .file_service import FileValidator, MediaTypeResolver


class MediaClassifier:
    """
    Classifies a file before INIT.
    
    Responsibilities:
    - Look up the MIME type from the file name
    - Stat the file size
    - Apply the policy ceiling and category
    """
    
    def __init__(
        self,
        policy: Optional[MediaPolicy] = None,
        validator: Optional[FileValidatorProtocol] = None,
        resolver: Optional[MediaTypeResolverProtocol] = None
    ):
        self._policy = policy or MediaPolicy.default()
        self._validator = validator or FileValidator()
        self._resolver = resolver or MediaTypeResolver()
        self._logger = get_logger('mediaupload.upload')
    
    @property
    def policy(self) -> MediaPolicy:
        return self._policy
    
    def classify(self, file_path: Union[str, Path]) -> MediaDescriptor:
        """
        Classify a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            MediaDescriptor with type, size, ceiling and category
            
        Raises:
            FileAccessError: If the file cannot be stat'ed
            OversizeError: If the size is at or above the ceiling
        """
        path, size = self._validator.validate(file_path)
        media_type = self._resolver.resolve(path)
        rule = self._policy.rule_for(media_type)
        
        if size >= rule.max_bytes:
            self._logger.error(f"{path.name} is {size} bytes, limit for {media_type} is {rule.max_bytes}")
            raise OversizeError(rule.max_bytes, size)
        
        descriptor = MediaDescriptor(
            media_type=media_type,
            size_bytes=size,
            max_allowed_bytes=rule.max_bytes,
            category=rule.category
        )
        self._logger.debug(f"Classified {path.name}: {descriptor}")
        return descriptor
