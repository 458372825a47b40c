"""Upload services module."""
from .file_service import FileValidator, MediaTypeResolver, AsyncChunkReader
from .classifier import MediaClassifier

__all__ = [
    'FileValidator',
    'MediaTypeResolver',
    'AsyncChunkReader',
    'MediaClassifier',
]
