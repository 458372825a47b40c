"""Upload models."""
from .upload_models import (
    MediaCategory,
    MediaRule,
    MediaPolicy,
    MediaDescriptor,
    ProcessingState,
    ProcessingInfo,
    UploadConfig,
    UploadResult,
    UploadProgress,
    MAX_FILE_SIZE_BYTES,
    MAX_VIDEO_SIZE_BYTES,
    MAX_FILE_CHUNK_BYTES,
)

__all__ = [
    'MediaCategory',
    'MediaRule',
    'MediaPolicy',
    'MediaDescriptor',
    'ProcessingState',
    'ProcessingInfo',
    'UploadConfig',
    'UploadResult',
    'UploadProgress',
    'MAX_FILE_SIZE_BYTES',
    'MAX_VIDEO_SIZE_BYTES',
    'MAX_FILE_CHUNK_BYTES',
]
