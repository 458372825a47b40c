"""
Upload module for chunked media uploads.

INIT, serialized APPEND segments, FINALIZE, and processing status polling.
"""
from .facade import UploadFacade
from .session import UploadSession, SessionState
from .poller import ProcessingPoller
from .completion import CompletionTracker, CompletionState
from .commands import (
    MediaCommand,
    init_command,
    append_command,
    finalize_command,
    status_command
)
from .models import (
    MediaCategory,
    MediaRule,
    MediaPolicy,
    MediaDescriptor,
    ProcessingState,
    ProcessingInfo,
    UploadConfig,
    UploadResult,
    UploadProgress
)
from .protocols import (
    TransportProtocol,
    ChunkSourceProtocol,
    ChunkSourceFactory,
    FileValidatorProtocol,
    MediaTypeResolverProtocol
)

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadSession',
    'SessionState',
    'ProcessingPoller',
    'CompletionTracker',
    'CompletionState',
    
    # Commands
    'MediaCommand',
    'init_command',
    'append_command',
    'finalize_command',
    'status_command',
    
    # Models
    'MediaCategory',
    'MediaRule',
    'MediaPolicy',
    'MediaDescriptor',
    'ProcessingState',
    'ProcessingInfo',
    'UploadConfig',
    'UploadResult',
    'UploadProgress',
    
    # Protocols
    'TransportProtocol',
    'ChunkSourceProtocol',
    'ChunkSourceFactory',
    'FileValidatorProtocol',
    'MediaTypeResolverProtocol',
]
