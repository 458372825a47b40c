"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional
from pathlib import Path

KB = 1024
MB = 1024 * KB

MAX_FILE_SIZE_BYTES = 15 * MB
MAX_VIDEO_SIZE_BYTES = 512 * MB
MAX_FILE_CHUNK_BYTES = 5 * MB


class MediaCategory(str, Enum):
    """Server-side handling hint sent with INIT."""
    IMAGE = 'tweet_image'
    GIF = 'tweet_gif'
    VIDEO = 'tweet_video'


@dataclass(frozen=True)
class MediaRule:
    """
    Upload policy for one MIME type.
    
    Attributes:
        category: Category sent with INIT (None omits the field)
        max_bytes: Size ceiling; files at or above it are rejected
    """
    category: Optional[MediaCategory]
    max_bytes: int


@dataclass
class MediaPolicy:
    """
    MIME type to upload policy table.
    
    Unknown MIME types get no category and the default ceiling. New media
    types are added as entries, not as branches.
    
    Example:
        >>> policy = MediaPolicy.default()
        >>> policy.rule_for('video/mp4').max_bytes
        536870912
        >>> policy.with_rule('video/quicktime', MediaCategory.VIDEO, 512 * MB)
    """
    rules: Dict[str, MediaRule] = field(default_factory=dict)
    default_max_bytes: int = MAX_FILE_SIZE_BYTES
    
    @classmethod
    def default(cls) -> 'MediaPolicy':
        """Create the standard image/gif/video policy."""
        return cls(rules={
            'image/png': MediaRule(MediaCategory.IMAGE, MAX_FILE_SIZE_BYTES),
            'image/jpeg': MediaRule(MediaCategory.IMAGE, MAX_FILE_SIZE_BYTES),
            'image/webp': MediaRule(MediaCategory.IMAGE, MAX_FILE_SIZE_BYTES),
            'image/gif': MediaRule(MediaCategory.GIF, MAX_FILE_SIZE_BYTES),
            'video/mp4': MediaRule(MediaCategory.VIDEO, MAX_VIDEO_SIZE_BYTES),
        })
    
    def rule_for(self, media_type: Optional[str]) -> MediaRule:
        """Returns the rule for a MIME type, falling back to the default ceiling."""
        rule = self.rules.get(media_type) if media_type else None
        if rule is None:
            return MediaRule(None, self.default_max_bytes)
        return rule
    
    def with_rule(
        self,
        media_type: str,
        category: Optional[MediaCategory],
        max_bytes: int
    ) -> 'MediaPolicy':
        """Add or replace a rule; returns self for chaining."""
        self.rules[media_type] = MediaRule(category, max_bytes)
        return self


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Classification of a file to upload.
    
    Attributes:
        media_type: MIME type derived from the file name
        size_bytes: File size in bytes
        max_allowed_bytes: Ceiling applied to this media type
        category: INIT media_category, or None
    """
    media_type: str
    size_bytes: int
    max_allowed_bytes: int
    category: Optional[MediaCategory] = None


class ProcessingState(str, Enum):
    """Async processing states reported in ``processing_info.state``."""
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    FAILED = 'failed'
    SUCCEEDED = 'succeeded'
    
    @property
    def is_active(self) -> bool:
        """True while the server is still working on the media."""
        return self in (ProcessingState.PENDING, ProcessingState.IN_PROGRESS)


@dataclass(frozen=True)
class ProcessingInfo:
    """
    Server-reported processing status from a FINALIZE or STATUS response.
    
    ``state`` keeps the raw string so unknown states can be reported.
    """
    state: str
    check_after_secs: Optional[float] = None
    progress_percent: Optional[int] = None
    error_message: Optional[str] = None
    
    @classmethod
    def from_response(cls, body: Any) -> Optional['ProcessingInfo']:
        """Decode ``processing_info`` from a response body, None when absent."""
        if not isinstance(body, dict):
            return None
        info = body.get('processing_info')
        if not info:
            return None
        
        error = info.get('error') or {}
        return cls(
            state=info.get('state', ''),
            check_after_secs=info.get('check_after_secs'),
            progress_percent=info.get('progress_percent'),
            error_message=error.get('message') if isinstance(error, dict) else str(error)
        )
    
    @property
    def processing_state(self) -> Optional[ProcessingState]:
        """Parsed state, or None for states this client does not know."""
        try:
            return ProcessingState(self.state)
        except ValueError:
            return None


@dataclass
class UploadConfig:
    """
    Configuration for a media upload.
    
    Attributes:
        file_path: Path to file to upload
        chunk_size: Maximum bytes per APPEND segment
        policy: MIME type policy table
        max_status_checks: Stop polling after this many STATUS requests (None polls until done)
    """
    file_path: Path
    chunk_size: int = MAX_FILE_CHUNK_BYTES
    policy: MediaPolicy = field(default_factory=MediaPolicy.default)
    max_status_checks: Optional[int] = None
    
    def __post_init__(self):
        """Validate and normalize config."""
        if isinstance(self.file_path, str):
            self.file_path = Path(self.file_path)
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        if self.max_status_checks is not None and self.max_status_checks <= 0:
            raise ValueError("max_status_checks must be positive")


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.
    
    Attributes:
        media_id: Media id to attach to a later API call
        body: Final parsed response body (FINALIZE or last STATUS)
        response: Raw transport response
    """
    media_id: str
    body: Dict[str, Any] = field(default_factory=dict)
    response: Any = None
    
    @property
    def processing_info(self) -> Optional[ProcessingInfo]:
        """Processing info from the final body, if any."""
        return ProcessingInfo.from_response(self.body)


@dataclass
class UploadProgress:
    """
    Upload progress information.
    
    Attributes:
        total_bytes: Total file size
        uploaded_segments: Number of APPEND segments acknowledged
        uploaded_bytes: Bytes acknowledged so far
    """
    total_bytes: int
    uploaded_segments: int = 0
    uploaded_bytes: int = 0
    
    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 100.0
        return (self.uploaded_bytes / self.total_bytes) * 100
