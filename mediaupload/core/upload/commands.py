"""
Media upload protocol commands.

Pure request shaping for INIT, APPEND, FINALIZE and STATUS. Field names are
part of the wire contract.
"""
import base64
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple

from ..api.config import MEDIA_UPLOAD_ENDPOINT
from .models import MediaDescriptor
from .protocols import TransportProtocol


@dataclass(frozen=True)
class MediaCommand:
    """
    A request to the media upload endpoint.
    
    Attributes:
        method: 'GET' or 'POST'
        params: Request parameters
        endpoint: Endpoint identifier passed to the transport
    """
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    endpoint: str = MEDIA_UPLOAD_ENDPOINT
    
    @property
    def name(self) -> str:
        return self.params.get('command', '')
    
    async def send(self, transport: TransportProtocol) -> Tuple[Any, Any]:
        """Issue this command over a transport."""
        if self.method == 'GET':
            return await transport.get(self.endpoint, self.params)
        return await transport.post(self.endpoint, self.params)


def init_command(descriptor: MediaDescriptor) -> MediaCommand:
    """INIT: announce type and size; category only when known."""
    params = {
        'command': 'INIT',
        'media_type': descriptor.media_type,
        'total_bytes': descriptor.size_bytes,
    }
    if descriptor.category is not None:
        params['media_category'] = descriptor.category.value
    return MediaCommand('POST', params)


def append_command(media_id: Any, segment_index: int, chunk: bytes) -> MediaCommand:
    """APPEND: one base64-encoded segment."""
    return MediaCommand('POST', {
        'command': 'APPEND',
        'media_id': str(media_id),
        'segment_index': segment_index,
        'media': base64.b64encode(chunk).decode('ascii'),
    })


def finalize_command(media_id: Any) -> MediaCommand:
    return MediaCommand('POST', {
        'command': 'FINALIZE',
        'media_id': media_id,
    })


def status_command(media_id: Any) -> MediaCommand:
    return MediaCommand('GET', {
        'command': 'STATUS',
        'media_id': media_id,
    })
