"""
Upload session.

Runs one chunked upload: INIT, a serialized sequence of APPEND segments,
FINALIZE, then processing status polling when the server asks for it.
"""
import asyncio
import time
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from ..api.events import EventEmitter
from ..exceptions import TransportError
from ..logging import get_logger
from .commands import MediaCommand, append_command, finalize_command, init_command
from .completion import CompletionTracker
from .models import (
    MAX_FILE_CHUNK_BYTES,
    MediaDescriptor,
    MediaPolicy,
    ProcessingInfo,
    UploadConfig,
    UploadProgress,
    UploadResult,
)
from .poller import ProcessingPoller
from .protocols import ChunkSourceFactory, ChunkSourceProtocol, TransportProtocol
from .services import AsyncChunkReader, MediaClassifier

logger = get_logger('mediaupload.upload.session')

UploadCallback = Callable[[Optional[BaseException], Any, Any], None]


class SessionState(Enum):
    """Lifecycle of an upload session."""
    IDLE = 'idle'
    INITIALIZING = 'initializing'
    STREAMING = 'streaming'
    FINALIZING = 'finalizing'
    POLLING = 'polling'
    DONE = 'done'
    FAILED = 'failed'


class UploadSession:
    """
    Uploads one file through the chunked media protocol.
    
    Only one APPEND is ever outstanding: the chunk source is paused before
    each send and resumed after its response, so segment indices reach the
    server in read order. FINALIZE is sent once both the source is exhausted
    and the last APPEND was acknowledged, in whichever order those happen.
    
    Any failure ends the session; nothing is retried.
    
    Events:
        progress: UploadProgress after each acknowledged segment
        processing: ProcessingInfo for each in-progress STATUS response
    
    Example:
        >>> async with AsyncAPIClient(APIConfig.with_token(token)) as api:
        ...     session = UploadSession("clip.mp4", api)
        ...     result = await session.upload()
        ...     print(result.media_id)
    """
    
    def __init__(
        self,
        file_path: Union[str, Path],
        transport: TransportProtocol,
        chunk_size: int = MAX_FILE_CHUNK_BYTES,
        policy: Optional[MediaPolicy] = None,
        max_status_checks: Optional[int] = None,
        classifier: Optional[MediaClassifier] = None,
        source_factory: Optional[ChunkSourceFactory] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Initialize upload session.
        
        Args:
            file_path: File to upload
            transport: Transport issuing GET/POST to the media endpoint
            chunk_size: Maximum bytes per APPEND segment
            policy: MIME type policy table
            max_status_checks: Optional cap on processing STATUS checks
            classifier: Classifier override (defaults to one built from policy)
            source_factory: Chunk source factory (defaults to AsyncChunkReader)
            sleep: Delay function used between STATUS checks
        """
        self._config = UploadConfig(
            file_path=file_path,
            chunk_size=chunk_size,
            policy=policy or MediaPolicy.default(),
            max_status_checks=max_status_checks
        )
        self._transport = transport
        self._classifier = classifier or MediaClassifier(self._config.policy)
        self._source_factory = source_factory or AsyncChunkReader
        self._sleep = sleep
        self._events = EventEmitter()
        
        self._state = SessionState.IDLE
        self._media_id: Optional[str] = None
        self._segment_index = 0
        self._completion: Optional[CompletionTracker] = None
        self._ready: Optional[asyncio.Future] = None
        self._append_task: Optional[asyncio.Task] = None
        self._progress: Optional[UploadProgress] = None
    
    @classmethod
    def from_config(
        cls,
        config: UploadConfig,
        transport: TransportProtocol,
        **kwargs
    ) -> 'UploadSession':
        """Create a session from an UploadConfig."""
        return cls(
            config.file_path,
            transport,
            chunk_size=config.chunk_size,
            policy=config.policy,
            max_status_checks=config.max_status_checks,
            **kwargs
        )
    
    @property
    def file_path(self) -> Path:
        return self._config.file_path
    
    @property
    def state(self) -> SessionState:
        return self._state
    
    @property
    def media_id(self) -> Optional[str]:
        """Media id received from INIT, None before that."""
        return self._media_id
    
    def on(self, event: str, callback: Callable) -> 'UploadSession':
        """Register an event handler."""
        self._events.on(event, callback)
        return self
    
    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadSession':
        """Remove an event handler."""
        self._events.off(event, callback)
        return self
    
    async def upload(self) -> UploadResult:
        """
        Run the upload to completion.
        
        Returns:
            UploadResult with the media id and final response body
        
        Raises:
            OversizeError: If the file is too large for its media type
            FileAccessError: If the file cannot be stat'ed or read
            TransportError: If any request fails
            ProcessingFailedError: If server-side processing fails
        """
        if self._state is not SessionState.IDLE:
            raise RuntimeError(f"Upload session already {self._state.value}")
        
        start = time.time()
        try:
            result = await self._run()
        except Exception as e:
            self._state = SessionState.FAILED
            logger.error(f"Upload of {self.file_path.name} failed: {e}")
            raise
        
        self._state = SessionState.DONE
        logger.info(f"Upload of {self.file_path.name} completed in {time.time() - start:.2f}s: media {result.media_id}")
        return result
    
    def upload_with_callback(self, callback: UploadCallback) -> asyncio.Task:
        """
        Start the upload and report the outcome to a callback.
        
        The callback is invoked exactly once, as ``(error, None, None)`` on
        failure or ``(None, body, response)`` on success. Must be called
        from a running event loop.
        
        Returns:
            The task running the upload
        """
        task = asyncio.ensure_future(self.upload())
        
        def deliver(finished: asyncio.Task) -> None:
            if finished.cancelled():
                return
            error = finished.exception()
            if error is not None:
                callback(error, None, None)
            else:
                result = finished.result()
                callback(None, result.body, result.response)
        
        task.add_done_callback(deliver)
        return task
    
    async def _run(self) -> UploadResult:
        self._state = SessionState.INITIALIZING
        descriptor = self._classifier.classify(self.file_path)
        size_mb = descriptor.size_bytes / (1024 * 1024)
        logger.info(
            f"Starting upload: {self.file_path.name} ({size_mb:.2f} MB, "
            f"{descriptor.media_type}, category={descriptor.category.value if descriptor.category else None})"
        )
        
        body, _ = await self._send(init_command(descriptor))
        media_id = body.get('media_id_string') if isinstance(body, dict) else None
        if not media_id:
            raise TransportError("INIT response did not include media_id_string")
        self._media_id = media_id
        logger.info(f"INIT accepted, media id {media_id}")
        
        self._state = SessionState.STREAMING
        await self._stream(descriptor)
        
        self._state = SessionState.FINALIZING
        logger.info(f"All {self._segment_index} segments appended, sending FINALIZE")
        body, raw = await self._send(finalize_command(media_id))
        
        info = ProcessingInfo.from_response(body)
        if info is None:
            return UploadResult(media_id=media_id, body=body, response=raw)
        
        self._state = SessionState.POLLING
        logger.info(f"Media {media_id} is processing asynchronously ({info.state})")
        poller = ProcessingPoller(
            self._transport,
            max_status_checks=self._config.max_status_checks,
            on_progress=lambda progress: self._events.emit('processing', progress),
            sleep=self._sleep
        )
        body, raw = await poller.poll(media_id, info)
        return UploadResult(media_id=media_id, body=body, response=raw)
    
    async def _stream(self, descriptor: MediaDescriptor) -> None:
        """Append every chunk; returns once the upload is ready to finalize."""
        loop = asyncio.get_running_loop()
        self._completion = CompletionTracker()
        self._ready = loop.create_future()
        self._progress = UploadProgress(total_bytes=descriptor.size_bytes)
        
        source = self._source_factory(
            self.file_path,
            self._config.chunk_size,
            descriptor.size_bytes
        )
        async with source:
            pump = asyncio.ensure_future(self._pump(source))
            try:
                await self._ready
            finally:
                await self._cancel(pump)
                await self._cancel(self._append_task)
    
    async def _pump(self, source: ChunkSourceProtocol) -> None:
        """Feed chunks from the source, one outstanding APPEND at a time."""
        try:
            async for chunk in source:
                source.pause()
                self._completion.chunk_dispatched()
                self._append_task = asyncio.ensure_future(self._append(source, chunk))
            
            logger.debug(f"Chunk source exhausted after {self._progress.uploaded_bytes} acknowledged bytes")
            if self._completion.source_exhausted():
                self._signal_ready()
        except Exception as e:
            self._fail(e)
    
    async def _append(self, source: ChunkSourceProtocol, chunk: bytes) -> None:
        """Send one APPEND and advance the completion state."""
        index = self._segment_index
        chunk_start = time.time()
        try:
            await self._send(append_command(self._media_id, index, chunk))
        except Exception as e:
            logger.error(f"APPEND of segment {index} failed: {e}")
            self._fail(e)
            return
        
        self._segment_index += 1
        self._progress.uploaded_segments = self._segment_index
        self._progress.uploaded_bytes += len(chunk)
        
        elapsed = time.time() - chunk_start
        logger.debug(f"Segment {index} appended ({len(chunk) / 1024:.1f} KB in {elapsed:.2f}s)")
        
        try:
            self._events.emit('progress', self._progress)
            if self._completion.append_acknowledged():
                self._signal_ready()
            else:
                source.resume()
        except Exception as e:
            self._fail(e)
    
    async def _send(self, command: MediaCommand) -> Tuple[Any, Any]:
        logger.debug(f"Sending {command.name}")
        return await command.send(self._transport)
    
    def _signal_ready(self) -> None:
        if not self._ready.done():
            self._ready.set_result(None)
    
    def _fail(self, error: BaseException) -> None:
        if not self._ready.done():
            self._ready.set_exception(error)
    
    @staticmethod
    async def _cancel(task: Optional[asyncio.Future]) -> None:
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
