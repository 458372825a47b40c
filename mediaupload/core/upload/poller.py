"""
Processing status poller.

After FINALIZE, media the server processes asynchronously (video, GIF) is
polled with STATUS until it succeeds or fails, waiting between checks as the
server suggests.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional, Tuple

from ..exceptions import ProcessingFailedError, ProcessingTimeoutError
from ..logging import get_logger
from .commands import status_command
from .models import ProcessingInfo, ProcessingState
from .protocols import TransportProtocol

logger = get_logger('mediaupload.upload.poller')


class ProcessingPoller:
    """
    Polls STATUS until processing settles.
    
    The first wait uses ``check_after_secs`` from the FINALIZE response or
    5 seconds; later waits use the STATUS hint or 3 seconds. Polling is
    unbounded unless ``max_status_checks`` is set.
    """
    
    FIRST_CHECK_DELAY = 5
    NEXT_CHECK_DELAY = 3
    
    def __init__(
        self,
        transport: TransportProtocol,
        max_status_checks: Optional[int] = None,
        on_progress: Optional[Callable[[ProcessingInfo], None]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Initialize poller.
        
        Args:
            transport: Transport used for STATUS requests
            max_status_checks: Optional cap on STATUS requests
            on_progress: Called with each in-progress ProcessingInfo
            sleep: Awaitable delay function
        """
        self._transport = transport
        self._max_status_checks = max_status_checks
        self._on_progress = on_progress
        self._sleep = sleep
    
    async def poll(self, media_id: str, initial_info: ProcessingInfo) -> Tuple[Any, Any]:
        """
        Poll until the server reports a terminal state.
        
        Args:
            media_id: Media id from INIT
            initial_info: processing_info decoded from the FINALIZE response
            
        Returns:
            Tuple of (last STATUS body, raw response)
            
        Raises:
            ProcessingFailedError: If processing failed or reported an unknown state
            ProcessingTimeoutError: If max_status_checks was reached
            TransportError: If a STATUS request failed
        """
        delay = self._wait_time(initial_info, self.FIRST_CHECK_DELAY)
        checks = 0
        
        while True:
            if self._max_status_checks is not None and checks >= self._max_status_checks:
                logger.error(f"Media {media_id} still processing after {checks} status checks")
                raise ProcessingTimeoutError(checks, media_id)
            
            logger.debug(f"Checking status of media {media_id} in {delay}s")
            await self._sleep(delay)
            
            body, raw = await status_command(media_id).send(self._transport)
            checks += 1
            
            info = ProcessingInfo.from_response(body)
            if info is None:
                # Nothing left to process
                logger.info(f"Media {media_id} status has no processing_info, treating as succeeded")
                return body, raw
            
            state = info.processing_state
            if state is None:
                logger.error(f"Media {media_id} reported unknown processing state: {info.state}")
                raise ProcessingFailedError(f"Unknown processing state: {info.state}", media_id)
            
            if not state.is_active:
                if state is ProcessingState.FAILED:
                    message = info.error_message or 'Media processing failed'
                    logger.error(f"Media {media_id} processing failed: {message}")
                    raise ProcessingFailedError(message, media_id)
                logger.info(f"Media {media_id} processing succeeded after {checks} status checks")
                return body, raw
            
            logger.info(f"Media {media_id} processing: {info.progress_percent}%")
            if self._on_progress:
                self._on_progress(info)
            
            delay = self._wait_time(info, self.NEXT_CHECK_DELAY)
    
    @staticmethod
    def _wait_time(info: ProcessingInfo, default: float) -> float:
        return info.check_after_secs if info.check_after_secs else default
