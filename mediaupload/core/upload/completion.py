"""
Completion detection for the streaming phase.

Joins two independent signals, "chunk source exhausted" and "last APPEND
acknowledged", into a single transition to FINALIZING. Both can arrive in
either order; whichever arrives last triggers finalize, and only once.
"""
from enum import Enum


class CompletionState(Enum):
    """Streaming phase states."""
    STREAMING = 'streaming'
    APPENDING = 'appending'
    AWAITING_LAST_APPEND = 'awaiting_last_append'
    FINALIZING = 'finalizing'


class CompletionTracker:
    """
    State machine for the streaming phase.
    
    Transitions:
        STREAMING --chunk_dispatched--> APPENDING
        APPENDING --append_acknowledged--> STREAMING
        APPENDING --source_exhausted--> AWAITING_LAST_APPEND
        AWAITING_LAST_APPEND --append_acknowledged--> FINALIZING
        STREAMING --source_exhausted--> FINALIZING
    
    Any other transition raises RuntimeError.
    """
    
    def __init__(self):
        self._state = CompletionState.STREAMING
    
    @property
    def state(self) -> CompletionState:
        return self._state
    
    @property
    def is_finalizing(self) -> bool:
        return self._state is CompletionState.FINALIZING
    
    def chunk_dispatched(self) -> None:
        """An APPEND was sent; at most one may be outstanding."""
        self._expect(CompletionState.STREAMING, 'chunk_dispatched')
        self._state = CompletionState.APPENDING
    
    def append_acknowledged(self) -> bool:
        """
        The outstanding APPEND succeeded.
        
        Returns:
            True if the upload is now ready to finalize
        """
        if self._state is CompletionState.AWAITING_LAST_APPEND:
            self._state = CompletionState.FINALIZING
            return True
        self._expect(CompletionState.APPENDING, 'append_acknowledged')
        self._state = CompletionState.STREAMING
        return False
    
    def source_exhausted(self) -> bool:
        """
        The chunk source has no more data.
        
        Returns:
            True if the upload is now ready to finalize
        """
        if self._state is CompletionState.APPENDING:
            self._state = CompletionState.AWAITING_LAST_APPEND
            return False
        self._expect(CompletionState.STREAMING, 'source_exhausted')
        self._state = CompletionState.FINALIZING
        return True
    
    def _expect(self, expected: CompletionState, event: str) -> None:
        if self._state is not expected:
            raise RuntimeError(
                f"Invalid completion transition: {event} in state {self._state.value}"
            )
