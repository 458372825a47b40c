"""Core components for mediaupload: API transport, upload state machine, errors."""
