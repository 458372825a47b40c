"""Logging utilities for mediaupload modules."""

import logging

LOGGER_NAMES = (
    'mediaupload',
    'mediaupload.api',
    'mediaupload.upload',
    'mediaupload.upload.session',
    'mediaupload.upload.poller',
    'mediaupload.upload.file',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    The logger propagates to the root logger so ``basicConfig()`` works
    without extra setup. A WARNING level is only applied when the root
    logger has no handlers yet.
    
    Args:
        name: Logger name (typically a dotted ``mediaupload.*`` name)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for mediaupload modules.
    
    Args:
        level: Logging level applied to every mediaupload logger
    """
    for logger_name in LOGGER_NAMES:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
