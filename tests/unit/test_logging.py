"""Tests for logging module."""
import pytest
import logging

from mediaupload.core.logging import get_logger, setup_logging, LOGGER_NAMES


class TestLogging:
    """Test suite for logging helpers."""
    
    @pytest.fixture(autouse=True)
    def reset_levels(self):
        """Restore logger levels after each test."""
        saved = {name: logging.getLogger(name).level for name in LOGGER_NAMES}
        yield
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)
    
    def test_get_logger_propagates(self):
        """Test loggers propagate to root."""
        logger = get_logger('mediaupload.test')
        
        assert logger.name == 'mediaupload.test'
        assert logger.propagate is True
    
    def test_setup_logging_sets_levels(self):
        """Test setup_logging configures every package logger."""
        setup_logging(logging.DEBUG)
        
        for name in LOGGER_NAMES:
            assert logging.getLogger(name).level == logging.DEBUG
    
    def test_session_logs_phases(self, caplog, transport, make_file):
        """Test the upload session logs through the package logger."""
        import asyncio
        from mediaupload.core.upload import UploadSession
        
        setup_logging(logging.INFO)
        with caplog.at_level(logging.INFO, logger='mediaupload.upload.session'):
            asyncio.run(UploadSession(make_file('photo.jpg', b"data"), transport).upload())
        
        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith('Starting upload: photo.jpg') for message in messages)
        assert any('sending FINALIZE' in message for message in messages)
