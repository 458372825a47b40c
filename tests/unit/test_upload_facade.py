"""Tests for the upload facade and high-level client."""
import asyncio
import pytest
from unittest.mock import AsyncMock

from mediaupload import MediaClient, APIConfig, UploadFacade, MediaCategory, MediaPolicy
from mediaupload.core.exceptions import OversizeError


class TestUploadFacade:
    """Test suite for UploadFacade."""
    
    @pytest.mark.asyncio
    async def test_upload_with_callbacks(self, transport, make_file):
        """Test progress and processing callbacks are wired."""
        path = make_file('clip.mp4', b"0123456789")
        transport.script('FINALIZE', {'processing_info': {'state': 'pending', 'check_after_secs': 0.01}})
        transport.script(
            'STATUS',
            {'processing_info': {'state': 'in_progress', 'progress_percent': 40, 'check_after_secs': 0.01}},
            {'processing_info': {'state': 'succeeded', 'progress_percent': 100}},
        )
        uploads, processing = [], []
        facade = UploadFacade(transport, chunk_size=5)
        
        result = await facade.upload(
            path,
            progress_callback=lambda p: uploads.append(p.uploaded_bytes),
            processing_callback=lambda info: processing.append(info.progress_percent)
        )
        
        assert uploads == [5, 10]
        assert processing == [40]
        assert result.processing_info.state == 'succeeded'
    
    def test_classify(self, make_file):
        """Test classification without upload."""
        facade = UploadFacade(transport=None)
        
        descriptor = facade.classify(make_file('photo.webp', b"x"))
        
        assert descriptor.category is MediaCategory.IMAGE
    
    def test_custom_policy(self, make_file):
        """Test custom policies reach the classifier."""
        policy = MediaPolicy(default_max_bytes=4)
        facade = UploadFacade(transport=None, policy=policy)
        
        with pytest.raises(OversizeError):
            facade.classify(make_file('notes.txt', b"12345"))
    
    @pytest.mark.asyncio
    async def test_upload_with_callback(self, transport, make_file):
        """Test the callback-style entry point."""
        results = []
        task = UploadFacade(transport).upload_with_callback(
            make_file('photo.png', b"png"),
            lambda *args: results.append(args)
        )
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)
        
        assert len(results) == 1
        assert results[0][0] is None


class TestMediaClient:
    """Test suite for MediaClient."""
    
    def test_token_config(self):
        """Test token builds bearer configuration."""
        client = MediaClient(token='secret')
        
        assert client.config.bearer_token == 'secret'
    
    def test_explicit_config(self):
        """Test explicit configuration wins."""
        config = APIConfig(base_url='https://upload.example.com/')
        client = MediaClient(token='ignored', config=config)
        
        assert client.config is config
    
    @pytest.mark.asyncio
    async def test_upload_uses_api_client(self, make_file):
        """Test uploads go through the owned API client."""
        client = MediaClient(token='secret')
        client._api.post = AsyncMock(side_effect=[
            ({'media_id_string': '99'}, None),
            ({}, None),
            ({'media_id_string': '99'}, None),
        ])
        client._api.get = AsyncMock()
        
        result = await client.upload(make_file('photo.jpg', b"jpeg"))
        await client.close()
        
        assert result.media_id == '99'
        commands = [call.args[1]['command'] for call in client._api.post.await_args_list]
        assert commands == ['INIT', 'APPEND', 'FINALIZE']
        client._api.get.assert_not_called()
