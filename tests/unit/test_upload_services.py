"""Tests for upload services."""
import pytest
from pathlib import Path
from unittest.mock import Mock

from mediaupload.core.exceptions import FileAccessError, OversizeError
from mediaupload.core.upload.models import MediaCategory, MediaPolicy
from mediaupload.core.upload.services import (
    FileValidator,
    MediaTypeResolver,
    AsyncChunkReader,
    MediaClassifier,
)

MB = 1024 * 1024


class TestFileValidator:
    """Test suite for FileValidator."""
    
    @pytest.fixture
    def validator(self):
        return FileValidator()
    
    def test_validate_existing_file(self, validator, make_file):
        """Test validating existing file."""
        path = make_file('a.txt', b"test content")
        
        validated, size = validator.validate(path)
        
        assert validated == path
        assert size == 12
    
    def test_validate_string_path(self, validator, make_file):
        """Test validating string path."""
        path = make_file('a.txt', b"x")
        
        validated, _ = validator.validate(str(path))
        
        assert validated == path
    
    def test_validate_nonexistent_file(self, validator, tmp_path):
        """Test missing files raise FileAccessError."""
        with pytest.raises(FileAccessError, match="Cannot access"):
            validator.validate(tmp_path / "missing.jpg")
    
    def test_validate_directory(self, validator, tmp_path):
        """Test directories raise FileAccessError."""
        with pytest.raises(FileAccessError, match="not a file"):
            validator.validate(tmp_path)


class TestMediaTypeResolver:
    """Test suite for MediaTypeResolver."""
    
    @pytest.fixture
    def resolver(self):
        return MediaTypeResolver()
    
    @pytest.mark.parametrize("name,expected", [
        ('photo.jpg', 'image/jpeg'),
        ('photo.jpeg', 'image/jpeg'),
        ('photo.png', 'image/png'),
        ('photo.webp', 'image/webp'),
        ('anim.gif', 'image/gif'),
        ('clip.mp4', 'video/mp4'),
    ])
    def test_known_types(self, resolver, name, expected):
        """Test extension lookup."""
        assert resolver.resolve(name) == expected
    
    def test_unknown_extension(self, resolver):
        """Test unknown extensions fall back to octet-stream."""
        assert resolver.resolve('data.zzunknown') == 'application/octet-stream'


class TestAsyncChunkReader:
    """Test suite for AsyncChunkReader."""
    
    @pytest.mark.asyncio
    async def test_chunks_in_order(self, make_file):
        """Test chunks are bounded and in file order."""
        path = make_file('data.bin', b"0123456789ABCDEFGHIJ")
        
        async with AsyncChunkReader(path, chunk_size=8) as reader:
            chunks = [chunk async for chunk in reader]
        
        assert chunks == [b"01234567", b"89ABCDEF", b"GHIJ"]
        assert reader.position == 20
    
    @pytest.mark.asyncio
    async def test_known_size_stops_without_extra_read(self, make_file):
        """Test exhaustion is reported once total_bytes were produced."""
        path = make_file('data.bin', b"0123456789")
        
        async with AsyncChunkReader(path, chunk_size=5, total_bytes=10) as reader:
            await reader.__anext__()
            await reader.__anext__()
            reader.pause()
            with pytest.raises(StopAsyncIteration):
                await reader.__anext__()
    
    @pytest.mark.asyncio
    async def test_known_size_ignores_bytes_appended_after_open(self, make_file):
        """Test a file growing after the size check is read only up to total_bytes."""
        path = make_file('growing.bin', b"abcdef")
        
        async with AsyncChunkReader(path, chunk_size=4, total_bytes=6) as reader:
            with open(path, 'ab') as f:
                f.write(b"XYZ")
            chunks = [chunk async for chunk in reader]
        
        assert chunks == [b"abcd", b"ef"]
        assert reader.position == 6
    
    @pytest.mark.asyncio
    async def test_empty_file(self, make_file):
        """Test empty files yield no chunks."""
        path = make_file('empty.bin', b"")
        
        async with AsyncChunkReader(path, chunk_size=4) as reader:
            chunks = [chunk async for chunk in reader]
        
        assert chunks == []
    
    @pytest.mark.asyncio
    async def test_pause_and_resume(self, make_file):
        """Test a paused reader holds the next chunk until resumed."""
        import asyncio
        path = make_file('data.bin', b"abcdef")
        
        async with AsyncChunkReader(path, chunk_size=3) as reader:
            assert await reader.__anext__() == b"abc"
            reader.pause()
            assert reader.paused
            
            pending = asyncio.ensure_future(reader.__anext__())
            await asyncio.sleep(0.01)
            assert not pending.done()
            
            reader.resume()
            assert await pending == b"def"
    
    @pytest.mark.asyncio
    async def test_open_missing_file(self, tmp_path):
        """Test opening a missing file raises FileAccessError."""
        reader = AsyncChunkReader(tmp_path / "missing.bin", chunk_size=4)
        
        with pytest.raises(FileAccessError):
            await reader.open()
    
    def test_invalid_chunk_size(self, tmp_path):
        """Test chunk size must be positive."""
        with pytest.raises(ValueError):
            AsyncChunkReader(tmp_path / "x", chunk_size=0)


class TestMediaClassifier:
    """Test suite for MediaClassifier."""
    
    @pytest.fixture
    def classifier(self):
        return MediaClassifier()
    
    def test_jpeg(self, classifier, make_file):
        """Test 12 MiB JPEG uses the 15 MiB ceiling and tweet_image."""
        path = make_file('photo.jpg', size=12 * MB)
        
        descriptor = classifier.classify(path)
        
        assert descriptor.media_type == 'image/jpeg'
        assert descriptor.size_bytes == 12 * MB
        assert descriptor.max_allowed_bytes == 15 * MB
        assert descriptor.category is MediaCategory.IMAGE
    
    def test_gif(self, classifier, make_file):
        """Test GIF category."""
        descriptor = classifier.classify(make_file('anim.gif', size=100))
        
        assert descriptor.category is MediaCategory.GIF
    
    def test_video_ceiling(self, classifier, make_file):
        """Test mp4 files above 15 MiB are accepted."""
        descriptor = classifier.classify(make_file('clip.mp4', size=100 * MB))
        
        assert descriptor.max_allowed_bytes == 512 * MB
        assert descriptor.category is MediaCategory.VIDEO
    
    def test_unknown_type_no_category(self, classifier, make_file):
        """Test unrecognized types get no category and the 15 MiB ceiling."""
        descriptor = classifier.classify(make_file('clip.mov', size=10))
        
        assert descriptor.category is None
        assert descriptor.max_allowed_bytes == 15 * MB
    
    def test_unknown_video_container_uses_image_ceiling(self, classifier, make_file):
        """Test alternate video containers are not sized as video."""
        with pytest.raises(OversizeError):
            classifier.classify(make_file('clip.mov', size=20 * MB))
    
    def test_oversize_at_limit(self, classifier, make_file):
        """Test a file exactly at the ceiling is rejected."""
        with pytest.raises(OversizeError) as exc_info:
            classifier.classify(make_file('photo.png', size=15 * MB))
        
        assert exc_info.value.limit == 15 * MB
        assert exc_info.value.size == 15 * MB
        assert "Max size is 15728640B" in str(exc_info.value)
    
    def test_oversize_video(self, classifier, make_file):
        """Test the video ceiling."""
        with pytest.raises(OversizeError) as exc_info:
            classifier.classify(make_file('clip.mp4', size=512 * MB))
        
        assert exc_info.value.limit == 512 * MB
    
    def test_missing_file(self, classifier, tmp_path):
        """Test stat failures propagate as FileAccessError."""
        with pytest.raises(FileAccessError):
            classifier.classify(tmp_path / "missing.jpg")
    
    def test_custom_policy(self, make_file):
        """Test a custom rule changes sizing without code changes."""
        policy = MediaPolicy.default().with_rule('video/quicktime', MediaCategory.VIDEO, 512 * MB)
        classifier = MediaClassifier(policy)
        
        descriptor = classifier.classify(make_file('clip.mov', size=20 * MB))
        
        assert descriptor.category is MediaCategory.VIDEO
    
    def test_injected_collaborators(self):
        """Test validator and resolver can be replaced."""
        validator = Mock()
        validator.validate.return_value = (Path('/virtual/file'), 42)
        resolver = Mock()
        resolver.resolve.return_value = 'image/png'
        
        descriptor = MediaClassifier(validator=validator, resolver=resolver).classify('/virtual/file')
        
        assert descriptor.size_bytes == 42
        assert descriptor.category is MediaCategory.IMAGE
