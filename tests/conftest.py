"""Pytest fixtures for mediaupload tests."""
import asyncio
from pathlib import Path
from typing import Any, Dict, List

import pytest

MEDIA_ID = '710511363345354753'


class FakeTransport:
    """
    Scripted transport recording every request.
    
    Responses are queued per command; the last queued response repeats.
    A queued exception is raised instead of returned.
    """
    
    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.events: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._scripts: Dict[str, List[Any]] = {
            'INIT': [{'media_id': int(MEDIA_ID), 'media_id_string': MEDIA_ID}],
            'APPEND': [{}],
            'FINALIZE': [{'media_id_string': MEDIA_ID, 'size': 0}],
            'STATUS': [{'media_id_string': MEDIA_ID}],
        }
    
    def script(self, command: str, *responses: Any) -> 'FakeTransport':
        self._scripts[command] = list(responses)
        return self
    
    async def get(self, endpoint, params):
        return await self._handle('GET', endpoint, params)
    
    async def post(self, endpoint, params):
        return await self._handle('POST', endpoint, params)
    
    async def _handle(self, method, endpoint, params):
        command = params['command']
        label = command if command != 'APPEND' else f"APPEND {params['segment_index']}"
        self.calls.append({'method': method, 'endpoint': endpoint, 'params': dict(params)})
        self.events.append(label)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            queue = self._scripts[command]
            response = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(response, BaseException):
                raise response
            self.events.append(f"{label} done")
            return response, {'status': 200, 'command': command}
        finally:
            self.in_flight -= 1
    
    def commands(self) -> List[str]:
        return [call['params']['command'] for call in self.calls]
    
    def params_for(self, command: str) -> List[Dict[str, Any]]:
        return [call['params'] for call in self.calls if call['params']['command'] == command]


@pytest.fixture
def transport():
    """Scripted fake transport."""
    return FakeTransport()


@pytest.fixture
def make_file(tmp_path):
    """Factory creating a file with a given name and content or size."""
    def _make(name: str, content: bytes = None, size: int = None) -> Path:
        path = tmp_path / name
        if content is not None:
            path.write_bytes(content)
        else:
            with open(path, 'wb') as f:
                f.truncate(size or 0)
        return path
    return _make


@pytest.fixture
def sleeps():
    """Records requested delays without sleeping."""
    delays: List[float] = []
    
    async def fake_sleep(delay):
        delays.append(delay)
    
    fake_sleep.delays = delays
    return fake_sleep
