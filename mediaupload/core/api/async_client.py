"""
Async media API client.

Default transport for the upload session: issues GET/POST requests against
the media upload endpoint and returns parsed bodies.
"""
import json
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Tuple
import aiohttp

from .config import APIConfig
from .errors import MediaAPIError
from ..exceptions import TransportError
from ..logging import get_logger


@dataclass(frozen=True)
class RawResponse:
    """
    Raw HTTP response details kept alongside the parsed body.
    
    Attributes:
        status: HTTP status code
        url: Requested URL
        headers: Response headers
        text: Undecoded response text
    """
    status: int
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ''


class AsyncAPIClient:
    """
    Asynchronous media API client.
    
    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts and bearer authentication
    - Connection pooling via a shared aiohttp session
    
    Failed requests are never retried; any network or HTTP error is raised
    as a TransportError.
    
    Example:
        >>> config = APIConfig.with_token("token")
        >>> async with AsyncAPIClient(config) as client:
        ...     body, raw = await client.get('media/upload', {'command': 'STATUS', 'media_id': '1'})
    """
    
    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async API client.
        
        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False
        
        self._logger = get_logger('mediaupload.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)
    
    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config
    
    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
    
    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session
    
    async def close(self):
        """Close client and release resources."""
        self._closed = True
        
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        
        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None
    
    async def get(self, endpoint: str, params: Dict[str, Any]) -> Tuple[Any, RawResponse]:
        """
        Send a GET request with query parameters.
        
        Returns:
            Tuple of (parsed body, raw response)
            
        Raises:
            TransportError: On network failure or HTTP error status
        """
        return await self._request('GET', endpoint, params)
    
    async def post(self, endpoint: str, params: Dict[str, Any]) -> Tuple[Any, RawResponse]:
        """
        Send a POST request with form-encoded parameters.
        
        Returns:
            Tuple of (parsed body, raw response)
            
        Raises:
            TransportError: On network failure or HTTP error status
        """
        return await self._request('POST', endpoint, params)
    
    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Dict[str, Any]
    ) -> Tuple[Any, RawResponse]:
        """Execute a single request against the media endpoint."""
        if self._closed:
            raise TransportError("Client is closed")
        
        session = await self._ensure_session()
        url = self._config.build_url(endpoint)
        fields = {key: str(value) for key, value in params.items()}
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        
        self._logger.debug(f"{method} {url} command={fields.get('command')}")
        
        if method == 'GET':
            request_kwargs = {'params': fields}
        else:
            request_kwargs = {'data': fields}
        
        try:
            async with session.request(method, url, proxy=proxy, **request_kwargs) as response:
                response_text = await response.text()
                raw = RawResponse(
                    status=response.status,
                    url=str(response.url),
                    headers=dict(response.headers),
                    text=response_text
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"Request timeout: {method} {url}")
            raise TransportError(f"Request timed out: {method} {url}", e) from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error: {e}")
            raise TransportError(f"Network error: {e}", e) from e
        
        self._logger.debug(
            f"Response {raw.status}: {response_text[:500] if len(response_text) > 500 else response_text}"
        )
        body = self._parse_response(response_text)
        
        if raw.status >= 400:
            error = MediaAPIError(raw.status, MediaAPIError.parse_errors(body))
            self._logger.error(f"API error: {error}")
            raise error
        
        return body, raw
    
    def _parse_response(self, response_text: str) -> Any:
        """Parse a JSON response body; empty bodies (APPEND returns 204) become {}."""
        if not response_text or not response_text.strip():
            return {}
        try:
            return json.loads(response_text)
        except json.JSONDecodeError:
            return {'text': response_text}
