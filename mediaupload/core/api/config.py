"""
API configuration module.

Provides configuration for the media upload HTTP transport.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl
import logging

MEDIA_UPLOAD_ENDPOINT = 'media/upload'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.
    
    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    
    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None
        
        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"
        
        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True
    
    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False
        
        context = ssl.create_default_context()
        
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        
        context.check_hostname = self.check_hostname
        
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.
    
    APPEND requests carry up to 5 MiB of base64 data, so the totals are generous.
    """
    total: float = 300.0
    connect: float = 30.0
    sock_read: float = 120.0
    
    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class APIConfig:
    """
    Complete API configuration.
    
    Centralizes all configuration options for the media upload transport.
    """
    base_url: str = 'https://upload.twitter.com/1.1/'
    
    # OAuth 2.0 bearer token (user context)
    bearer_token: Optional[str] = None
    
    user_agent: str = 'mediaupload/1.0.0'
    
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    
    extra_headers: Dict[str, str] = field(default_factory=dict)
    
    log_level: int = logging.INFO
    
    limit_per_host: int = 10
    limit: int = 100
    
    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()
    
    @classmethod
    def with_token(cls, token: str, **kwargs) -> 'APIConfig':
        """Create configuration authenticated with a bearer token."""
        return cls(bearer_token=token, **kwargs)
    
    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(proxy=ProxyConfig(url=proxy_url), **kwargs)
    
    def build_url(self, endpoint: str) -> str:
        """Build the full URL for an endpoint such as ``media/upload``."""
        base = self.base_url if self.base_url.endswith('/') else f"{self.base_url}/"
        return f"{base}{endpoint.lstrip('/')}.json"
    
    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }
    
    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }
        if self.bearer_token:
            headers['Authorization'] = f"Bearer {self.bearer_token}"
        
        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
