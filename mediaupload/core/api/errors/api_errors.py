"""Media API error codes and exceptions."""
from typing import Dict, List, Any, Optional

from ...exceptions import TransportError


class HTTPStatusMessages:
    """HTTP status codes returned by the media upload endpoint."""
    
    MESSAGES: Dict[int, str] = {
        400: 'Bad Request: the request was invalid or could not be served.',
        401: 'Unauthorized: missing or incorrect authentication credentials.',
        403: 'Forbidden: the request is understood but has been refused.',
        404: 'Not Found: the requested resource or media id does not exist.',
        413: 'Payload Too Large: the media segment is too large.',
        415: 'Unsupported Media Type: the media type is not accepted.',
        420: 'Enhance Your Calm: the client is being rate limited.',
        429: 'Too Many Requests: the rate limit for this resource was exhausted.',
        500: 'Internal Server Error: something is broken on the server.',
        502: 'Bad Gateway: the service is down or being upgraded.',
        503: 'Service Unavailable: the servers are up but overloaded.',
        504: 'Gateway Timeout: the servers are up but the request could not be serviced.',
    }
    
    @classmethod
    def get_message(cls, status: int) -> str:
        """Gets message for HTTP status."""
        return cls.MESSAGES.get(status, f"Unexpected HTTP status: {status}")


class MediaAPIError(TransportError):
    """Exception raised when the media endpoint answers with an HTTP error."""
    
    def __init__(self, status: int, errors: Optional[List[str]] = None):
        self.status = status
        self.errors = errors or []
        self.message = HTTPStatusMessages.get_message(status)
        if self.errors:
            self.message = f"{self.message} ({'; '.join(self.errors)})"
        super().__init__(self.message)
    
    @staticmethod
    def parse_errors(body: Any) -> List[str]:
        """
        Extract server error messages from a response body.
        
        Handles ``{"errors": [{"code": .., "message": ..}]}`` and
        ``{"error": "..."}`` shapes.
        """
        if not isinstance(body, dict):
            return []
        
        messages = []
        errors = body.get('errors')
        if isinstance(errors, list):
            for item in errors:
                if isinstance(item, dict):
                    text = item.get('message', '')
                    if 'code' in item:
                        text = f"{item['code']}: {text}"
                    messages.append(text)
                else:
                    messages.append(str(item))
        
        error = body.get('error')
        if isinstance(error, str):
            messages.append(error)
        
        return messages
