# track_proxy/services/errors.py
from typing import Optional, Dict, Any


class TrackProxyError(Exception):
    """Base error. Routers never build responses for these by hand, main.py renders them."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}
        # 只在 development 模式回給前端
        self.detail = detail


class ValidationError(TrackProxyError):
    """Bad client input. Raised before any upstream call."""

    status_code = 400

    def __init__(self, error: str, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message, extra)
        self.error = error


class AuthError(TrackProxyError):
    """Spotify rejected our client credentials or our bearer token."""

    error = "Authentication failed"

    def __init__(self, message: str, detail: Optional[str] = None, status_code: int = 500):
        super().__init__(message, detail=detail)
        self.status_code = status_code


class NotFoundError(TrackProxyError):
    status_code = 404

    def __init__(self, error: str, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message, extra)
        self.error = error


class RateLimitError(TrackProxyError):
    """Spotify answered 429, passed through to the caller."""

    status_code = 429
    error = "Rate limit exceeded"

    def __init__(self, retry_after: Optional[str] = None):
        super().__init__("Too many requests to Spotify API. Please try again later.")
        self.retry_after = retry_after


class UnexpectedError(TrackProxyError):
    status_code = 500
    error = "Internal server error"
