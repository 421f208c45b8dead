"""
Exceptions shared by the HTTP transport and the Reddit API client.

Two kinds of failures are kept apart:
- ValidationError: caller-supplied argument outside its documented domain,
  raised before any network call
- RedditAPIError: the request was sent (or attempted) and failed
"""

from typing import Any, Optional


class ValidationError(ValueError):
    """Invalid argument passed to an API method."""

    def __init__(self, message: str, param: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.param = param


class RedditAPIError(Exception):
    """
    Base exception for Reddit API errors.

    Attributes:
        message: Error message reported by Reddit (or a status summary)
        status_code: HTTP status code of the failed response, None when no
                     response was received
        body: Decoded response body, if any
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class RedditAuthenticationError(RedditAPIError):
    """
    Authentication failure with the Reddit API.

    The access token is missing, invalid, expired, or revoked, or the token
    lacks the scope required by the endpoint.
    """

    pass


class RedditRateLimitError(RedditAPIError):
    """API rate limit exceeded."""

    pass


class RedditTransportError(RedditAPIError):
    """Network failure before an HTTP response was received."""

    pass


class RedditTimeoutError(RedditTransportError):
    """Request exceeded the connect or read timeout."""

    pass
