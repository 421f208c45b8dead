"""
HTTP layer shared by the OAuth token manager and the Reddit API client.

Public API:
    Transport: Single-request HTTP transport with JSON/raw-text decoding
    TransferInfo: Metadata about the last transfer

Exceptions:
    ValidationError: Invalid argument (raised before any I/O)
    RedditAPIError: Base API/transport error carrying the HTTP status code
    RedditAuthenticationError: 401/403 or no usable token
    RedditRateLimitError: 429 rate limit exceeded
    RedditTransportError: Network failure
    RedditTimeoutError: Connect/read timeout
"""

from .exceptions import (
    RedditAPIError,
    RedditAuthenticationError,
    RedditRateLimitError,
    RedditTimeoutError,
    RedditTransportError,
    ValidationError,
)
from .transport import TransferInfo, Transport

__all__ = [
    "Transport",
    "TransferInfo",
    "ValidationError",
    "RedditAPIError",
    "RedditAuthenticationError",
    "RedditRateLimitError",
    "RedditTransportError",
    "RedditTimeoutError",
]
