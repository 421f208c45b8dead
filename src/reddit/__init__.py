"""
Reddit API client package.

This package exposes the Reddit OAuth REST API as method calls:
- RedditClient: authenticated client with one method per endpoint
- Endpoint / Param: declarative endpoint table entries
- ENDPOINTS: all endpoints by method name

Usage:
    from src.reddit import RedditClient

    client = RedditClient()
    client.login("username", "password")
    posts = client.get_posts("hot", "python", limit=10)
"""

from .client import RedditClient
from .endpoints import ENDPOINTS, Endpoint, EndpointRequest, Param
from .validation import bind_arguments

__all__ = [
    "RedditClient",
    "ENDPOINTS",
    "Endpoint",
    "EndpointRequest",
    "Param",
    "bind_arguments",
]
