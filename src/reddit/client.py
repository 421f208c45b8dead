"""
Reddit API client with OAuth authentication.

This module provides an authenticated client for Reddit's OAuth API. It
handles:

- Dispatching endpoint methods (see endpoints.ENDPOINTS) through argument
  validation and the HTTP transport
- OAuth token management with silent refresh of expired tokens
- Error handling and logging

Every endpoint method validates its arguments, builds the URL and body,
issues exactly one HTTP request and returns the decoded JSON (or the raw
text for non-JSON bodies).
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from src.api.exceptions import RedditAPIError, RedditAuthenticationError, ValidationError
from src.oauth.coordinator import OAuthCoordinator
from src.oauth.exceptions import TokenNotAvailableError
from src.oauth.token_manager import GrantResult

from .endpoints import ENDPOINTS, EndpointRequest, encode_value
from .validation import bind_arguments

logger = logging.getLogger(__name__)

# Keys of /about/edit that /api/site_admin expects under another name
SUB_SETTINGS_RENAMES = {
    "default_set": "allow_top",
    "domain_css": "css_on_cname",
    "title": "header-title",
    "language": "lang",
    "content_options": "link_type",
    "domain_sidebar": "show_cname_sidebar",
    "subreddit_id": "sr",
    "subreddit_type": "type",
}

# Keys of /about/edit that /api/site_admin does not accept
SUB_SETTINGS_REMOVED = ("domain", "header_hover_text")


class RedditClient:
    """
    Authenticated client for the Reddit API.

    Endpoint methods are generated from the endpoint table, so every name in
    ENDPOINTS is callable on the client with the documented parameters.

    Example:
        from src.oauth.coordinator import OAuthCoordinator
        from src.reddit.client import RedditClient

        client = RedditClient(OAuthCoordinator())
        client.login("username", "password")

        me = client.get_current_user()
        client.vote("t3_abc123", 1)
    """

    def __init__(self, oauth_coordinator: Optional[OAuthCoordinator] = None):
        """
        Initialize Reddit API client.

        Args:
            oauth_coordinator: OAuth coordinator for authentication
                               (creates default if not provided)
        """
        self.oauth = oauth_coordinator or OAuthCoordinator()
        self.base_url = self.oauth.config.api_base_url.rstrip("/")

        logger.info("RedditClient initialized")

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in ENDPOINTS:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

        endpoint = ENDPOINTS[name]

        def method(*args: Any, **kwargs: Any) -> Any:
            return self.call(name, *args, **kwargs)

        method.__name__ = name
        method.__doc__ = f"{endpoint.doc}\n\n{endpoint.method} {endpoint.path} (scope: {endpoint.scope})"
        return method

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(ENDPOINTS))

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Call an endpoint by name.

        Args:
            name: Endpoint name (e.g. "get_current_user")
            *args: Positional endpoint arguments
            **kwargs: Keyword endpoint arguments

        Returns:
            Decoded JSON response, or raw text for non-JSON bodies

        Raises:
            ValidationError: If arguments are invalid (before any request)
            RedditAuthenticationError: If not authorized or the token is rejected
            RedditRateLimitError: If rate limit exceeded (429)
            RedditAPIError: For other API errors
        """
        endpoint = ENDPOINTS.get(name)
        if endpoint is None:
            raise ValueError(f"Unknown endpoint: {name}")

        values = bind_arguments(endpoint, args, kwargs)
        return self._request(endpoint.build(values))

    def _request(self, prepared: EndpointRequest) -> Any:
        """
        Make an authenticated request to the Reddit API.

        Raises:
            RedditAuthenticationError: If no token is available
        """
        try:
            authorization = self.oauth.get_authorization_header()
        except TokenNotAvailableError as e:
            logger.error(f"Not authorized: {e}")
            raise RedditAuthenticationError(
                "No OAuth token available. Log in or authorize first."
            ) from e

        return self.oauth.transport.request(
            f"{self.base_url}{prepared.path}",
            data=prepared.data,
            files=prepared.files,
            params=prepared.params or None,
            authorization=authorization,
            context=self.oauth.token_manager.context,
        )

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make an authenticated GET request to an arbitrary API path.

        Args:
            path: API path (e.g. "/api/v1/me")
            params: Query parameters

        Returns:
            Decoded JSON response
        """
        encoded = {k: encode_value(v) for k, v in (params or {}).items()}
        return self._request(EndpointRequest("GET", _normalize_path(path), params=encoded))

    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make an authenticated POST request to an arbitrary API path.

        Args:
            path: API path (e.g. "/api/comment")
            data: Form fields

        Returns:
            Decoded JSON response
        """
        encoded = {k: encode_value(v) for k, v in (data or {}).items()}
        return self._request(EndpointRequest("POST", _normalize_path(path), data=encoded))

    def set_sub_settings(self, subreddit: str, **options: Any) -> Any:
        """
        Update a subreddit's settings.

        The current settings are fetched and the given options merged over
        them, so only the changed settings need to be passed.

        Args:
            subreddit: Subreddit name
            **options: Settings to change, named as /api/site_admin expects
                       them (e.g. public_description="...", over_18=True)

        Returns:
            Decoded JSON response

        Raises:
            ValidationError: If subreddit is not a string or an option key is
                             not a known setting
            RedditAPIError: If the current settings cannot be read
        """
        if not isinstance(subreddit, str) or not subreddit:
            raise ValidationError(
                "subreddit parameter in set_sub_settings must be a non-empty string",
                param="subreddit",
            )

        current = self.call("get_sub_settings", subreddit)
        settings = current.get("data") if isinstance(current, dict) else None
        if not isinstance(settings, dict):
            raise RedditAPIError(f"Unexpected settings response for /r/{subreddit}")

        merged = dict(settings)
        for old, new in SUB_SETTINGS_RENAMES.items():
            if old in merged:
                merged[new] = merged.pop(old)
        for key in SUB_SETTINGS_REMOVED:
            merged.pop(key, None)
        merged.update({"api_type": "json", "name": subreddit})

        unknown = sorted(set(options) - set(merged))
        if unknown:
            raise ValidationError(f"Invalid option key(s) provided: {', '.join(unknown)}")
        merged.update(options)

        data = {k: encode_value(v) for k, v in merged.items() if v is not None}
        logger.info(f"Updating settings of /r/{subreddit}: {', '.join(sorted(options))}")
        return self._request(EndpointRequest("POST", "/api/site_admin", data=data))

    # OAuth delegates

    def login(self, username: str, password: str, remember: Optional[float] = None) -> GrantResult:
        """Log in with a username and password (script apps)."""
        return self.oauth.token_manager.login(username, password, remember)

    def authorize(
        self,
        scopes: Union[str, Iterable[str]] = "*",
        redirect: bool = True,
        remember: Optional[float] = None,
        force: bool = False,
    ) -> GrantResult:
        """Authorize through the authorization code flow (web apps)."""
        return self.oauth.token_manager.authorize(scopes, redirect, remember, force)

    def is_authorized(self) -> bool:
        """Check if a token is available (refreshing an expired one)."""
        return self.oauth.is_authorized()

    def get_auth_url(self, state: Optional[str] = None) -> str:
        """Get the Reddit authorization URL for the requested scopes."""
        return self.oauth.token_manager.get_auth_url(state)

    def logout(self) -> Any:
        """Revoke the token and forget it."""
        return self.oauth.revoke()

    unauthorize = logout

    def get_transfer_info(self, opt: Optional[str] = None) -> Any:
        """Get information about the last HTTP transfer."""
        return self.oauth.transport.get_transfer_info(opt)

    def close(self) -> None:
        """Close the HTTP session."""
        self.oauth.close()
        logger.info("RedditClient closed")

    def __enter__(self) -> "RedditClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def _normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"
