"""
OAuth configuration for Reddit API integration.

This module provides the application credentials and endpoint settings for
OAuth 2.0 authentication with Reddit. Configuration can be loaded from
environment variables or provided programmatically.
"""

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class RedditOAuthConfig:
    """
    Configuration for Reddit OAuth 2.0.

    Instances are immutable: credentials stay fixed for the lifetime of a
    client.

    Attributes:
        client_id: Reddit app client ID (from https://www.reddit.com/prefs/apps)
        client_secret: Reddit app client secret
        redirect_uri: Redirect URI registered for the app (required for the
                      authorization code flow)
        user_agent: Application user agent, e.g.
                    "webapp:myapp:v1.0 (by /u/username)"
        authorization_url: Reddit OAuth authorization endpoint
        token_url: Reddit OAuth token endpoint
        revoke_url: Reddit OAuth token revocation endpoint
        api_base_url: Base URL for authenticated API requests
        token_key: Key under which the token record is persisted
        token_file: Path of the token file used by file-backed storage
        connect_timeout: Connection timeout in seconds
        timeout: Read timeout in seconds
        verify_ssl: Whether to verify TLS certificates
    """

    # Required - from Reddit app preferences
    client_id: str
    client_secret: str

    redirect_uri: str = ""
    user_agent: str = ""

    # Reddit OAuth endpoints
    authorization_url: str = "https://www.reddit.com/api/v1/authorize"
    token_url: str = "https://www.reddit.com/api/v1/access_token"
    revoke_url: str = "https://www.reddit.com/api/v1/revoke_token"
    api_base_url: str = "https://oauth.reddit.com"

    # Token persistence
    token_key: str = "reddit_token"
    token_file: str = ".reddit_tokens.json"

    # HTTP settings
    connect_timeout: float = 5.0
    timeout: float = 10.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigurationError("client_id cannot be empty")

        if not self.client_secret:
            raise ConfigurationError("client_secret cannot be empty")

        if self.redirect_uri and urlparse(self.redirect_uri).scheme not in ("http", "https"):
            raise ConfigurationError(
                f"redirect_uri must be an http(s) URL, got {self.redirect_uri!r}"
            )

        if self.connect_timeout <= 0 or self.timeout <= 0:
            raise ConfigurationError("Timeouts must be positive")

        if not self.token_key:
            raise ConfigurationError("token_key cannot be empty")

    @property
    def callback_host(self) -> str:
        """Host part of the redirect URI (used by the local callback server)."""
        return urlparse(self.redirect_uri).hostname or "localhost"

    @property
    def callback_port(self) -> int:
        """Port of the redirect URI, defaulting by scheme."""
        parsed = urlparse(self.redirect_uri)
        if parsed.port:
            return parsed.port
        return 443 if parsed.scheme == "https" else 80

    @property
    def callback_path(self) -> str:
        """Path of the redirect URI."""
        return urlparse(self.redirect_uri).path or "/"

    @classmethod
    def from_env(cls) -> "RedditOAuthConfig":
        """
        Load configuration from environment variables.

        Required environment variables:
            REDDIT_CLIENT_ID: Reddit app client ID
            REDDIT_CLIENT_SECRET: Reddit app client secret

        Optional environment variables:
            REDDIT_REDIRECT_URI: Redirect URI registered for the app
            REDDIT_USER_AGENT: Application user agent
            REDDIT_TOKEN_FILE: Token file path (default: .reddit_tokens.json)

        Returns:
            RedditOAuthConfig instance

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        client_id = os.environ.get("REDDIT_CLIENT_ID")
        client_secret = os.environ.get("REDDIT_CLIENT_SECRET")

        if not client_id or not client_secret:
            raise ConfigurationError(
                "Missing Reddit OAuth credentials. Set environment variables:\n"
                "  REDDIT_CLIENT_ID=your_client_id\n"
                "  REDDIT_CLIENT_SECRET=your_client_secret\n"
                "\n"
                "Create an app at: https://www.reddit.com/prefs/apps"
            )

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=os.environ.get("REDDIT_REDIRECT_URI", ""),
            user_agent=os.environ.get("REDDIT_USER_AGENT", ""),
            token_file=os.environ.get("REDDIT_TOKEN_FILE", ".reddit_tokens.json"),
        )
