"""
OAuth coordinator for high-level OAuth operations.

This module provides the main interface for OAuth operations in the
application. It wires the configuration, transport, token storage and token
manager together, and provides simple methods for obtaining the
Authorization header for API calls.
"""

import logging
from typing import Any, Iterable, Optional, Union

from src.api.transport import Transport

from .auth_server import run_authorization_flow
from .config import RedditOAuthConfig
from .token_manager import GrantResult, TokenManager
from .token_storage import FileStore, TokenStorage

logger = logging.getLogger(__name__)


class OAuthCoordinator:
    """
    High-level coordinator for OAuth operations.

    This is the main interface that applications should use for OAuth.
    It handles the complete authorization lifecycle and provides simple
    methods for obtaining valid access tokens.

    Example:
        coordinator = OAuthCoordinator()
        if coordinator.ensure_authorized(remember=86400):
            header = coordinator.get_authorization_header()
            # Use header for API calls
    """

    def __init__(
        self,
        config: Optional[RedditOAuthConfig] = None,
        storage: Optional[TokenStorage] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize OAuth coordinator.

        Args:
            config: OAuth configuration (loads from environment if not provided)
            storage: Token storage (file-backed at config.token_file if not
                     provided)
            transport: HTTP transport (created from config if not provided)
        """
        self.config = config or RedditOAuthConfig.from_env()
        self.storage = storage or TokenStorage(
            FileStore(self.config.token_file), self.config.token_key
        )
        self.transport = transport or Transport.from_config(self.config)
        self.token_manager = TokenManager(self.config, self.transport, self.storage)

    def ensure_authorized(
        self,
        scopes: Union[str, Iterable[str]] = "*",
        remember: Optional[float] = None,
        auto_open_browser: bool = True,
    ) -> bool:
        """
        Ensure we have a token, running the authorization flow if needed.

        Args:
            scopes: Scopes to request if authorization is needed
            remember: Seconds to persist the token for
            auto_open_browser: Whether to auto-open browser for auth

        Returns:
            True if authorized (or authorization succeeded), False if failed
        """
        if self.token_manager.is_authorized():
            logger.info("Already authorized")
            return True

        logger.info("No token found, starting authorization flow")
        return self.run_authorization_flow(scopes, remember, auto_open_browser).success

    def run_authorization_flow(
        self,
        scopes: Union[str, Iterable[str]] = "*",
        remember: Optional[float] = None,
        open_browser: bool = True,
    ) -> GrantResult:
        """
        Run the complete OAuth authorization code flow.

        Args:
            scopes: Scopes to request
            remember: Seconds to persist the token for
            open_browser: Whether to automatically open browser

        Returns:
            GrantResult of the authorization
        """
        result = run_authorization_flow(
            self.token_manager,
            scopes=scopes,
            remember=remember,
            open_browser=open_browser,
            timeout=300,
        )

        if result.success:
            logger.info("Authorization complete")
        else:
            logger.error(f"Authorization failed: {result.error} - {result.error_description}")
        return result

    def get_access_token(self) -> str:
        """
        Get a valid access token for API calls.

        Returns:
            Access token string

        Raises:
            TokenNotAvailableError: If not authorized
        """
        return self.token_manager.get_access_token()

    def get_authorization_header(self) -> str:
        """
        Get the Authorization header value for API requests.

        Returns:
            "<token_type> <access_token>", e.g. "bearer abc"

        Raises:
            TokenNotAvailableError: If not authorized
        """
        return self.token_manager.authorization_header()

    def is_authorized(self) -> bool:
        """Check if currently authorized (refreshing an expired token)."""
        return self.token_manager.is_authorized()

    def get_status(self) -> dict:
        """
        Get current authorization status for diagnostics.

        Example:
            status = coordinator.get_status()
            if status["authorized"]:
                print(f"Token expires in {status['expires_in_seconds']} seconds")
        """
        return self.token_manager.get_token_status()

    def revoke(self) -> Any:
        """
        Revoke current authorization with Reddit and delete the stored token.

        Returns:
            Decoded revoke response, or None if there was no token
        """
        response = self.token_manager.revoke_token()
        logger.info("Authorization revoked. Re-authorization required.")
        return response

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()
