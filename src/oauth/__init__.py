"""
OAuth 2.0 module for Reddit API integration.

This module provides the Reddit OAuth 2.0 token lifecycle: password grant
for script apps, the authorization code flow for web and desktop apps,
silent refresh of expired tokens, and revocation.

Public API:
    RedditOAuthConfig: OAuth configuration management
    RequestContext: Explicit view of the inbound HTTP request
    TokenData: Token data structure
    TokenStorage: Token persistence over a KeyValueStore
    MemoryStore, FileStore, CookieStore: KeyValueStore backends
    TokenManager: Token lifecycle management
    GrantResult: Outcome of grant, refresh and authorize calls
    OAuthCoordinator: High-level OAuth interface

Exceptions:
    RedditOAuthError: Base exception
    ConfigurationError: Configuration error
    AuthorizationError: Authorization flow cannot proceed
    InvalidScopeError: Unknown scope requested
    TokenNotAvailableError: No token available
    TokenStorageError: Storage operation failed
"""

from .auth_server import OAuthCallbackServer, run_authorization_flow
from .config import RedditOAuthConfig
from .context import RequestContext, SetCookie
from .coordinator import OAuthCoordinator
from .exceptions import (
    AuthorizationError,
    ConfigurationError,
    InvalidScopeError,
    RedditOAuthError,
    TokenNotAvailableError,
    TokenStorageError,
)
from .scopes import ALL_SCOPES, SCOPES, is_valid_scope, normalize_scopes
from .token_manager import GrantResult, TokenManager
from .token_storage import (
    CookieStore,
    FileStore,
    KeyValueStore,
    MemoryStore,
    TokenData,
    TokenStorage,
)

__all__ = [
    # Configuration
    "RedditOAuthConfig",
    # Request context
    "RequestContext",
    "SetCookie",
    # Scopes
    "SCOPES",
    "ALL_SCOPES",
    "normalize_scopes",
    "is_valid_scope",
    # Token Storage
    "TokenData",
    "TokenStorage",
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "CookieStore",
    # Token Manager
    "TokenManager",
    "GrantResult",
    # Authorization Server
    "OAuthCallbackServer",
    "run_authorization_flow",
    # Coordinator
    "OAuthCoordinator",
    # Exceptions
    "RedditOAuthError",
    "ConfigurationError",
    "AuthorizationError",
    "InvalidScopeError",
    "TokenNotAvailableError",
    "TokenStorageError",
]
