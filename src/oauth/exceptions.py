"""
OAuth exception classes for Reddit API integration.

This module defines the exception hierarchy for OAuth-related errors.
Grant rejections are not exceptions: they come back as failed
GrantResult values from the token manager.
"""

from src.api.exceptions import ValidationError


class RedditOAuthError(Exception):
    """Base exception for all Reddit OAuth errors."""

    pass


class ConfigurationError(RedditOAuthError):
    """OAuth configuration error (missing or invalid configuration)."""

    pass


class AuthorizationError(RedditOAuthError):
    """OAuth authorization flow cannot proceed (e.g. no redirect URI)."""

    pass


class InvalidScopeError(AuthorizationError, ValidationError):
    """Requested scope is not part of Reddit's scope enumeration."""

    pass


class TokenNotAvailableError(RedditOAuthError):
    """No token available (need to log in or authorize first)."""

    pass


class TokenStorageError(RedditOAuthError):
    """Token storage operation failed (file I/O error)."""

    pass
