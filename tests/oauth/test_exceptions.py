"""Tests for OAuth exceptions module."""

import pytest

from src.api.exceptions import ValidationError
from src.oauth.exceptions import (
    AuthorizationError,
    ConfigurationError,
    InvalidScopeError,
    RedditOAuthError,
    TokenNotAvailableError,
    TokenStorageError,
)


class TestOAuthExceptions:
    """Tests for the OAuth exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            AuthorizationError,
            InvalidScopeError,
            TokenNotAvailableError,
            TokenStorageError,
        ],
    )
    def test_all_inherit_from_base(self, exc_class):
        """All OAuth exceptions inherit from RedditOAuthError."""
        assert issubclass(exc_class, RedditOAuthError)

    def test_exceptions_carry_message(self):
        """Exceptions keep their message."""
        error = TokenNotAvailableError("No token available")

        assert str(error) == "No token available"

    def test_invalid_scope_is_authorization_and_validation_error(self):
        """InvalidScopeError can be caught as either error kind."""
        error = InvalidScopeError("Invalid scope: foo", param="scopes")

        assert isinstance(error, AuthorizationError)
        assert isinstance(error, ValidationError)
        assert isinstance(error, ValueError)
        assert error.param == "scopes"
        assert str(error) == "Invalid scope: foo"

    def test_can_catch_with_base_class(self):
        """Specific exceptions can be caught with the base class."""
        with pytest.raises(RedditOAuthError):
            raise TokenStorageError("disk full")
