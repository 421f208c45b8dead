"""Tests for OAuth scopes module."""

import pytest

from src.oauth.exceptions import InvalidScopeError
from src.oauth.scopes import ALL_SCOPES, SCOPES, is_valid_scope, normalize_scopes


class TestScopes:
    """Tests for the scope enumeration."""

    def test_there_are_26_scopes(self):
        """Reddit defines 26 scopes."""
        assert len(SCOPES) == 26
        assert len(set(SCOPES)) == 26
        assert "identity" in SCOPES
        assert "modwiki" in SCOPES

    def test_wildcard_is_all_scopes(self):
        """The wildcard expands to every scope."""
        assert normalize_scopes(ALL_SCOPES) == list(SCOPES)


class TestNormalizeScopes:
    """Tests for normalize_scopes."""

    def test_list_subset(self):
        """A list of known scopes is accepted."""
        assert normalize_scopes(["identity", "read"]) == ["identity", "read"]

    def test_comma_separated_string(self):
        """A comma-separated string is split."""
        assert normalize_scopes("identity, read,vote") == ["identity", "read", "vote"]

    def test_single_scope_string(self):
        """A single scope name is accepted."""
        assert normalize_scopes("identity") == ["identity"]

    def test_duplicates_removed(self):
        """Duplicates are dropped, order kept."""
        assert normalize_scopes(("read", "identity", "read")) == ["read", "identity"]

    def test_unknown_scope_raises(self):
        """Unknown scopes raise InvalidScopeError naming them."""
        with pytest.raises(InvalidScopeError, match="bogus"):
            normalize_scopes(["identity", "bogus"])

    def test_empty_set_raises(self):
        """An empty scope set is invalid."""
        with pytest.raises(InvalidScopeError):
            normalize_scopes([])

    def test_non_string_entries_raise(self):
        """Non-string entries are invalid."""
        with pytest.raises(InvalidScopeError):
            normalize_scopes(["identity", 5])

    def test_non_iterable_raises(self):
        """Non-iterables are invalid."""
        with pytest.raises(InvalidScopeError) as exc_info:
            normalize_scopes(42)

        assert exc_info.value.param == "scopes"

    def test_is_valid_scope(self):
        """is_valid_scope reports instead of raising."""
        assert is_valid_scope("*") is True
        assert is_valid_scope(["read"]) is True
        assert is_valid_scope(["read", "nope"]) is False
