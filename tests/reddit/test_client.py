"""Tests for the Reddit API client."""

import time

import pytest

from src.api.exceptions import (
    RedditAPIError,
    RedditAuthenticationError,
    RedditRateLimitError,
    ValidationError,
)
from src.oauth.coordinator import OAuthCoordinator
from src.oauth.token_storage import MemoryStore, TokenData, TokenStorage
from src.reddit.client import RedditClient

API = "https://oauth.reddit.com"


@pytest.fixture
def storage():
    """In-memory token storage."""
    return TokenStorage(MemoryStore())


@pytest.fixture
def client(config, storage, transport):
    """Client without a token."""
    coordinator = OAuthCoordinator(config=config, storage=storage, transport=transport)
    return RedditClient(coordinator)


@pytest.fixture
def authorized_client(client, storage):
    """Client holding a valid bearer token."""
    storage.save(TokenData("abc", "bearer", "*", int(time.time()), 3600), remember=3600)
    return client


class TestRedditClient:
    """Tests for endpoint dispatch."""

    def test_initialization(self, client):
        """The base URL comes from the OAuth config."""
        assert client.base_url == API

    def test_get_current_user(self, authorized_client, session, make_response):
        """GET endpoints send the bearer header and no body."""
        session.request.return_value = make_response(200, {"name": "tester"})

        result = authorized_client.get_current_user()

        assert result == {"name": "tester"}
        args, kwargs = session.request.call_args
        assert args == ("GET", f"{API}/api/v1/me")
        assert kwargs["headers"]["Authorization"] == "bearer abc"
        assert kwargs["params"] is None
        assert kwargs["data"] is None

    def test_get_with_query(self, authorized_client, session, make_response):
        """Query parameters are sent for GET endpoints."""
        session.request.return_value = make_response(200, {"kind": "Listing"})

        authorized_client.get_posts("hot", "python", limit=10)

        args, kwargs = session.request.call_args
        assert args == ("GET", f"{API}/r/python/hot")
        assert kwargs["params"] == {"limit": "10"}

    def test_post_endpoint(self, authorized_client, session, make_response):
        """POST endpoints send a form body."""
        session.request.return_value = make_response(200, {"json": {"errors": []}})

        authorized_client.add_comment("t3_abc", "Nice post")

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{API}/api/comment")
        assert kwargs["data"] == {"api_type": "json", "thing_id": "t3_abc", "text": "Nice post"}
        assert kwargs["params"] is None

    def test_call_by_name(self, authorized_client, session, make_response):
        """Endpoints can be called by name."""
        session.request.return_value = make_response(200, {})

        authorized_client.call("vote", "t3_abc", dir=-1)

        assert session.request.call_args[1]["data"] == {"id": "t3_abc", "dir": "-1"}

    def test_unknown_endpoint(self, client):
        """Unknown endpoint names raise."""
        with pytest.raises(ValueError, match="Unknown endpoint"):
            client.call("no_such_endpoint")

        with pytest.raises(AttributeError):
            client.no_such_endpoint()

    def test_endpoint_methods_listed(self, client):
        """Endpoint methods show up in dir() and carry documentation."""
        assert "vote" in dir(client)
        assert "POST /api/vote" in client.vote.__doc__
        assert client.vote.__name__ == "vote"

    def test_validation_before_io(self, authorized_client, session):
        """Invalid arguments raise before any request."""
        with pytest.raises(ValidationError, match="text parameter in set_link_flair"):
            authorized_client.set_link_flair("python", "t3_abc", "template", "x" * 65)

        session.request.assert_not_called()

    def test_empty_path_value_before_io(self, authorized_client, session):
        """An empty subreddit never produces a request."""
        with pytest.raises(ValidationError, match="subreddit parameter in get_sub_settings"):
            authorized_client.get_sub_settings("")

        session.request.assert_not_called()

    def test_unauthorized_raises(self, client, session):
        """Calls without a token raise RedditAuthenticationError."""
        with pytest.raises(RedditAuthenticationError, match="No OAuth token"):
            client.get_current_user()

        session.request.assert_not_called()

    def test_rate_limit(self, authorized_client, session, make_response):
        """429 raises RedditRateLimitError."""
        session.request.return_value = make_response(429, {"error": "RATELIMIT"})

        with pytest.raises(RedditRateLimitError) as exc_info:
            authorized_client.get_current_user()

        assert exc_info.value.message == "RATELIMIT"
        assert session.request.call_count == 1

    def test_empty_body_returned(self, authorized_client, session, make_response):
        """An empty response body comes back as an empty string."""
        session.request.return_value = make_response(200, "")

        assert authorized_client.approve("t3_abc") == ""

    def test_generic_get_and_post(self, authorized_client, session, make_response):
        """Arbitrary paths can be requested."""
        session.request.return_value = make_response(200, {})

        authorized_client.get("api/v1/me/karma", {"raw_json": 1})
        assert session.request.call_args[0] == ("GET", f"{API}/api/v1/me/karma")
        assert session.request.call_args[1]["params"] == {"raw_json": "1"}

        authorized_client.post("/api/hide", {"id": ["t3_a", "t3_b"]})
        assert session.request.call_args[0] == ("POST", f"{API}/api/hide")
        assert session.request.call_args[1]["data"] == {"id": "t3_a,t3_b"}

    def test_transfer_info(self, authorized_client, session, make_response):
        """Transfer info describes the last call."""
        session.request.return_value = make_response(200, {})

        authorized_client.get_karma()

        assert authorized_client.get_transfer_info("http_code") == 200


class TestSubSettings:
    """Tests for set_sub_settings."""

    @pytest.fixture
    def current_settings(self):
        """Settings as /about/edit returns them."""
        return {
            "kind": "subreddit_settings",
            "data": {
                "default_set": True,
                "title": "Python",
                "domain": "python.example",
                "header_hover_text": "hover",
                "subreddit_type": "public",
                "public_description": "old",
                "wiki_edit_age": None,
            },
        }

    def test_merges_options(self, authorized_client, session, make_response, current_settings):
        """Only changed settings need to be passed."""
        session.request.side_effect = [
            make_response(200, current_settings),
            make_response(200, {"json": {"errors": []}}),
        ]

        authorized_client.set_sub_settings("python", public_description="new")

        first, second = session.request.call_args_list
        assert first[0] == ("GET", f"{API}/r/python/about/edit")
        assert second[0] == ("POST", f"{API}/api/site_admin")
        assert second[1]["data"] == {
            "allow_top": "true",
            "header-title": "Python",
            "type": "public",
            "public_description": "new",
            "api_type": "json",
            "name": "python",
        }

    def test_unknown_option(self, authorized_client, session, make_response, current_settings):
        """Unknown option keys are rejected before the update."""
        session.request.return_value = make_response(200, current_settings)

        with pytest.raises(ValidationError, match="Invalid option key"):
            authorized_client.set_sub_settings("python", not_a_setting=1)

        assert session.request.call_count == 1

    def test_unexpected_settings_response(self, authorized_client, session, make_response):
        """A settings response without data raises."""
        session.request.return_value = make_response(200, "<html></html>")

        with pytest.raises(RedditAPIError, match="Unexpected settings response"):
            authorized_client.set_sub_settings("python", over_18=True)

    def test_invalid_subreddit(self, authorized_client, session):
        """The subreddit must be a non-empty string."""
        with pytest.raises(ValidationError):
            authorized_client.set_sub_settings("")

        session.request.assert_not_called()


class TestClientAuth:
    """Tests for the OAuth delegates."""

    def test_login_then_call(self, client, session, make_response):
        """A password login makes endpoint calls authorized."""
        session.request.side_effect = [
            make_response(
                200,
                {"access_token": "abc", "token_type": "bearer", "expires_in": 3600, "scope": "*"},
            ),
            make_response(200, {"name": "tester"}),
        ]

        assert client.login("tester", "hunter2").success is True
        assert client.is_authorized() is True

        client.get_current_user()

        assert session.request.call_args[1]["headers"]["Authorization"] == "bearer abc"

    def test_authorize_returns_url(self, client):
        """authorize without a code returns the authorization URL."""
        result = client.authorize(["identity"])

        assert result.success is False
        assert result.redirect_url.startswith("https://www.reddit.com/api/v1/authorize?")

    def test_get_auth_url(self, client):
        """get_auth_url uses the given state."""
        assert "state=abc123" in client.get_auth_url("abc123")

    def test_logout(self, authorized_client, session, make_response, storage):
        """logout revokes the token."""
        session.request.return_value = make_response(200, "")

        authorized_client.logout()

        assert storage.exists() is False
        assert authorized_client.is_authorized() is False

    def test_context_manager(self, client, session):
        """Leaving the context closes the session."""
        with client:
            pass

        session.close.assert_called_once()
