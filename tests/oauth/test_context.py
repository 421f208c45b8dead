"""Tests for the inbound request context."""

from flask import Flask, request

from src.oauth.context import RequestContext, SetCookie


class TestRequestContext:
    """Tests for RequestContext."""

    def test_empty_context(self):
        """A default context carries nothing."""
        context = RequestContext()

        assert context.code is None
        assert context.state is None
        assert context.error is None
        assert context.cookies == {}
        assert context.set_cookies == []

    def test_from_url(self):
        """Query parameters are parsed from the redirect URL."""
        context = RequestContext.from_url(
            "http://localhost:8080/cb?state=xyz&code=abc123",
            cookies={"reddit_token": "stored"},
            user_agent="Mozilla/5.0",
        )

        assert context.code == "abc123"
        assert context.state == "xyz"
        assert context.cookies == {"reddit_token": "stored"}
        assert context.user_agent == "Mozilla/5.0"

    def test_error_redirect(self):
        """The error parameter is exposed."""
        context = RequestContext.from_url("http://localhost/cb?error=access_denied&state=s")

        assert context.error == "access_denied"
        assert context.code is None

    def test_empty_code_is_none(self):
        """An empty code parameter counts as absent."""
        context = RequestContext(query={"code": ""})

        assert context.code is None

    def test_from_flask(self):
        """A Flask request is converted into a context."""
        app = Flask(__name__)

        with app.test_request_context(
            "/cb?code=abc&state=s1",
            headers={"User-Agent": "TestBrowser/1.0", "Cookie": "reddit_token=t"},
        ):
            context = RequestContext.from_flask(request)

        assert context.code == "abc"
        assert context.state == "s1"
        assert context.user_agent == "TestBrowser/1.0"
        assert context.cookies == {"reddit_token": "t"}


class TestSetCookie:
    """Tests for SetCookie."""

    def test_defaults(self):
        """Cookies default to the root path and no expiry."""
        cookie = SetCookie("reddit_token", "value")

        assert cookie.path == "/"
        assert cookie.expires is None
