"""Shared fixtures for Reddit API client tests."""

import json
from datetime import timedelta
from unittest import mock

import pytest
import requests

from src.api.transport import Transport
from src.oauth.config import RedditOAuthConfig


def build_response(status_code=200, body=None, url="https://oauth.reddit.com/api/v1/me"):
    """
    Build a real requests.Response.

    Dicts and lists are JSON-encoded, strings are sent verbatim.
    """
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    response.elapsed = timedelta(milliseconds=120)

    if isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json; charset=UTF-8"
    else:
        response._content = (body or "").encode()
        response.headers["Content-Type"] = "text/html"

    return response


@pytest.fixture
def make_response():
    """Factory for requests.Response objects."""
    return build_response


@pytest.fixture
def config():
    """Create test OAuth config."""
    return RedditOAuthConfig(
        client_id="test_client_id",
        client_secret="test_client_secret",
        redirect_uri="http://localhost:8080/reddit_callback",
        user_agent="test:reddit-client:v1.0 (by /u/tester)",
    )


@pytest.fixture
def session():
    """Mocked requests session."""
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def transport(config, session):
    """Transport wired to the mocked session."""
    return Transport(
        config.client_id,
        config.client_secret,
        user_agent=config.user_agent,
        session=session,
    )
