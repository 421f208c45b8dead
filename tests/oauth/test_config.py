"""Tests for OAuth configuration module."""

import dataclasses
from unittest import mock

import pytest

from src.oauth.config import RedditOAuthConfig
from src.oauth.exceptions import ConfigurationError


class TestRedditOAuthConfig:
    """Tests for RedditOAuthConfig dataclass."""

    def test_create_config_with_required_fields(self):
        """Config can be created with just the client credentials."""
        config = RedditOAuthConfig(client_id="test_id", client_secret="test_secret")

        assert config.client_id == "test_id"
        assert config.client_secret == "test_secret"
        assert config.redirect_uri == ""
        assert config.user_agent == ""

    def test_config_has_reddit_defaults(self):
        """Config defaults to Reddit's OAuth endpoints and timeouts."""
        config = RedditOAuthConfig(client_id="test_id", client_secret="test_secret")

        assert config.authorization_url == "https://www.reddit.com/api/v1/authorize"
        assert config.token_url == "https://www.reddit.com/api/v1/access_token"
        assert config.revoke_url == "https://www.reddit.com/api/v1/revoke_token"
        assert config.api_base_url == "https://oauth.reddit.com"
        assert config.token_key == "reddit_token"
        assert config.connect_timeout == 5.0
        assert config.timeout == 10.0
        assert config.verify_ssl is True

    def test_config_is_immutable(self):
        """Credentials cannot be changed after creation."""
        config = RedditOAuthConfig(client_id="test_id", client_secret="test_secret")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.client_id = "other"

    def test_empty_client_id_raises_error(self):
        """Empty client_id raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="client_id cannot be empty"):
            RedditOAuthConfig(client_id="", client_secret="test_secret")

    def test_empty_client_secret_raises_error(self):
        """Empty client_secret raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="client_secret cannot be empty"):
            RedditOAuthConfig(client_id="test_id", client_secret="")

    def test_invalid_redirect_uri_raises_error(self):
        """redirect_uri must be an http(s) URL."""
        with pytest.raises(ConfigurationError, match="redirect_uri"):
            RedditOAuthConfig(
                client_id="test_id", client_secret="test_secret", redirect_uri="localhost:8080"
            )

    def test_non_positive_timeout_raises_error(self):
        """Timeouts must be positive."""
        with pytest.raises(ConfigurationError, match="Timeouts must be positive"):
            RedditOAuthConfig(client_id="test_id", client_secret="test_secret", timeout=0)

    def test_empty_token_key_raises_error(self):
        """token_key cannot be empty."""
        with pytest.raises(ConfigurationError, match="token_key"):
            RedditOAuthConfig(client_id="test_id", client_secret="test_secret", token_key="")

    def test_callback_parts_from_redirect_uri(self):
        """Callback host, port and path are parsed from redirect_uri."""
        config = RedditOAuthConfig(
            client_id="test_id",
            client_secret="test_secret",
            redirect_uri="http://127.0.0.1:8765/oauth/callback",
        )

        assert config.callback_host == "127.0.0.1"
        assert config.callback_port == 8765
        assert config.callback_path == "/oauth/callback"

    def test_callback_port_defaults_by_scheme(self):
        """Port defaults to 443 for https and 80 for http."""
        https = RedditOAuthConfig(
            client_id="id", client_secret="secret", redirect_uri="https://example.com/cb"
        )
        http = RedditOAuthConfig(
            client_id="id", client_secret="secret", redirect_uri="http://example.com"
        )

        assert https.callback_port == 443
        assert http.callback_port == 80
        assert http.callback_path == "/"


class TestConfigFromEnv:
    """Tests for RedditOAuthConfig.from_env."""

    @mock.patch.dict(
        "os.environ",
        {
            "REDDIT_CLIENT_ID": "env_client_id",
            "REDDIT_CLIENT_SECRET": "env_client_secret",
            "REDDIT_REDIRECT_URI": "http://localhost:8080/cb",
            "REDDIT_USER_AGENT": "env-agent/1.0",
            "REDDIT_TOKEN_FILE": "/tmp/env_tokens.json",
        },
        clear=True,
    )
    def test_from_env_loads_all_variables(self):
        """from_env loads configuration from environment variables."""
        config = RedditOAuthConfig.from_env()

        assert config.client_id == "env_client_id"
        assert config.client_secret == "env_client_secret"
        assert config.redirect_uri == "http://localhost:8080/cb"
        assert config.user_agent == "env-agent/1.0"
        assert config.token_file == "/tmp/env_tokens.json"

    @mock.patch.dict(
        "os.environ",
        {"REDDIT_CLIENT_ID": "env_client_id", "REDDIT_CLIENT_SECRET": "env_client_secret"},
        clear=True,
    )
    def test_from_env_uses_defaults(self):
        """Optional variables fall back to defaults."""
        config = RedditOAuthConfig.from_env()

        assert config.redirect_uri == ""
        assert config.user_agent == ""
        assert config.token_file == ".reddit_tokens.json"

    @mock.patch.dict("os.environ", {"REDDIT_CLIENT_ID": "only_id"}, clear=True)
    def test_from_env_missing_secret_raises_error(self):
        """from_env raises ConfigurationError when credentials are missing."""
        with pytest.raises(ConfigurationError, match="REDDIT_CLIENT_SECRET"):
            RedditOAuthConfig.from_env()
