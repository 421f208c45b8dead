"""Tests for OAuth coordinator module."""

import time
from unittest import mock

import pytest

from src.api.transport import Transport
from src.oauth.coordinator import OAuthCoordinator
from src.oauth.exceptions import ConfigurationError, TokenNotAvailableError
from src.oauth.token_manager import GrantResult
from src.oauth.token_storage import FileStore, MemoryStore, TokenData, TokenStorage


@pytest.fixture
def storage():
    """In-memory token storage."""
    return TokenStorage(MemoryStore())


@pytest.fixture
def coordinator(config, storage, transport):
    """Coordinator wired to in-memory storage and the mocked session."""
    return OAuthCoordinator(config=config, storage=storage, transport=transport)


@pytest.fixture
def valid_token():
    """Token issued just now."""
    return TokenData("abc", "bearer", "identity", int(time.time()), 3600)


class TestOAuthCoordinator:
    """Tests for OAuthCoordinator class."""

    def test_initialization_defaults_to_file_storage(self, config):
        """Without storage, tokens are kept in the configured file."""
        coordinator = OAuthCoordinator(config=config)

        assert isinstance(coordinator.storage.store, FileStore)
        assert str(coordinator.storage.store.path) == config.token_file
        assert isinstance(coordinator.transport, Transport)
        assert coordinator.token_manager.storage is coordinator.storage

    @mock.patch.dict("os.environ", {}, clear=True)
    def test_initialization_from_env_requires_credentials(self):
        """Without config, credentials come from the environment."""
        with pytest.raises(ConfigurationError):
            OAuthCoordinator()

    @mock.patch.dict(
        "os.environ",
        {"REDDIT_CLIENT_ID": "env_id", "REDDIT_CLIENT_SECRET": "env_secret"},
        clear=True,
    )
    def test_initialization_from_env(self, storage):
        """Config is loaded from the environment when not given."""
        coordinator = OAuthCoordinator(storage=storage)

        assert coordinator.config.client_id == "env_id"

    def test_ensure_authorized_with_token(self, coordinator, storage, valid_token):
        """ensure_authorized returns True without a flow when a token exists."""
        storage.save(valid_token, remember=3600)

        with mock.patch.object(coordinator, "run_authorization_flow") as mock_flow:
            assert coordinator.ensure_authorized() is True

        mock_flow.assert_not_called()

    def test_ensure_authorized_runs_flow(self, coordinator):
        """ensure_authorized runs the flow when there is no token."""
        with mock.patch.object(
            coordinator, "run_authorization_flow", return_value=GrantResult(success=True)
        ) as mock_flow:
            assert coordinator.ensure_authorized(["identity"], remember=86400) is True

        mock_flow.assert_called_once_with(["identity"], 86400, True)

    def test_ensure_authorized_flow_failure(self, coordinator):
        """ensure_authorized returns False when the flow fails."""
        with mock.patch.object(
            coordinator,
            "run_authorization_flow",
            return_value=GrantResult(success=False, error="timeout"),
        ):
            assert coordinator.ensure_authorized(auto_open_browser=False) is False

    @mock.patch("src.oauth.coordinator.run_authorization_flow")
    def test_run_authorization_flow_delegates(self, mock_flow, coordinator):
        """run_authorization_flow passes the token manager through."""
        mock_flow.return_value = GrantResult(success=True)

        result = coordinator.run_authorization_flow("*", 3600, open_browser=False)

        assert result.success is True
        mock_flow.assert_called_once_with(
            coordinator.token_manager,
            scopes="*",
            remember=3600,
            open_browser=False,
            timeout=300,
        )

    def test_get_authorization_header(self, coordinator, storage, valid_token):
        """The header is built from the stored token."""
        storage.save(valid_token, remember=3600)

        assert coordinator.get_authorization_header() == "bearer abc"
        assert coordinator.get_access_token() == "abc"
        assert coordinator.is_authorized() is True

    def test_get_authorization_header_unauthorized(self, coordinator):
        """Without a token the header cannot be built."""
        with pytest.raises(TokenNotAvailableError):
            coordinator.get_authorization_header()

        assert coordinator.is_authorized() is False

    def test_get_status(self, coordinator, storage, valid_token):
        """get_status reports the token manager status."""
        assert coordinator.get_status()["authorized"] is False

        storage.save(valid_token, remember=3600)

        status = coordinator.get_status()
        assert status["authorized"] is True
        assert status["scope"] == "identity"

    def test_revoke(self, coordinator, storage, session, make_response, valid_token):
        """revoke calls Reddit and deletes the stored token."""
        storage.save(valid_token, remember=3600)
        session.request.return_value = make_response(200, "")

        coordinator.revoke()

        assert storage.exists() is False
        assert session.request.call_args[0][1] == "https://www.reddit.com/api/v1/revoke_token"

    def test_close(self, coordinator, session):
        """close closes the transport session."""
        coordinator.close()

        session.close.assert_called_once()
