"""
Token manager for Reddit OAuth integration.

This module manages the OAuth token lifecycle including:
- Password grant (script apps logging in as a user)
- Authorization code grant (web apps redirecting to Reddit)
- Token refresh (refresh token -> new access token)
- Token revocation
- Authorization URL generation and state verification

Grant, refresh and authorize calls never raise for a rejected grant. They
return a GrantResult describing the outcome, and leave the current token
untouched on failure. Network failures still propagate as transport errors.
"""

import logging
import math
import secrets
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from urllib.parse import urlencode

from src.api.exceptions import RedditAPIError, RedditTransportError, ValidationError
from src.api.transport import Transport

from .config import RedditOAuthConfig
from .context import RequestContext
from .exceptions import AuthorizationError, TokenNotAvailableError
from .scopes import SCOPES, normalize_scopes
from .token_storage import MemoryStore, TokenData, TokenStorage

logger = logging.getLogger(__name__)

# Authorizations remembered at least this long request a refresh token
PERMANENT_THRESHOLD_SECONDS = 3600


@dataclass
class GrantResult:
    """
    Result of a grant, refresh or authorize call.

    Attributes:
        success: Whether a token is now available
        token: The current token (if successful)
        error: Failure reason (e.g. "invalid_grant", "authorization_required",
               "no_refresh_token", "state_mismatch", "access_denied")
        error_description: Human-readable error description (if failed)
        redirect_url: Authorization URL the user agent must be sent to
                      (only for authorize with redirect=True)
    """

    success: bool
    token: Optional[TokenData] = None
    error: Optional[str] = None
    error_description: Optional[str] = None
    redirect_url: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


def _generate_state() -> str:
    return secrets.token_urlsafe(16)


def _validate_remember(remember: Any) -> None:
    if remember is None:
        return
    if (
        isinstance(remember, bool)
        or not isinstance(remember, (int, float))
        or (isinstance(remember, float) and not math.isfinite(remember))
        or remember < 0
    ):
        raise ValidationError(
            "remember must be a finite non-negative number of seconds or None",
            param="remember",
        )


def _join_scope(scope: Any) -> str:
    """Reddit reports granted scopes space-separated; keep them comma-joined."""
    if not isinstance(scope, str):
        return ""
    return ",".join(s for s in scope.replace(",", " ").split() if s)


class TokenManager:
    """
    Manages OAuth token lifecycle.

    Responsibilities:
    - Obtain tokens by password or authorization code grant
    - Refresh expired access tokens (silently, from is_authorized)
    - Persist tokens when asked to remember them
    - Revoke tokens on logout
    - Provide the Authorization header to API clients

    Example:
        manager = TokenManager(config)
        result = manager.login("username", "password")
        if result:
            header = manager.authorization_header()
    """

    def __init__(
        self,
        config: RedditOAuthConfig,
        transport: Optional[Transport] = None,
        storage: Optional[TokenStorage] = None,
        context: Optional[RequestContext] = None,
        clock: Callable[[], float] = time.time,
        state_factory: Callable[[], str] = _generate_state,
    ):
        """
        Initialize token manager.

        Args:
            config: OAuth configuration
            transport: HTTP transport (created from config if not provided)
            storage: Token storage (in-memory if not provided)
            context: Inbound request context (empty if not provided)
            clock: Returns the current unix time
            state_factory: Generates anti-CSRF state values
        """
        self.config = config
        self.transport = transport or Transport.from_config(config)
        self.storage = storage or TokenStorage(MemoryStore(), config.token_key)
        self.context = context or RequestContext()
        self.scopes: List[str] = list(SCOPES)
        self.remember: Optional[float] = None
        self._clock = clock
        self._state_factory = state_factory
        self._token: Optional[TokenData] = None
        self._refreshed_at: Optional[int] = None
        self._issued_state: Optional[str] = None

    @property
    def token(self) -> Optional[TokenData]:
        """The in-memory token, if any."""
        return self._token

    def login(
        self, username: str, password: str, remember: Optional[float] = None
    ) -> GrantResult:
        """
        Log in with a username and password (password grant).

        Only works for "script" type applications, for the developer
        accounts registered on the app.

        Args:
            username: Reddit username
            password: Reddit password
            remember: Seconds to persist the token for (None = do not persist)

        Returns:
            GrantResult with the token, or the rejection reason

        Raises:
            ValidationError: If arguments are invalid
            RedditTransportError: On network failure
        """
        if not isinstance(username, str) or not username:
            raise ValidationError("username must be a non-empty string", param="username")
        if not isinstance(password, str) or not password:
            raise ValidationError("password must be a non-empty string", param="password")
        _validate_remember(remember)

        self.scopes = list(SCOPES)
        self.remember = remember

        if self.is_authorized():
            try:
                if self.current_username() == username:
                    logger.info(f"Already logged in as {username}")
                    return GrantResult(success=True, token=self._token)
            except RedditTransportError:
                raise
            except RedditAPIError as e:
                logger.info(f"Current token rejected ({e.message}), logging in again")

        result = self._request_grant(
            {"grant_type": "password", "username": username, "password": password}
        )
        if result.success:
            self._accept(result.token, remember)
            logger.info(f"Logged in as {username}")
        return result

    def authorize(
        self,
        scopes: Union[str, Iterable[str]] = "*",
        redirect: bool = True,
        remember: Optional[float] = None,
        force: bool = False,
    ) -> GrantResult:
        """
        Authorize through the authorization code flow.

        On the first call there is no code yet: the result carries the
        authorization URL (when redirect is True) the user agent must visit.
        When Reddit redirects back, the request context carries the code and
        the next call exchanges it for a token.

        Args:
            scopes: "*" for all scopes, or the scopes to request
            redirect: Whether to return the authorization URL for redirecting
            remember: Seconds to persist the token for (None = do not persist).
                      At least an hour also requests a refresh token.
            force: Authorize even if a token is already available

        Returns:
            GrantResult with the token, or the reason authorization is still
            pending or failed

        Raises:
            AuthorizationError: If no redirect URI is configured
            InvalidScopeError: If scopes are not valid
            ValidationError: If other arguments are invalid
            RedditTransportError: On network failure
        """
        if not self.config.redirect_uri:
            raise AuthorizationError("A redirect URI must be configured to authorize")
        if not isinstance(redirect, bool):
            raise ValidationError("redirect must be a boolean", param="redirect")
        if not isinstance(force, bool):
            raise ValidationError("force must be a boolean", param="force")
        _validate_remember(remember)

        self.scopes = normalize_scopes(scopes)
        self.remember = remember

        if not force and self.is_authorized():
            return GrantResult(success=True, token=self._token)

        if self.context.error:
            logger.warning(f"Authorization denied: {self.context.error}")
            result = GrantResult(
                success=False,
                error=self.context.error,
                error_description=self.context.query.get("error_description"),
            )
        elif self.context.code and self._issued_state and not self.verify_state(
            self.context.state
        ):
            logger.warning("Authorization state does not match the issued state")
            result = GrantResult(
                success=False,
                error="state_mismatch",
                error_description="State parameter does not match the authorization request",
            )
        elif self.context.code:
            result = self._request_grant(
                {
                    "grant_type": "authorization_code",
                    "code": self.context.code,
                    "redirect_uri": self.config.redirect_uri,
                }
            )
            if result.success:
                self._accept(result.token, remember)
                logger.info("Authorization code exchanged for token")
                return result
        else:
            result = GrantResult(
                success=False,
                error="authorization_required",
                error_description="User must authorize the application",
            )

        if redirect:
            result.redirect_url = self.get_auth_url()
        return result

    def get_auth_url(self, state: Optional[str] = None) -> str:
        """
        Generate the Reddit authorization URL.

        Args:
            state: Anti-CSRF state (generated if not provided)

        Returns:
            Complete authorization URL with query parameters
        """
        state = state or self._state_factory()
        self._issued_state = state

        params = {
            "duration": "permanent" if self._is_permanent() else "temporary",
            "response_type": "code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "scope": ",".join(self.scopes),
            "state": state,
        }
        url = f"{self.config.authorization_url}?{urlencode(params, safe=',')}"
        logger.debug(f"Generated authorization URL: {url}")
        return url

    def verify_state(self, state: Optional[str]) -> bool:
        """Check a returned state against the last issued one."""
        if not self._issued_state or not isinstance(state, str):
            return False
        return secrets.compare_digest(state, self._issued_state)

    def is_authorized(self) -> bool:
        """
        Check if a token is available, refreshing it if it has expired.

        A refresh performed here is not persisted.

        Returns:
            True if a token could be loaded, False otherwise
        """
        token = self._load_token()
        if token is None:
            return False

        if token.refresh_token and self._is_expired(token):
            logger.info("Access token expired, refreshing")
            result = self.refresh_token()
            if not result.success:
                logger.warning(
                    f"Token refresh failed: {result.error} - {result.error_description}"
                )

        return True

    def refresh_token(self, remember: Optional[float] = None) -> GrantResult:
        """
        Refresh the access token using the refresh token.

        Args:
            remember: Seconds to persist the refreshed token for. When None
                      the token is neither re-timestamped nor persisted.

        Returns:
            GrantResult with the refreshed token, or the rejection reason

        Raises:
            ValidationError: If remember is invalid
            RedditTransportError: On network failure
        """
        _validate_remember(remember)

        current = self._token if self._token is not None else self._load_token()
        if current is None or not current.refresh_token:
            return GrantResult(
                success=False,
                error="no_refresh_token",
                error_description="No refresh token available. Authorize with remember >= 3600.",
            )

        result = self._request_grant(
            {"grant_type": "refresh_token", "refresh_token": current.refresh_token},
            previous=current,
            keep_issued_at=remember is None,
        )
        if not result.success:
            return result

        if remember is None:
            self._token = result.token
            self._refreshed_at = int(self._clock())
        else:
            self.remember = remember
            self._accept(result.token, remember)

        logger.info("Successfully refreshed access token")
        return result

    def revoke_token(self) -> Any:
        """
        Revoke the current token and forget it.

        The persisted record is deleted and the in-memory token cleared even
        if the revocation request fails.

        Returns:
            Decoded revoke response, or None if there was no token

        Raises:
            RedditAPIError: If the revocation request fails
        """
        token = self._load_token()
        self.storage.delete()

        if token is None:
            logger.debug("No token to revoke")
            return None

        if token.refresh_token:
            data = {"token": token.refresh_token, "token_type_hint": "refresh_token"}
        else:
            data = {"token": token.access_token, "token_type_hint": "access_token"}

        try:
            return self.transport.request(
                self.config.revoke_url, data=data, grant=True, context=self.context
            )
        finally:
            self._token = None
            self._refreshed_at = None
            self._issued_state = None
            logger.info("Token revoked")

    logout = revoke_token
    unauthorize = revoke_token

    def current_username(self) -> Optional[str]:
        """
        Get the name of the user the token belongs to.

        Returns:
            Username, or None if the identity response has no name

        Raises:
            TokenNotAvailableError: If not authorized
            RedditAPIError: If the identity request fails
        """
        body = self.transport.request(
            f"{self.config.api_base_url}/api/v1/me",
            authorization=self.authorization_header(),
            context=self.context,
        )
        if isinstance(body, dict):
            return body.get("name")
        return None

    def get_access_token(self) -> str:
        """
        Get a valid access token, refreshing if necessary.

        Returns:
            Access token string

        Raises:
            TokenNotAvailableError: If not authorized (need to log in or
                                    authorize first)
        """
        if not self.is_authorized():
            raise TokenNotAvailableError("No token available. Log in or authorize first.")
        return self._token.access_token

    def authorization_header(self) -> str:
        """
        Get the Authorization header value for resource requests.

        Returns:
            "<token_type> <access_token>"

        Raises:
            TokenNotAvailableError: If not authorized
        """
        if not self.is_authorized():
            raise TokenNotAvailableError("No token available. Log in or authorize first.")
        return self._token.authorization_header

    def get_token_status(self) -> Dict[str, Any]:
        """
        Get current token status for diagnostics.

        Returns:
            Dictionary with token status information:
            - authorized: Whether we have a token
            - expired: Whether the access token is expired (if authorized)
            - expires_at: When the access token expires (if authorized)
            - expires_in_seconds: Seconds until expiry (if authorized)
            - scope: OAuth scopes granted (if authorized)
            - refreshable: Whether a refresh token is held (if authorized)
            - remembered: Whether a persisted record exists (if authorized)
        """
        token = self._load_token()

        if not token:
            return {"authorized": False, "message": "No token available"}

        expires_in = self._expiry_reference(token) + token.expires_in - self._clock()

        return {
            "authorized": True,
            "expired": self._is_expired(token),
            "expires_at": token.expires_at.isoformat(),
            "expires_in_seconds": max(0, int(expires_in)),
            "scope": token.scope,
            "refreshable": token.refresh_token is not None,
            "remembered": self.storage.exists(),
        }

    def _request_grant(
        self,
        data: Dict[str, str],
        previous: Optional[TokenData] = None,
        keep_issued_at: bool = False,
    ) -> GrantResult:
        """
        Post a grant to the token endpoint and build the resulting token.

        Rejections come back as a failed GrantResult. Server errors (5xx)
        and network failures propagate.
        """
        grant_type = data["grant_type"]
        logger.info(f"Requesting {grant_type} grant")

        try:
            body = self.transport.request(
                self.config.token_url, data=data, grant=True, context=self.context
            )
        except RedditTransportError:
            raise
        except RedditAPIError as e:
            if e.status_code is not None and e.status_code >= 500:
                raise
            error = e.body.get("error") if isinstance(e.body, dict) else None
            if not isinstance(error, str):
                error = "invalid_client" if e.status_code == 401 else "invalid_grant"
            logger.warning(f"{grant_type} grant rejected: {e.message}")
            return GrantResult(success=False, error=error, error_description=e.message)

        if not isinstance(body, dict) or not body.get("access_token"):
            logger.error(f"Invalid response from token endpoint for {grant_type} grant")
            return GrantResult(
                success=False,
                error="invalid_grant",
                error_description="Token endpoint response has no access token",
            )

        try:
            expires_in = int(body.get("expires_in", 3600))
        except (TypeError, ValueError):
            logger.error(f"Invalid expires_in from token endpoint: {body.get('expires_in')!r}")
            return GrantResult(
                success=False,
                error="invalid_grant",
                error_description="Token endpoint response has an invalid expires_in",
            )

        if previous is not None and keep_issued_at:
            issued_at = previous.issued_at
        else:
            issued_at = int(self._clock())

        token = TokenData(
            access_token=str(body["access_token"]),
            token_type=body.get("token_type") or (previous.token_type if previous else "bearer"),
            scope=_join_scope(body.get("scope"))
            or (previous.scope if previous else ",".join(self.scopes)),
            issued_at=issued_at,
            expires_in=expires_in,
            # Refresh token may or may not be returned; keep existing if not
            refresh_token=body.get("refresh_token")
            or (previous.refresh_token if previous else None),
        )
        return GrantResult(success=True, token=token)

    def _accept(self, token: TokenData, remember: Optional[float]) -> None:
        self._token = token
        self._refreshed_at = None
        if remember is not None:
            self.storage.save(token, remember)

    def _load_token(self) -> Optional[TokenData]:
        """
        Get the current token, preferring a newer persisted record.

        Returns:
            TokenData if available, None otherwise
        """
        stored = self.storage.load()
        if stored is not None and (
            self._token is None or stored.issued_at > self._token.issued_at
        ):
            self._token = stored
            self._refreshed_at = None
        return self._token

    def _expiry_reference(self, token: TokenData) -> int:
        if token is self._token and self._refreshed_at is not None:
            return self._refreshed_at
        return token.issued_at

    def _is_expired(self, token: TokenData) -> bool:
        return self._expiry_reference(token) + token.expires_in < self._clock()

    def _is_permanent(self) -> bool:
        remember = self.remember
        return (
            remember is not None
            and not isinstance(remember, bool)
            and remember >= PERMANENT_THRESHOLD_SECONDS
        )
