"""
OAuth callback server for Reddit API integration.

This module provides a local HTTP server that handles the OAuth redirect
during the authorization code flow of a desktop or script application. The
redirect URI registered for the Reddit app must point at this server, e.g.
http://localhost:8080/reddit_callback.

IMPORTANT: This server is designed for single-user, personal use. It runs
temporarily during the authorization flow and shuts down after receiving
the callback.
"""

import html
import logging
import threading
import webbrowser
from typing import Iterable, Optional, Union

from flask import Flask, Response, request
from werkzeug.serving import make_server

from src.api.exceptions import RedditAPIError

from .context import RequestContext
from .token_manager import GrantResult, TokenManager

logger = logging.getLogger(__name__)

_PAGE = """<html>
<head><title>{title}</title></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px;">
    <h1 style="color: {color};">{title}</h1>
    {body}
    <p style="margin-top: 30px; color: #666;">You can close this window.</p>
</body>
</html>"""


class OAuthCallbackServer:
    """
    Local HTTP server to handle the Reddit OAuth redirect.

    The server:
    1. Listens on the host, port and path of the configured redirect URI
    2. Receives the redirect carrying the authorization code (or an error)
    3. Completes the code exchange through the token manager
    4. Shuts down after one callback

    Security:
    - Binds to the redirect URI host only (localhost for desktop apps)
    - The returned state must match the one issued in the authorization URL
    - Single-use (shuts down after one callback)
    """

    def __init__(
        self,
        token_manager: TokenManager,
        scopes: Union[str, Iterable[str]] = "*",
        remember: Optional[float] = None,
    ):
        """
        Initialize callback server.

        Args:
            token_manager: Token manager that performs the code exchange
            scopes: Scopes being requested
            remember: Seconds to persist the resulting token for
        """
        self.token_manager = token_manager
        self.config = token_manager.config
        self.scopes = scopes
        self.remember = remember
        self.app = Flask(__name__)
        self.app.logger.setLevel(logging.WARNING)  # Suppress Flask logs
        self.result: Optional[GrantResult] = None
        self._server = None
        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()

        self.app.add_url_rule(
            self.config.callback_path,
            "oauth_callback",
            self._handle_callback,
            methods=["GET"],
        )

    def _handle_callback(self) -> Response:
        """Handle the OAuth redirect from Reddit."""
        logger.info("Received OAuth callback")

        self.token_manager.context = RequestContext.from_flask(request)
        try:
            self.result = self.token_manager.authorize(
                self.scopes, redirect=False, remember=self.remember, force=True
            )
        except RedditAPIError as e:
            logger.error(f"Authorization code exchange failed: {e}")
            self.result = GrantResult(
                success=False, error="exchange_failed", error_description=str(e)
            )
        finally:
            self._done.set()
        result = self.result

        if result.success:
            logger.info("Authorization code exchanged successfully")
            return Response(
                _PAGE.format(
                    title="Authorization Successful",
                    color="#4caf50",
                    body="<p>Your application has been authorized to access your Reddit account.</p>",
                ),
                status=200,
                content_type="text/html",
            )

        logger.error(f"OAuth error: {result.error} - {result.error_description}")
        body = f"<p><strong>Error:</strong> {html.escape(str(result.error))}</p>"
        if result.error_description:
            body += (
                f"<p><strong>Description:</strong> "
                f"{html.escape(result.error_description)}</p>"
            )
        return Response(
            _PAGE.format(title="Authorization Failed", color="#d32f2f", body=body),
            status=400,
            content_type="text/html",
        )

    def start(self) -> None:
        """
        Start the callback server in a background thread.

        Raises:
            OSError: If the port cannot be bound
        """
        host = self.config.callback_host
        port = self.config.callback_port

        self._server = make_server(host, port, self.app, threaded=True)
        logger.info(f"Starting OAuth callback server on {host}:{port}")

        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def wait_for_callback(self, timeout: int = 300) -> GrantResult:
        """
        Wait for the OAuth callback.

        Args:
            timeout: Maximum seconds to wait (default: 300 = 5 minutes)

        Returns:
            GrantResult of the code exchange, or a timeout failure
        """
        logger.info(f"Waiting for OAuth callback (timeout: {timeout}s)")

        if self._done.wait(timeout=timeout):
            return self.result or GrantResult(
                success=False,
                error="unknown",
                error_description="Server shutdown without result",
            )

        logger.warning(f"Timeout waiting for callback after {timeout}s")
        return GrantResult(
            success=False,
            error="timeout",
            error_description=f"No callback received within {timeout} seconds. "
            f"Please ensure you completed the authorization in your browser.",
        )

    def stop(self) -> None:
        """Stop the callback server."""
        if self._server is not None:
            logger.info("OAuth callback server shutting down")
            self._server.shutdown()
            self._server = None
        self._done.set()


def run_authorization_flow(
    token_manager: TokenManager,
    scopes: Union[str, Iterable[str]] = "*",
    remember: Optional[float] = None,
    open_browser: bool = True,
    timeout: int = 300,
) -> GrantResult:
    """
    Run the complete OAuth authorization code flow.

    This function:
    1. Starts the local callback server
    2. Generates the authorization URL
    3. Opens the browser (or displays the URL)
    4. Waits for the user to authorize
    5. Returns the result of the code exchange

    Args:
        token_manager: Token manager to authorize
        scopes: "*" for all scopes, or the scopes to request
        remember: Seconds to persist the token for (>= 3600 also requests
                  a refresh token)
        open_browser: Whether to automatically open browser (default: True)
        timeout: Seconds to wait for callback (default: 300)

    Returns:
        GrantResult with the token or error

    Raises:
        AuthorizationError: If no redirect URI is configured
        InvalidScopeError: If scopes are not valid
        OSError: If the callback port cannot be bound
    """
    token_manager.context = RequestContext()
    pending = token_manager.authorize(scopes, redirect=True, remember=remember, force=True)
    if pending.success or not pending.redirect_url:
        return pending

    server = OAuthCallbackServer(token_manager, scopes=scopes, remember=remember)

    try:
        server.start()

        auth_url = pending.redirect_url

        print("\n" + "=" * 70)
        print("REDDIT OAUTH AUTHORIZATION")
        print("=" * 70)
        print("Please authorize the application by visiting:")
        print(f"\n  {auth_url}\n")

        if open_browser:
            print("Opening browser automatically...")
            try:
                webbrowser.open(auth_url)
            except webbrowser.Error as e:
                logger.warning(f"Could not open browser automatically: {e}")
                print(f"Could not open browser: {e}")
                print("Please copy the URL above and paste it in your browser.")
        else:
            print("Copy the URL above and paste it in your browser.")

        print("\nWaiting for authorization...")
        print("=" * 70 + "\n")

        result = server.wait_for_callback(timeout)

        if result.success:
            print("Authorization successful!")
            logger.info("Authorization flow completed successfully")
        else:
            print(f"Authorization failed: {result.error}")
            if result.error_description:
                print(f"   {result.error_description}")
            logger.error(
                f"Authorization flow failed: {result.error} - {result.error_description}"
            )

        return result

    finally:
        server.stop()
