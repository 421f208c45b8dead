"""
HTTP transport for the Reddit API.

This module issues exactly one HTTP request per call and decodes the body:
- GET with query string, POST with url-encoded or multipart body
- HTTP Basic client authentication for grant requests
- Bearer token authentication for resource requests
- JSON decoding with raw-text fallback for non-JSON bodies
- Error mapping for HTTP status >= 300 and JSON "error" bodies

There are no retries. A failed request raises once and the caller decides
what to do next.
"""

import logging
import mimetypes
import os
from contextlib import ExitStack
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from .exceptions import (
    RedditAPIError,
    RedditAuthenticationError,
    RedditRateLimitError,
    RedditTimeoutError,
    RedditTransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class TransferInfo:
    """
    Metadata about the last completed HTTP transfer.

    Attributes:
        url: Requested URL (including query string)
        method: HTTP method used
        http_code: HTTP status code of the response
        total_time: Seconds between sending the request and parsing headers
        content_type: Response Content-Type header, if any
        size_download: Length of the response body in bytes
    """

    url: str
    method: str
    http_code: int
    total_time: float
    content_type: Optional[str]
    size_download: int

    def to_dict(self) -> dict:
        return asdict(self)


class Transport:
    """
    Single-request HTTP transport.

    Grant requests (token and revoke endpoints) authenticate with the
    application's client id and secret. Resource requests carry the caller's
    ``Authorization`` header value (``"<token_type> <access_token>"``).

    Example:
        transport = Transport("client_id", "client_secret", user_agent="app/1.0")
        me = transport.request(
            "https://oauth.reddit.com/api/v1/me",
            authorization="bearer abc",
        )
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        user_agent: str = "",
        connect_timeout: float = 5.0,
        timeout: float = 10.0,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize transport.

        Args:
            client_id: Reddit application client id
            client_secret: Reddit application client secret
            user_agent: Application user agent (falls back to the inbound
                        request's user agent when empty)
            connect_timeout: Connection timeout in seconds
            timeout: Read timeout in seconds
            verify_ssl: Whether to verify TLS certificates
            session: Optional pre-configured requests session
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session or requests.Session()
        self.last_transfer_info: Optional[TransferInfo] = None

    @classmethod
    def from_config(cls, config: Any) -> "Transport":
        """
        Create a transport from an OAuth configuration object.

        Args:
            config: Object exposing client_id, client_secret, user_agent,
                    connect_timeout, timeout and verify_ssl attributes

        Returns:
            Transport instance
        """
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            user_agent=config.user_agent,
            connect_timeout=config.connect_timeout,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    def _build_headers(
        self, authorization: Optional[str], context: Any = None
    ) -> Dict[str, str]:
        headers: Dict[str, str] = {}

        user_agent = self.user_agent or getattr(context, "user_agent", None)
        if user_agent:
            headers["User-Agent"] = user_agent

        if authorization:
            headers["Authorization"] = authorization

        return headers

    def request(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        grant: bool = False,
        authorization: Optional[str] = None,
        context: Any = None,
    ) -> Any:
        """
        Send one HTTP request and decode the response.

        The request is a POST when a body or files are given, a GET otherwise.

        Args:
            url: Absolute request URL
            data: Form fields for the POST body
            files: Multipart file fields mapping field name to file path
            params: Query string parameters
            grant: True for credential-bearing grant requests (HTTP Basic
                   auth with client id/secret)
            authorization: Authorization header value for resource requests
            context: Inbound request context (used for user agent fallback)

        Returns:
            Decoded JSON value, or the raw response text if the body is not
            valid JSON

        Raises:
            RedditAuthenticationError: On 401/403 responses
            RedditRateLimitError: On 429 responses
            RedditAPIError: On other status >= 300 or a JSON "error" body
            RedditTimeoutError: If the request timed out
            RedditTransportError: On other network errors
        """
        method = "POST" if data is not None or files else "GET"
        headers = self._build_headers(None if grant else authorization, context)
        auth = (self.client_id, self.client_secret) if grant else None

        logger.debug(f"{method} {url}")
        if params:
            logger.debug(f"  Params: {dict(params)}")

        try:
            with ExitStack() as stack:
                upload = None
                if files:
                    upload = {
                        field: self._open_upload(stack, path)
                        for field, path in files.items()
                    }

                response = self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    files=upload,
                    headers=headers,
                    auth=auth,
                    timeout=(self.connect_timeout, self.timeout),
                    verify=self.verify_ssl,
                    allow_redirects=False,
                )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timed out: {method} {url}")
            raise RedditTimeoutError(f"Request to {url} timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error: {e}")
            raise RedditTransportError(f"Network error: {e}") from e

        self.last_transfer_info = TransferInfo(
            url=response.url or url,
            method=method,
            http_code=response.status_code,
            total_time=response.elapsed.total_seconds() if response.elapsed else 0.0,
            content_type=response.headers.get("Content-Type"),
            size_download=len(response.content or b""),
        )

        try:
            body = response.json()
        except ValueError:
            # Some endpoints answer with empty or non-JSON bodies
            body = response.text

        self._raise_for_error(response.status_code, body)

        logger.debug(f"Response: {response.status_code}")
        return body

    @staticmethod
    def _open_upload(stack: ExitStack, path: str) -> tuple:
        handle = stack.enter_context(open(path, "rb"))
        content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
        return (os.path.basename(path), handle, content_type)

    @staticmethod
    def _raise_for_error(status_code: int, body: Any) -> None:
        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            # Some error bodies carry a numeric code plus a "message" field
            if not isinstance(error, str) and body.get("message"):
                message = str(body["message"])
            else:
                message = str(error)
        elif status_code >= 300:
            message = f"HTTP response status code '{status_code}'"
        else:
            return

        logger.error(f"API error ({status_code}): {message}")

        if status_code in (401, 403):
            raise RedditAuthenticationError(message, status_code, body)
        if status_code == 429:
            raise RedditRateLimitError(message, status_code, body)
        raise RedditAPIError(message, status_code, body)

    def get_transfer_info(self, opt: Optional[str] = None) -> Any:
        """
        Get information about the last transfer.

        Args:
            opt: Name of a single field to return (e.g. "http_code")

        Returns:
            The requested field, the full info dict, or None if no request
            has completed yet

        Raises:
            ValidationError: If opt is not a transfer info field
        """
        if self.last_transfer_info is None:
            return None

        info = self.last_transfer_info.to_dict()
        if opt:
            if opt not in info:
                raise ValidationError(
                    f"Unknown transfer info option: {opt!r}. "
                    f"Valid options: {', '.join(info)}",
                    param="opt",
                )
            return info[opt]
        return info

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
        logger.info("Transport closed")

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
