"""
Inbound request context.

Web applications authorize users by redirecting them to Reddit and handling
the redirect back. The pieces of that inbound request the token manager
needs (query parameters, cookies, user agent) are passed explicitly in a
RequestContext instead of being read from globals.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlparse


@dataclass
class SetCookie:
    """An outgoing cookie instruction for the web framework to apply."""

    name: str
    value: str
    expires: Optional[int] = None  # Unix timestamp
    path: str = "/"


@dataclass
class RequestContext:
    """
    Explicit view of the current inbound HTTP request.

    Attributes:
        query: Query string parameters of the inbound request
        cookies: Cookies sent by the browser
        user_agent: Inbound User-Agent header
        set_cookies: Cookies the application should set on its response
    """

    query: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    user_agent: Optional[str] = None
    set_cookies: List[SetCookie] = field(default_factory=list)

    @property
    def code(self) -> Optional[str]:
        """Authorization code from the OAuth redirect, if present."""
        return self.query.get("code") or None

    @property
    def state(self) -> Optional[str]:
        """Anti-CSRF state echoed back by the OAuth redirect."""
        return self.query.get("state") or None

    @property
    def error(self) -> Optional[str]:
        """Error code from the OAuth redirect (e.g. "access_denied")."""
        return self.query.get("error") or None

    @classmethod
    def from_url(
        cls,
        url: str,
        cookies: Optional[Dict[str, str]] = None,
        user_agent: Optional[str] = None,
    ) -> "RequestContext":
        """
        Build a context from a full redirect URL.

        Args:
            url: URL the browser was redirected to
            cookies: Cookies sent with the request
            user_agent: Inbound User-Agent header

        Returns:
            RequestContext with parsed query parameters
        """
        query = dict(parse_qsl(urlparse(url).query))
        return cls(query=query, cookies=dict(cookies or {}), user_agent=user_agent)

    @classmethod
    def from_flask(cls, request: Any) -> "RequestContext":
        """
        Build a context from a Flask/Werkzeug request object.

        Args:
            request: flask.request (or any object with args, cookies and
                     headers attributes)

        Returns:
            RequestContext for the request
        """
        user_agent = request.headers.get("User-Agent") if request.headers else None
        return cls(
            query=request.args.to_dict(),
            cookies=dict(request.cookies),
            user_agent=user_agent,
        )
