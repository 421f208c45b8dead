"""
Token storage for Reddit OAuth integration.

This module provides:
- TokenData: the OAuth token record and its delimited serialization
- KeyValueStore: pluggable persistence backends (memory, JSON file, cookie)
- TokenStorage: saves/loads the token record under one fixed key

Persistence is opt-in: the token manager only writes a record when the
caller asks to be remembered, and the record expires after that many seconds.
"""

import json
import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from .context import RequestContext, SetCookie
from .exceptions import TokenStorageError

logger = logging.getLogger(__name__)

# Remember duration used when a non-numeric value is supplied
DEFAULT_REMEMBER_SECONDS = 3600


@dataclass
class TokenData:
    """
    OAuth token record.

    Attributes:
        access_token: Short-lived access token for API calls
        token_type: Token type (Reddit returns "bearer")
        scope: Granted scopes, comma-joined
        issued_at: Unix timestamp of when the token was issued
        expires_in: Token lifetime in seconds from issued_at
        refresh_token: Long-lived token for obtaining new access tokens
                       (only for "permanent" authorizations)
    """

    access_token: str
    token_type: str
    scope: str
    issued_at: int
    expires_in: int
    refresh_token: Optional[str] = None

    @property
    def expires_at(self) -> datetime:
        """Datetime when the access token expires (timezone-aware UTC)."""
        issued = datetime.fromtimestamp(self.issued_at, tz=timezone.utc)
        return issued + timedelta(seconds=self.expires_in)

    @property
    def authorization_header(self) -> str:
        """Authorization header value: "<token_type> <access_token>"."""
        return f"{self.token_type} {self.access_token}"

    def serialize(self) -> str:
        """
        Serialize to the persisted record format.

        Format: token_type:access_token:scope:issued_at:expires_in:refresh_token
        """
        return ":".join(
            [
                self.token_type,
                self.access_token,
                self.scope,
                str(self.issued_at),
                str(self.expires_in),
                self.refresh_token or "",
            ]
        )

    @classmethod
    def parse(cls, text: str) -> "TokenData":
        """
        Parse a persisted record.

        Args:
            text: Record produced by serialize()

        Returns:
            TokenData instance

        Raises:
            ValueError: If the record is malformed
        """
        fields = text.split(":")
        if len(fields) not in (5, 6):
            raise ValueError(f"Expected 5 or 6 fields in token record, got {len(fields)}")

        token_type, access_token, scope, issued_at, expires_in = fields[:5]
        refresh_token = fields[5] if len(fields) == 6 else ""

        if not access_token:
            raise ValueError("Token record has no access token")

        return cls(
            access_token=access_token,
            token_type=token_type,
            scope=scope,
            issued_at=int(issued_at),
            expires_in=int(expires_in),
            refresh_token=refresh_token or None,
        )


class KeyValueStore(ABC):
    """Abstract key-value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if missing or expired."""

    @abstractmethod
    def set(self, key: str, value: str, expires_at: Optional[float] = None) -> None:
        """Store value under key until expires_at (unix timestamp, None = never)."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key. Returns True if an entry was removed."""


class MemoryStore(KeyValueStore):
    """In-process store, lost when the process exits."""

    def __init__(self) -> None:
        self._entries: Dict[str, tuple] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and expires_at <= time.time():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: str, expires_at: Optional[float] = None) -> None:
        self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None


class FileStore(KeyValueStore):
    """
    JSON file store.

    Entries are kept as {"key": {"value": ..., "expires_at": ...}} in a
    single file written with user-only permissions (600).
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store.

        Args:
            path: Path to the JSON file (created on first write)
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid store file at {self.path}, ignoring it: {e}")
            return {}
        except OSError as e:
            logger.warning(f"Could not read store file: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
            self._set_secure_permissions()
        except OSError as e:
            logger.error(f"Failed to write store file: {e}")
            raise TokenStorageError(f"Failed to write {self.path}: {e}") from e

    def _set_secure_permissions(self) -> None:
        try:
            self.path.chmod(0o600)
        except OSError as e:
            logger.warning(f"Could not set secure permissions: {e}")

    def get(self, key: str) -> Optional[str]:
        entry = self._read().get(key)
        if not isinstance(entry, dict):
            return None

        expires_at = entry.get("expires_at")
        if expires_at is not None and expires_at <= time.time():
            logger.debug(f"Stored entry {key!r} has expired")
            return None
        return entry.get("value")

    def set(self, key: str, value: str, expires_at: Optional[float] = None) -> None:
        data = self._read()
        data[key] = {"value": value, "expires_at": expires_at}
        self._write(data)

    def delete(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return False

        del data[key]
        if data:
            self._write(data)
        else:
            try:
                self.path.unlink()
            except OSError as e:
                raise TokenStorageError(f"Failed to delete {self.path}: {e}") from e
        return True


class CookieStore(KeyValueStore):
    """
    Browser cookie store bound to one inbound request.

    Reads come from the request's cookies. Writes update the context and are
    queued in context.set_cookies for the web framework to send back.
    """

    def __init__(self, context: RequestContext):
        self.context = context

    def get(self, key: str) -> Optional[str]:
        return self.context.cookies.get(key) or None

    def set(self, key: str, value: str, expires_at: Optional[float] = None) -> None:
        self.context.cookies[key] = value
        expires = int(expires_at) if expires_at is not None else None
        self.context.set_cookies.append(SetCookie(key, value, expires))

    def delete(self, key: str) -> bool:
        existed = self.context.cookies.pop(key, None) is not None
        if existed:
            # Expire the browser copy
            self.context.set_cookies.append(SetCookie(key, "", int(time.time()) - 3600))
        return existed


class TokenStorage:
    """
    Persists a single TokenData record under a fixed key.

    Example:
        storage = TokenStorage(FileStore("~/.reddit_tokens.json"))
        storage.save(token, remember=86400)
        token = storage.load()
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = "reddit_token"):
        """
        Initialize token storage.

        Args:
            store: Backing key-value store (in-memory if not provided)
            key: Key under which the token record is stored
        """
        self.store = store if store is not None else MemoryStore()
        self.key = key

    def save(self, token_data: TokenData, remember: Optional[float] = None) -> None:
        """
        Save the token record.

        Args:
            token_data: Token to persist
            remember: Seconds the record should live, counted from
                      token_data.issued_at (defaults to one hour)

        Raises:
            TokenStorageError: If the backing store fails
        """
        if isinstance(remember, (int, float)) and not isinstance(remember, bool):
            lifetime = math.floor(remember)
        else:
            lifetime = DEFAULT_REMEMBER_SECONDS

        self.store.set(self.key, token_data.serialize(), token_data.issued_at + lifetime)
        logger.info(f"Token saved ({type(self.store).__name__}, {lifetime}s)")

    def load(self) -> Optional[TokenData]:
        """
        Load the token record.

        Returns:
            TokenData if present and valid, None otherwise (a corrupted
            record is logged and treated as missing)
        """
        value = self.store.get(self.key)
        if not value:
            logger.debug(f"No stored token under {self.key!r}")
            return None

        try:
            return TokenData.parse(value)
        except ValueError as e:
            logger.warning(f"Invalid stored token, will need re-authorization: {e}")
            return None

    def delete(self) -> bool:
        """
        Delete the token record.

        Returns:
            True if a record was deleted, False if none existed
        """
        deleted = self.store.delete(self.key)
        if deleted:
            logger.info("Stored token deleted")
        return deleted

    def exists(self) -> bool:
        """Check if a token record is stored."""
        return self.store.get(self.key) is not None
