"""
Reddit OAuth scopes.

Reddit grants access per named scope. A requested scope set must be a
subset of SCOPES, or the wildcard "*" meaning all of them.
"""

from typing import Iterable, List, Union

from .exceptions import InvalidScopeError

SCOPES = (
    "creddits",
    "modcontributors",
    "modconfig",
    "subscribe",
    "wikiread",
    "wikiedit",
    "vote",
    "mysubreddits",
    "submit",
    "modlog",
    "modposts",
    "modflair",
    "save",
    "modothers",
    "read",
    "privatemessages",
    "report",
    "identity",
    "livemanage",
    "account",
    "modtraffic",
    "edit",
    "modwiki",
    "modself",
    "history",
    "flair",
)

ALL_SCOPES = "*"


def normalize_scopes(scopes: Union[str, Iterable[str]]) -> List[str]:
    """
    Validate a requested scope set and return it as a list.

    Args:
        scopes: "*" for all scopes, a comma-separated string, or an iterable
                of scope names

    Returns:
        List of scope names in the order given (duplicates removed)

    Raises:
        InvalidScopeError: If the set is empty, not strings, or contains an
                           unknown scope
    """
    if scopes == ALL_SCOPES:
        return list(SCOPES)

    if isinstance(scopes, str):
        requested = [s.strip() for s in scopes.split(",")]
    else:
        try:
            requested = list(scopes)
        except TypeError:
            raise InvalidScopeError(
                f"scopes must be a string or an iterable of strings, got {type(scopes).__name__}",
                param="scopes",
            ) from None

    if not requested or any(not isinstance(s, str) for s in requested):
        raise InvalidScopeError("Invalid scope", param="scopes")

    unknown = [s for s in requested if s not in SCOPES]
    if unknown:
        raise InvalidScopeError(f"Invalid scope: {', '.join(unknown)}", param="scopes")

    return list(dict.fromkeys(requested))


def is_valid_scope(scopes: Union[str, Iterable[str]]) -> bool:
    """Return True if the scope set passes normalize_scopes."""
    try:
        normalize_scopes(scopes)
    except InvalidScopeError:
        return False
    return True
