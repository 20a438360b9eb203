"""
Exception taxonomy for the marketplace services.

Relation-missing errors are recovered by the fallback dispatch; everything
else is surfaced to the caller.
"""

import re
from typing import Any, Dict, Optional


# Postgres "undefined_table" and PostgREST "table not in schema cache"
RELATION_MISSING_CODES = frozenset({"42P01", "PGRST205"})

_RELATION_PATTERNS = (
    re.compile(r'relation "(?:\w+\.)?(\w+)" does not exist'),
    re.compile(r"Could not find the table '(?:\w+\.)?(\w+)'"),
)


class MarketplaceError(Exception):
    """Base class for every error raised by the services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(MarketplaceError):
    """Bad credentials or a rejected auth request."""


class NotAuthenticatedError(AuthenticationError):
    """The operation needs a signed-in user and there is none."""


class NotFoundError(MarketplaceError):
    """The entity is absent from the backing store."""


class InvalidInputError(MarketplaceError):
    """Input rejected before any storage access."""


class ForbiddenError(MarketplaceError):
    """The caller may not act on the entity."""


class ConflictError(MarketplaceError):
    """The write collides with an existing record."""


class RemoteError(MarketplaceError):
    """
    Failure reported by the remote data client.

    Attributes:
        code: Backend error code (Postgres SQLSTATE or PostgREST code)
        status: HTTP status, when the failure came over HTTP
        details: Extra diagnostic payload from the backend
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.status = status
        self.details = details or {}


class RelationMissingError(RemoteError):
    """The backing table/relation does not exist in the remote store."""

    def __init__(
        self,
        message: str,
        relation: Optional[str] = None,
        code: str = "42P01",
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code=code, status=status, details=details)
        self.relation = relation if relation is not None else parse_relation_name(message)


def parse_relation_name(message: str) -> Optional[str]:
    """Extract the relation name from a backend error message, if present."""
    for pattern in _RELATION_PATTERNS:
        match = pattern.search(message or "")
        if match:
            return match.group(1)
    return None


def is_relation_missing(error: BaseException) -> bool:
    if isinstance(error, RelationMissingError):
        return True
    return isinstance(error, RemoteError) and error.code in RELATION_MISSING_CODES
