"""
Remote data client contract.

A generic async request/response interface to a hosted relational store,
auth service and object storage. Failures are raised as the exceptions in
``bookswap.error_handling.errors``; a missing table is always a
``RelationMissingError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from bookswap.models import AuthIdentity, AuthSession


FILTER_OPS = ("eq", "neq", "in", "gte", "lte", "ilike")


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches only itself."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class Filter:
    """
    Single column predicate.

    Attributes:
        column: Column name
        op: One of FILTER_OPS
        value: Comparison value; a sequence for ``in``, a SQL LIKE pattern
            (``%`` and ``_`` wildcards, ``\\`` escape) for ``ilike``
    """
    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in FILTER_OPS:
            raise ValueError(f"Unsupported filter operator: {self.op}")

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, "eq", value)

    @classmethod
    def in_(cls, column: str, values: Sequence[Any]) -> "Filter":
        return cls(column, "in", tuple(values))

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, "gte", value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Filter":
        return cls(column, "lte", value)

    @classmethod
    def contains(cls, column: str, term: str) -> "Filter":
        """Case-insensitive substring match; the term is matched literally."""
        return cls(column, "ilike", f"%{escape_like(term)}%")


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


class RemoteDataClient(ABC):
    """Async interface to the hosted backend."""

    # Auth

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> AuthIdentity:
        """Verify credentials and start a session."""

    @abstractmethod
    async def create_identity(self, email: str, password: str) -> AuthIdentity:
        """Register a new identity and start a session."""

    @abstractmethod
    async def get_session(self) -> Optional[AuthSession]:
        """Current session, or None when signed out."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""

    # Tables

    @abstractmethod
    async def query(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        any_of: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
        columns: str = "*"
    ) -> List[Dict[str, Any]]:
        """
        Select rows matching every filter and, when given, at least one
        predicate of ``any_of``.
        """

    @abstractmethod
    async def count(self, table: str, filters: Sequence[Filter] = ()) -> int:
        """Count rows matching every filter."""

    @abstractmethod
    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored."""

    @abstractmethod
    async def upsert(
        self,
        table: str,
        row: Dict[str, Any],
        on_conflict: Sequence[str]
    ) -> Dict[str, Any]:
        """Insert a row, or merge into the row sharing the ``on_conflict`` key."""

    @abstractmethod
    async def update(
        self,
        table: str,
        filters: Sequence[Filter],
        patch: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Apply ``patch`` to matching rows and return them."""

    @abstractmethod
    async def delete(self, table: str, filters: Sequence[Filter]) -> None:
        """Delete matching rows."""

    # Object storage

    @abstractmethod
    async def upload_blob(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str
    ) -> str:
        """Store bytes and return the object's public URL."""

    @abstractmethod
    async def delete_blob(self, bucket: str, path: str) -> None:
        """Remove a stored object."""

    async def close(self) -> None:
        """Release network resources."""
