"""
Supabase client - Talks to a hosted Supabase project over HTTP: GoTrue for
auth, PostgREST for tables and Storage for images.
"""

import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import aiohttp

from bookswap.config import BackendConfig
from bookswap.error_handling.errors import (
    RELATION_MISSING_CODES,
    AuthenticationError,
    ConflictError,
    MarketplaceError,
    NotFoundError,
    RelationMissingError,
    RemoteError,
)
from bookswap.models import AuthIdentity, AuthSession
from bookswap.remote.client import Filter, Order, RemoteDataClient

logger = logging.getLogger(__name__)

# PostgREST reserves these inside in.(...) and or=(...) lists
_RESERVED_CHARS = set(',.:()"\\ ')

_UNIQUE_VIOLATION = "23505"
_NO_ROWS = "PGRST116"
_JWT_EXPIRED = "PGRST301"


def encode_value(value: Any) -> str:
    """Render a Python value the way PostgREST expects it in a query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _quote(value: str) -> str:
    if any(ch in _RESERVED_CHARS for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def like_to_postgrest(pattern: str) -> str:
    """
    Rewrite a LIKE pattern in PostgREST's ``*`` wildcard syntax.

    Escapes are kept. PostgREST turns every ``*`` into ``%``, so a literal
    ``*`` cannot be expressed and becomes the one-character wildcard ``_``;
    callers needing an exact match filter the rows again.
    """
    out = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            out.append(ch + next(chars, "\\"))
        elif ch == "%":
            out.append("*")
        elif ch == "*":
            out.append("_")
        else:
            out.append(ch)
    return "".join(out)


def _operand(f: Filter, in_list: bool = False) -> str:
    if f.op == "in":
        items = ",".join(_quote(encode_value(v)) for v in f.value)
        return f"in.({items})"
    if f.op == "ilike":
        pattern = like_to_postgrest(str(f.value))
        return f"ilike.{_quote(pattern) if in_list else pattern}"
    if f.op == "eq" and f.value is None:
        return "is.null"
    value = encode_value(f.value)
    return f"{f.op}.{_quote(value) if in_list else value}"


def encode_filter(f: Filter) -> Tuple[str, str]:
    """Encode a filter as a ``(column, "op.value")`` query parameter."""
    return f.column, _operand(f)


def encode_any_of(filters: Sequence[Filter]) -> str:
    """Encode an OR group as the value of PostgREST's ``or`` parameter."""
    return "(" + ",".join(f"{f.column}.{_operand(f, in_list=True)}" for f in filters) + ")"


def build_query_params(
    filters: Sequence[Filter] = (),
    any_of: Sequence[Filter] = (),
    order: Optional[Order] = None,
    limit: Optional[int] = None,
    columns: Optional[str] = "*"
) -> List[Tuple[str, str]]:
    params: List[Tuple[str, str]] = []
    if columns:
        params.append(("select", columns))
    params.extend(encode_filter(f) for f in filters)
    if any_of:
        params.append(("or", encode_any_of(any_of)))
    if order:
        params.append(("order", f"{order.column}.{'desc' if order.descending else 'asc'}"))
    if limit is not None:
        params.append(("limit", str(limit)))
    return params


def error_from_response(status: int, payload: Any, text: str = "") -> MarketplaceError:
    """
    Classify a failed backend response.

    Args:
        status: HTTP status code
        payload: Decoded JSON body, if any
        text: Raw body text

    Returns:
        The exception to raise; a RelationMissingError for a missing table
    """
    code: Optional[str] = None
    message = text or f"HTTP {status}"
    if isinstance(payload, dict):
        raw_code = payload.get("code") or payload.get("error_code")
        code = str(raw_code) if raw_code is not None else None
        message = (
            payload.get("message")
            or payload.get("msg")
            or payload.get("error_description")
            or payload.get("error")
            or message
        )
    details = payload if isinstance(payload, dict) else None

    if code in RELATION_MISSING_CODES:
        return RelationMissingError(message, code=code, status=status, details=details)
    if code == _UNIQUE_VIOLATION:
        return ConflictError(message)
    if code == _NO_ROWS:
        return NotFoundError(message)
    if code == _JWT_EXPIRED or status == 401:
        return AuthenticationError(message)
    return RemoteError(message, code=code, status=status, details=details)


def parse_content_range(header: Optional[str]) -> int:
    """Total row count from a ``Content-Range: 0-24/42`` header."""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class SupabaseClient(RemoteDataClient):
    """
    Supabase REST client with a single in-memory session.

    One client serves one signed-in user, the way the mobile app does.
    """

    def __init__(self, config: BackendConfig):
        if not config.url:
            raise ValueError("Supabase URL not configured. Set SUPABASE_URL in .env")
        self.base_url = config.url.rstrip("/")
        self.anon_key = config.anon_key
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None
        self._auth: Optional[AuthSession] = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Explicitly close the HTTP session when done"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _ensure_session(self):
        """Ensure we have an open HTTP session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        token = self._auth.access_token if self._auth else self.anon_key
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json_body: Any = None,
        data: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> Tuple[Any, Mapping[str, str]]:
        await self._ensure_session()
        url = f"{self.base_url}{path}"
        try:
            async with self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                data=data,
                headers=self._headers(headers),
            ) as response:
                text = await response.text()
                try:
                    payload = json.loads(text) if text else None
                except ValueError:
                    payload = None
                if response.status >= 400:
                    raise error_from_response(response.status, payload, text)
                return payload, response.headers
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteError(f"{method} {path} failed: {type(e).__name__}: {e}") from e

    # Auth

    def _store_session(self, payload: Dict[str, Any]) -> AuthSession:
        user = payload.get("user") or {}
        expires_in = int(payload.get("expires_in", 3600))
        self._auth = AuthSession(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            user=AuthIdentity(id=user["id"], email=user.get("email", "")),
        )
        return self._auth

    async def authenticate(self, email: str, password: str) -> AuthIdentity:
        try:
            payload, _ = await self._request(
                "POST",
                "/auth/v1/token",
                params=[("grant_type", "password")],
                json_body={"email": email, "password": password},
            )
        except RemoteError as e:
            if e.status in (400, 401, 422):
                raise AuthenticationError("Invalid email or password") from e
            raise
        return self._store_session(payload).user

    async def create_identity(self, email: str, password: str) -> AuthIdentity:
        try:
            payload, _ = await self._request(
                "POST",
                "/auth/v1/signup",
                json_body={"email": email, "password": password},
            )
        except RemoteError as e:
            if e.status == 422 or "already registered" in e.message.lower():
                raise ConflictError("Email already in use") from e
            if e.status in (400, 401):
                raise AuthenticationError(e.message) from e
            raise
        if payload and "access_token" in payload:
            return self._store_session(payload).user
        # Email confirmation pending: identity exists, no session yet
        user = (payload or {}).get("user") or payload or {}
        if "id" not in user:
            raise AuthenticationError("User creation failed")
        return AuthIdentity(id=user["id"], email=user.get("email", email))

    async def _refresh(self) -> Optional[AuthSession]:
        refresh_token = self._auth.refresh_token if self._auth else None
        self._auth = None
        if not refresh_token:
            return None
        try:
            payload, _ = await self._request(
                "POST",
                "/auth/v1/token",
                params=[("grant_type", "refresh_token")],
                json_body={"refresh_token": refresh_token},
            )
        except AuthenticationError as e:
            logger.warning(f"Session refresh rejected: {e}")
            return None
        return self._store_session(payload)

    async def get_session(self) -> Optional[AuthSession]:
        if self._auth is None:
            return None
        if self._auth.expires_at and datetime.now(timezone.utc) >= self._auth.expires_at:
            return await self._refresh()
        return self._auth

    async def sign_out(self) -> None:
        if self._auth is None:
            return
        try:
            await self._request("POST", "/auth/v1/logout")
        finally:
            self._auth = None

    # Tables

    async def query(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        any_of: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
        columns: str = "*"
    ) -> List[Dict[str, Any]]:
        params = build_query_params(filters, any_of, order, limit, columns)
        payload, _ = await self._request("GET", f"/rest/v1/{table}", params=params)
        return payload or []

    async def count(self, table: str, filters: Sequence[Filter] = ()) -> int:
        params = build_query_params(filters, columns="id", limit=1)
        _, headers = await self._request(
            "GET",
            f"/rest/v1/{table}",
            params=params,
            headers={"Prefer": "count=exact"},
        )
        return parse_content_range(headers.get("Content-Range"))

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        payload, _ = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json_body=row,
            headers={"Prefer": "return=representation"},
        )
        return payload[0] if payload else dict(row)

    async def upsert(
        self,
        table: str,
        row: Dict[str, Any],
        on_conflict: Sequence[str]
    ) -> Dict[str, Any]:
        payload, _ = await self._request(
            "POST",
            f"/rest/v1/{table}",
            params=[("on_conflict", ",".join(on_conflict))],
            json_body=row,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        return payload[0] if payload else dict(row)

    async def update(
        self,
        table: str,
        filters: Sequence[Filter],
        patch: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        payload, _ = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=build_query_params(filters, columns=None),
            json_body=patch,
            headers={"Prefer": "return=representation"},
        )
        return payload or []

    async def delete(self, table: str, filters: Sequence[Filter]) -> None:
        await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=build_query_params(filters, columns=None),
        )

    # Object storage

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    async def upload_blob(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str
    ) -> str:
        await self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{path}",
            data=data,
            headers={"Content-Type": content_type, "x-upsert": "true"},
        )
        return self.public_url(bucket, path)

    async def delete_blob(self, bucket: str, path: str) -> None:
        await self._request(
            "DELETE",
            f"/storage/v1/object/{bucket}",
            json_body={"prefixes": [path]},
        )
