"""
Content Store Client

Read-only HTTP client for the library tables (stories, prompts, tools) served
by Supabase's PostgREST API.

Patterns Applied:
- Connection pooling (one httpx.AsyncClient per store)
- Repository Pattern: Protocol for duck typing to enable FakeContentStore
- Custom namespaced exceptions

No retries: retrieval is best-effort and the caller substitutes an empty
result set on failure.
"""

import asyncio
import re
from collections.abc import Sequence
from typing import Any, Final, Protocol

import httpx

from sidekick.core.exceptions import SidekickError

DEFAULT_TIMEOUT: Final[float] = 10.0
REST_PREFIX: Final[str] = "/rest/v1"

# Wildcard metacharacters of the ilike filter syntax
FILTER_WILDCARDS: Final[re.Pattern[str]] = re.compile(r"[%_]")


# =============================================================================
# Custom Exceptions
# =============================================================================


class ContentStoreError(SidekickError):
    """Raised when a content store query fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# =============================================================================
# Filter Helpers
# =============================================================================


def sanitize_keyword(keyword: str) -> str:
    """Strip filter wildcards so a keyword only ever matches literally."""
    return FILTER_WILDCARDS.sub("", keyword)


def build_or_filter(fields: Sequence[str], keywords: Sequence[str]) -> str:
    """Build a PostgREST `or` filter: any field contains any keyword.

    Example:
        >>> build_or_filter(["title", "category"], ["block"])
        '(title.ilike.%block%,category.ilike.%block%)'
    """
    clauses = []
    for keyword in keywords:
        term = sanitize_keyword(keyword)
        if not term:
            continue
        clauses.extend(f"{field}.ilike.%{term}%" for field in fields)
    return "(" + ",".join(clauses) + ")"


# =============================================================================
# Protocol for Duck Typing (Repository Pattern)
# =============================================================================


class ContentStoreProtocol(Protocol):
    """Protocol for content store duck typing."""

    async def search(
        self,
        table: str,
        fields: Sequence[str],
        keywords: Sequence[str],
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        """Return rows where any of fields contains any of keywords."""
        ...

    async def lookup_id(self, table: str, field: str, value: str) -> str | None:
        """Return the id of the first row whose field equals value."""
        ...


# =============================================================================
# SupabaseContentStore Implementation
# =============================================================================


class SupabaseContentStore:
    """PostgREST client for the library tables.

    Attributes:
        base_url: Supabase project URL (e.g., https://xyz.supabase.co)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the content store client.

        Args:
            base_url: Supabase project URL
            api_key: Supabase API key (sent as apikey and bearer token)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}{REST_PREFIX}",
            timeout=httpx.Timeout(timeout),
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
        )

    async def search(
        self,
        table: str,
        fields: Sequence[str],
        keywords: Sequence[str],
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        """Query a table for rows matching any keyword in any field.

        Args:
            table: Table name (stories, prompts, tools)
            fields: Columns searched with a case-insensitive contains filter
            keywords: Search keywords
            limit: Maximum rows returned

        Returns:
            Row dicts in store order

        Raises:
            ContentStoreError: On HTTP or transport errors
        """
        or_filter = build_or_filter(fields, keywords)
        if or_filter == "()":
            return []

        params = {
            "select": "*",
            "or": or_filter,
            "limit": str(limit),
        }
        return await self._get(table, params)

    async def lookup_id(self, table: str, field: str, value: str) -> str | None:
        """Fetch the id of the first row with an exact field match.

        Raises:
            ContentStoreError: On HTTP or transport errors
        """
        params = {
            "select": "id",
            field: f"eq.{value}",
            "limit": "1",
        }
        rows = await self._get(table, params)
        if not rows:
            return None
        return rows[0].get("id")

    async def _get(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        try:
            response = await self._client.get(f"/{table}", params=params)
        except httpx.TimeoutException as e:
            raise ContentStoreError(f"Query on {table} timed out") from e
        except httpx.HTTPError as e:
            raise ContentStoreError(f"Query on {table} failed: {e}") from e

        if response.status_code >= 400:
            raise ContentStoreError(
                f"Query on {table} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ContentStoreError(f"Query on {table} returned invalid JSON") from e

        if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
            raise ContentStoreError(f"Query on {table} returned an unexpected payload")

        rows: list[dict[str, Any]] = payload
        return rows

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# FakeContentStore for Testing
# =============================================================================


class FakeContentStore:
    """In-memory content store for tests and local runs.

    Implements ContentStoreProtocol with the same contains-any semantics as
    the PostgREST filter. Tables listed in `failing` raise ContentStoreError.
    """

    def __init__(
        self,
        tables: dict[str, list[dict[str, Any]]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self._tables = tables or {}
        self._failing = failing or set()
        self.search_calls: list[tuple[str, tuple[str, ...], tuple[str, ...]]] = []
        self.lookup_calls: list[tuple[str, str, str]] = []

    async def search(
        self,
        table: str,
        fields: Sequence[str],
        keywords: Sequence[str],
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        await asyncio.sleep(0)
        self.search_calls.append((table, tuple(fields), tuple(keywords)))
        if table in self._failing:
            raise ContentStoreError(f"Query on {table} failed", status_code=500)

        terms = [sanitize_keyword(k).lower() for k in keywords]
        terms = [t for t in terms if t]
        matches = [
            row
            for row in self._tables.get(table, [])
            if any(t in str(row.get(f) or "").lower() for f in fields for t in terms)
        ]
        return matches[:limit]

    async def lookup_id(self, table: str, field: str, value: str) -> str | None:
        await asyncio.sleep(0)
        self.lookup_calls.append((table, field, value))
        if table in self._failing:
            raise ContentStoreError(f"Lookup on {table} failed", status_code=500)
        for row in self._tables.get(table, []):
            if row.get(field) == value and row.get("id"):
                return str(row["id"])
        return None
