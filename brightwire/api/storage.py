"""Row store backends for contact submissions.

This module provides the hosted-table backend used in production, a file-based
backend for local work, and an in-memory backend for tests. Backends deal in
plain row dictionaries; the submission service turns them into models.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import aiofiles
import httpx

from brightwire.api.errors import StoreError

logger = logging.getLogger(__name__)

TABLE_NAME = "contact_submissions"

SCHEMA_SQL = f"""CREATE TABLE {TABLE_NAME} (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    phone TEXT,
    service TEXT NOT NULL,
    message TEXT NOT NULL,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    status TEXT DEFAULT 'new'
);

CREATE INDEX idx_{TABLE_NAME}_created_at ON {TABLE_NAME}(created_at);
CREATE INDEX idx_{TABLE_NAME}_status ON {TABLE_NAME}(status);
"""

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class RowStore(Protocol):
    """Protocol for the contact_submissions row store."""

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row.

        Args:
            row: Column values; id and created_at are assigned by the store

        Returns:
            The stored row including id and created_at
        """
        ...

    async def select_all(self) -> list[dict[str, Any]]:
        """Return every row ordered by created_at, newest first."""
        ...

    async def select_column(self, column: str) -> list[Any]:
        """Return one column of every row, in the store's natural order."""
        ...

    async def count(self, created_since: datetime | None = None) -> int:
        """Count rows, optionally only those with created_at >= created_since."""
        ...

    async def update(self, row_id: int, values: dict[str, Any]) -> int:
        """Overwrite columns of the row with the given id.

        Returns:
            Number of rows affected (0 when the id does not exist)
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        ...


class SupabaseRowStore:
    """Hosted-table backend speaking the Supabase REST (PostgREST) interface.

    Attributes:
        endpoint: Absolute URL of the table resource
    """

    def __init__(
        self,
        url: str,
        key: str,
        table: str = TABLE_NAME,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the hosted-table backend.

        Args:
            url: Project URL, e.g. https://abc.supabase.co
            key: API key sent as both apikey and bearer token
            table: Table name
            timeout: Per-request timeout in seconds
            client: Preconfigured HTTP client (tests pass one with a mock transport)
        """
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self._headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _request(
        self,
        method: str,
        params: dict[str, str],
        prefer: str | None = None,
        payload: Any = None,
    ) -> httpx.Response:
        headers = dict(self._headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            response = await self._client.request(
                method,
                self.endpoint,
                params=params,
                headers=headers,
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(
                "Row store request failed",
                extra={"method": method, "error": str(e)},
            )
            raise StoreError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "Row store returned an error",
                extra={"method": method, "status_code": response.status_code, "error": message},
            )
            raise StoreError(message)
        return response

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST", {"select": "*"}, prefer="return=representation", payload=[row]
        )
        rows = response.json()
        if not rows:
            raise StoreError("Insert returned no row")
        return rows[0]

    async def select_all(self) -> list[dict[str, Any]]:
        response = await self._request("GET", {"select": "*", "order": "created_at.desc,id.desc"})
        return response.json() or []

    async def select_column(self, column: str) -> list[Any]:
        response = await self._request("GET", {"select": column})
        return [row.get(column) for row in response.json() or []]

    async def count(self, created_since: datetime | None = None) -> int:
        params = {"select": "id"}
        if created_since is not None:
            since = created_since.astimezone(timezone.utc)
            params["created_at"] = f"gte.{since.strftime('%Y-%m-%dT%H:%M:%S.%fZ')}"
        response = await self._request("HEAD", params, prefer="count=exact")
        return _parse_content_range(response.headers.get("content-range"))

    async def update(self, row_id: int, values: dict[str, Any]) -> int:
        response = await self._request(
            "PATCH",
            {"id": f"eq.{row_id}", "select": "id"},
            prefer="return=representation",
            payload=values,
        )
        return len(response.json() or [])

    async def close(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or f"Row store responded with HTTP {response.status_code}"


def _parse_content_range(header: str | None) -> int:
    """Extract the total from a Content-Range header such as '0-9/42' or '*/0'."""
    if not header or "/" not in header:
        raise StoreError("Row store did not report a count")
    total = header.rsplit("/", 1)[1]
    if not total.isdigit():
        raise StoreError(f"Row store reported an unusable count: {header}")
    return int(total)


class FileRowStore:
    """File-based backend for local development.

    Stores each row as a separate JSON file named after its id.

    Attributes:
        storage_dir: Directory where rows are stored
    """

    def __init__(
        self,
        storage_dir: Path | str = ".brightwire/submissions",
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the file backend.

        Args:
            storage_dir: Directory path for storing rows
            clock: Source of created_at timestamps
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._lock = asyncio.Lock()

    def _path(self, row_id: int) -> Path:
        return self.storage_dir / f"{row_id}.json"

    async def _read(self, file_path: Path) -> dict[str, Any]:
        try:
            async with aiofiles.open(file_path, mode="r", encoding="utf-8") as f:
                return json.loads(await f.read())
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Unreadable row {file_path.name}: {e}") from e

    async def _write(self, row: dict[str, Any]) -> None:
        try:
            async with aiofiles.open(self._path(row["id"]), mode="w", encoding="utf-8") as f:
                await f.write(json.dumps(row, indent=2))
        except OSError as e:
            raise StoreError(f"Could not write row {row['id']}: {e}") from e

    async def _rows(self) -> list[dict[str, Any]]:
        files = sorted(
            (p for p in self.storage_dir.glob("*.json") if p.stem.isdigit()),
            key=lambda p: int(p.stem),
        )
        return [await self._read(p) for p in files]

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            existing = [int(p.stem) for p in self.storage_dir.glob("*.json") if p.stem.isdigit()]
            stored = {
                "phone": None,
                "status": "new",
                **row,
                "id": max(existing, default=0) + 1,
                "created_at": self._clock().isoformat(),
            }
            await self._write(stored)
        return stored

    async def select_all(self) -> list[dict[str, Any]]:
        rows = await self._rows()
        rows.sort(key=lambda r: (_as_datetime(r["created_at"]), r["id"]), reverse=True)
        return rows

    async def select_column(self, column: str) -> list[Any]:
        return [row.get(column) for row in await self._rows()]

    async def count(self, created_since: datetime | None = None) -> int:
        rows = await self._rows()
        if created_since is None:
            return len(rows)
        return sum(1 for r in rows if _as_datetime(r["created_at"]) >= created_since)

    async def update(self, row_id: int, values: dict[str, Any]) -> int:
        async with self._lock:
            file_path = self._path(row_id)
            if not file_path.exists():
                return 0
            row = await self._read(file_path)
            row.update({k: v for k, v in values.items() if k not in ("id", "created_at")})
            await self._write(row)
        return 1

    async def close(self) -> None:
        return None


class InMemoryRowStore:
    """In-memory backend.

    Useful for testing or demos. Data is lost on process restart.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._rows: list[dict[str, Any]] = []
        self._next_id = 1
        self._clock = clock

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        stored = {
            "phone": None,
            "status": "new",
            **row,
            "id": self._next_id,
            "created_at": self._clock(),
        }
        self._next_id += 1
        self._rows.append(stored)
        return dict(stored)

    async def select_all(self) -> list[dict[str, Any]]:
        # equal timestamps fall back to id so later inserts still come first
        rows = sorted(self._rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [dict(r) for r in rows]

    async def select_column(self, column: str) -> list[Any]:
        return [r.get(column) for r in self._rows]

    async def count(self, created_since: datetime | None = None) -> int:
        if created_since is None:
            return len(self._rows)
        return sum(1 for r in self._rows if r["created_at"] >= created_since)

    async def update(self, row_id: int, values: dict[str, Any]) -> int:
        affected = 0
        for row in self._rows:
            if row["id"] == row_id:
                row.update({k: v for k, v in values.items() if k not in ("id", "created_at")})
                affected += 1
        return affected

    async def close(self) -> None:
        return None
