"""HTTP client for the admin endpoints.

Used by the terminal dashboard and the CLI; speaks only the public HTTP
contract, never the row store.
"""

import logging
from typing import Any

import httpx

from brightwire.api.models import AdminIdentity, DashboardStats, Submission

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """The API answered with success=false or could not be reached.

    Attributes:
        message: Error text from the server, or the transport error
        status_code: HTTP status, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AdminClient:
    """Async client for the Brightwire admin API."""

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Root URL of the API
            timeout: Request timeout in seconds
            transport: Custom transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "AdminClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Admin API unreachable", extra={"path": path, "error": str(e)})
            raise ClientError(f"Cannot reach {self.base_url}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ClientError(
                f"Unexpected response from {path} (HTTP {response.status_code})",
                response.status_code,
            ) from e

        if not body.get("success"):
            raise ClientError(body.get("error") or "Request failed", response.status_code)
        return body

    async def health(self) -> dict[str, Any]:
        body = await self._call("GET", "/api/health")
        return {"status": body.get("status"), "timestamp": body.get("timestamp")}

    async def login(self, email: str, password: str) -> AdminIdentity:
        body = await self._call(
            "POST", "/api/admin/login", json={"email": email, "password": password}
        )
        return AdminIdentity.model_validate(body["user"])

    async def list_submissions(self) -> list[Submission]:
        body = await self._call("GET", "/api/admin/submissions")
        return [Submission.model_validate(row) for row in body.get("data") or []]

    async def get_stats(self) -> DashboardStats:
        body = await self._call("GET", "/api/admin/stats")
        return DashboardStats.model_validate(body["data"])

    async def update_status(self, submission_id: int, status: str) -> None:
        await self._call(
            "PATCH",
            f"/api/admin/submissions/{submission_id}/status",
            json={"status": status},
        )
