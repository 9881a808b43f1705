# src/todolist/tasks/task_client.py

from __future__ import annotations

"""
HTTP client for the remote task API.

Endpoints (relative to the configured base URL):
- GET    /todoList         -> list of task records
- POST   /todoList         -> created record (server assigns id)
- PUT    /todoList/{id}    -> updated record
- DELETE /todoList/{id}    -> confirmation (body unused)

Every failure mode collapses into RemoteOperationError: the caller only needs
to know that the operation did not happen.
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from ..errors import RemoteOperationError
from .task_models import Task, format_timestamp

logger = logging.getLogger(__name__)

RESOURCE_PATH = "/todoList"


def _make_timeout(seconds: float | None) -> httpx.Timeout:
    if seconds is None:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds, connect=min(seconds, 5.0))


class TodoApiClient:
    """Async REST client; one request per call, no retries."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=_make_timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )
        logger.info("TodoApiClient ready base_url=%s timeout=%s", self._base_url, timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> TodoApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _request(
        self, operation: str, method: str, url: str, *, json: Any = None
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise RemoteOperationError(operation, f"{type(e).__name__}: {e}") from e

        if resp.is_error:
            raise RemoteOperationError(
                operation,
                f"HTTP {resp.status_code} from {method} {url}",
                status_code=resp.status_code,
            )
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return resp

    @staticmethod
    def _decode(operation: str, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteOperationError(
                operation, "response body is not valid JSON", status_code=resp.status_code
            ) from e

    @staticmethod
    def _to_task(operation: str, data: Any) -> Task:
        try:
            return Task.from_api(data)
        except ValueError as e:
            raise RemoteOperationError(operation, f"malformed task record: {e}") from e

    # ---- public API ----

    async def list_tasks(self) -> list[Task]:
        resp = await self._request("list", "GET", RESOURCE_PATH)
        data = self._decode("list", resp)
        if not isinstance(data, list):
            raise RemoteOperationError("list", f"expected a JSON array, got {type(data).__name__}")
        return [self._to_task("list", item) for item in data]

    async def create_task(self, name: str, *, created_at: datetime) -> Task:
        payload = {
            "name": name,
            "completed": False,
            "created_at": format_timestamp(created_at),
        }
        resp = await self._request("create", "POST", RESOURCE_PATH, json=payload)
        return self._to_task("create", self._decode("create", resp))

    async def update_task(self, task: Task) -> Task:
        resp = await self._request("update", "PUT", f"{RESOURCE_PATH}/{task.id}", json=task.to_api())
        return self._to_task("update", self._decode("update", resp))

    async def delete_task(self, task_id: int) -> None:
        await self._request("delete", "DELETE", f"{RESOURCE_PATH}/{int(task_id)}")
