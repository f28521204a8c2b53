"""High-level async client for the remote task service."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from tasksync._api import tasks as _tasks_api
from tasksync._transport import HttpTransport, Transport
from tasksync.config import TaskSyncConfig
from tasksync.exceptions import TaskSyncError
from tasksync.models.task import Task

_logger = logging.getLogger(__name__)


class TaskService(Protocol):
    """Remote operations the effect workers depend on."""

    async def list_tasks(self) -> list[Task]:
        ...

    async def create_task(self, title: str) -> Task:
        ...

    async def update_task(self, task_id: str, title: str) -> Task:
        ...

    async def delete_task(self, task_id: str) -> None:
        ...


class TaskServiceClient:
    """Async client for the remote task service.

    Usage::

        async with TaskServiceClient(config) as client:
            tasks = await client.list_tasks()

    A pre-built *transport* bypasses the HTTP session entirely, which is how
    tests plug in an in-memory backend.
    """

    def __init__(
        self,
        config: TaskSyncConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or TaskSyncConfig()
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport

    @property
    def config(self) -> TaskSyncConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TaskServiceClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TaskSyncError("Client not initialized. Use 'async with TaskServiceClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Task operations
    # ------------------------------------------------------------------

    async def list_tasks(self) -> list[Task]:
        """Fetch the full task collection in service order."""
        return await _tasks_api.fetch_tasks(self._config.tasks_path, self._require_transport())

    async def create_task(self, title: str) -> Task:
        """Create a task and return it with its service-assigned id."""
        return await _tasks_api.create_task(self._config.tasks_path, self._require_transport(), title)

    async def update_task(self, task_id: str, title: str) -> Task:
        """Replace the title of task *task_id* and return the updated task."""
        return await _tasks_api.update_task(self._config.tasks_path, self._require_transport(), task_id, title)

    async def delete_task(self, task_id: str) -> None:
        """Delete task *task_id*."""
        await _tasks_api.delete_task(self._config.tasks_path, self._require_transport(), task_id)
        _logger.debug("Deleted task %s", task_id)
