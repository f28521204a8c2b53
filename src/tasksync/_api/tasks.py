"""Task collection endpoints.

One function per remote operation.  Each takes the collection path and a
:class:`~tasksync._transport.Transport`, and validates the response into
:class:`~tasksync.models.task.Task` objects.

It is internal to tasksync and may change at any time.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from tasksync._transport import Transport
from tasksync.exceptions import TaskSyncResponseError
from tasksync.models.task import Task


def _item_path(tasks_path: str, task_id: str) -> str:
    return f"{tasks_path}/{quote(task_id, safe='')}"


def _parse_task(endpoint: str, payload: Any) -> Task:
    if not isinstance(payload, dict):
        raise TaskSyncResponseError(
            f"{endpoint} returned {type(payload).__name__}, expected a task object",
            endpoint=endpoint,
        )
    try:
        return Task.model_validate(payload)
    except ValidationError as exc:
        raise TaskSyncResponseError(
            f"{endpoint} returned an invalid task: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
        ) from exc


async def fetch_tasks(tasks_path: str, transport: Transport) -> list[Task]:
    """``GET /tasks``: fetch the full task collection."""
    endpoint = f"GET {tasks_path}"
    decoded = await transport.request_json("GET", tasks_path)
    if not isinstance(decoded, list):
        raise TaskSyncResponseError(
            f"{endpoint} returned {type(decoded).__name__}, expected a list",
            endpoint=endpoint,
        )
    return [_parse_task(endpoint, item) for item in decoded]


async def create_task(tasks_path: str, transport: Transport, title: str) -> Task:
    """``POST /tasks``: create a task; the service assigns its id."""
    endpoint = f"POST {tasks_path}"
    decoded = await transport.request_json("POST", tasks_path, body={"title": title})
    return _parse_task(endpoint, decoded)


async def update_task(tasks_path: str, transport: Transport, task_id: str, title: str) -> Task:
    """``PUT /tasks/{id}``: replace a task's title.

    Some services answer with a partial object or an empty body; a
    missing ``id`` or ``title`` is filled from the request.
    """
    path = _item_path(tasks_path, task_id)
    endpoint = f"PUT {path}"
    decoded = await transport.request_json("PUT", path, body={"title": title})
    if decoded is None:
        decoded = {}
    if isinstance(decoded, dict):
        decoded = {"id": task_id, "title": title, **{k: v for k, v in decoded.items() if v is not None}}
    return _parse_task(endpoint, decoded)


async def delete_task(tasks_path: str, transport: Transport, task_id: str) -> None:
    """``DELETE /tasks/{id}``: remove a task; any response body is ignored."""
    await transport.request_json("DELETE", _item_path(tasks_path, task_id))
