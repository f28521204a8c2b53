"""Effect workers: one remote call per triggering intent.

Each worker awaits exactly one call on the task service and dispatches
exactly one result intent: the success intent for its operation, or
:class:`~tasksync.state.intents.OperationFailed`.  Workers keep no state
beyond their own call and never retry.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from tasksync.client import TaskService
from tasksync.exceptions import TaskSyncError
from tasksync.state.intents import (
    AddTaskSucceeded,
    CreateTaskRequested,
    DeleteTask,
    DeleteTaskSucceeded,
    EditTaskRequested,
    EditTaskSucceeded,
    FetchTasksRequested,
    IntentType,
    OperationError,
    OperationFailed,
    OperationKind,
    SetTasks,
)
from tasksync.state.store import Store

_logger = logging.getLogger(__name__)

Worker = Callable[[Store, TaskService, Any], Awaitable[None]]


def _deliver(store: Store, intent: Any) -> None:
    # The result is already applied when a subscriber raises; that is a
    # subscriber bug, not a failure of the remote call.
    try:
        store.dispatch(intent)
    except Exception:
        _logger.exception("Subscriber error while applying %s", intent.type)


def report_failure(
    store: Store,
    kind: OperationKind,
    exc: BaseException,
    *,
    task_id: str | None = None,
) -> None:
    """Dispatch :class:`OperationFailed` describing *exc*."""
    error = OperationError(
        kind=kind,
        detail=str(exc) or type(exc).__name__,
        task_id=task_id,
        status_code=getattr(exc, "status_code", None),
    )
    _deliver(store, OperationFailed(error=error))


async def fetch_tasks_worker(store: Store, service: TaskService, intent: FetchTasksRequested) -> None:
    try:
        tasks = await service.list_tasks()
    except TaskSyncError as exc:
        _logger.warning("Error fetching tasks: %s", exc)
        report_failure(store, OperationKind.FETCH, exc)
        return
    _deliver(store, SetTasks(tasks=tuple(tasks)))


async def create_task_worker(store: Store, service: TaskService, intent: CreateTaskRequested) -> None:
    try:
        task = await service.create_task(intent.title)
    except TaskSyncError as exc:
        _logger.warning("Error adding task %r: %s", intent.title, exc)
        report_failure(store, OperationKind.CREATE, exc)
        return
    _deliver(store, AddTaskSucceeded(task=task))


async def edit_task_worker(store: Store, service: TaskService, intent: EditTaskRequested) -> None:
    try:
        task = await service.update_task(intent.task_id, intent.title)
    except TaskSyncError as exc:
        _logger.warning("Error editing task %s: %s", intent.task_id, exc)
        report_failure(store, OperationKind.EDIT, exc, task_id=intent.task_id)
        return
    _deliver(store, EditTaskSucceeded(task=task))


async def delete_task_worker(store: Store, service: TaskService, intent: DeleteTask) -> None:
    # Confirms with DeleteTaskSucceeded, never DeleteTask: re-dispatching the
    # trigger kind would start another DELETE for the same user action.
    try:
        await service.delete_task(intent.task_id)
    except TaskSyncError as exc:
        _logger.warning("Error deleting task %s: %s", intent.task_id, exc)
        report_failure(store, OperationKind.DELETE, exc, task_id=intent.task_id)
        return
    _deliver(store, DeleteTaskSucceeded(task_id=intent.task_id))


DEFAULT_WORKERS: dict[IntentType, Worker] = {
    IntentType.FETCH_TASKS_REQUESTED: fetch_tasks_worker,
    IntentType.DELETE_TASK: delete_task_worker,
    IntentType.CREATE_TASK_REQUESTED: create_task_worker,
    IntentType.EDIT_TASK_REQUESTED: edit_task_worker,
}
"""Trigger intent kind -> worker.  Result intents must never appear as keys."""

OPERATION_KINDS: dict[IntentType, OperationKind] = {
    IntentType.FETCH_TASKS_REQUESTED: OperationKind.FETCH,
    IntentType.DELETE_TASK: OperationKind.DELETE,
    IntentType.CREATE_TASK_REQUESTED: OperationKind.CREATE,
    IntentType.EDIT_TASK_REQUESTED: OperationKind.EDIT,
}
