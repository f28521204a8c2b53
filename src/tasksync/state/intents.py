"""Intent vocabulary.

Everything that can happen to the application state is expressed as one of
these intents.  UI code dispatches request intents, effect workers dispatch
result intents, and only the reducer turns them into new state.

``Intent`` is a closed union discriminated on ``type``: adding a member here
means adding a reducer handler (and, for trigger intents, a watcher).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tasksync.models._base import TaskId
from tasksync.models.task import Task


class IntentType(StrEnum):
    SET_NAME = "set_name"
    SET_TASKS = "set_tasks"
    ADD_TASK = "add_task"
    DELETE_TASK = "delete_task"
    EDIT_TASK = "edit_task"
    FETCH_TASKS_REQUESTED = "fetch_tasks_requested"
    CREATE_TASK_REQUESTED = "create_task_requested"
    EDIT_TASK_REQUESTED = "edit_task_requested"
    ADD_TASK_SUCCEEDED = "add_task_succeeded"
    EDIT_TASK_SUCCEEDED = "edit_task_succeeded"
    DELETE_TASK_SUCCEEDED = "delete_task_succeeded"
    OPERATION_FAILED = "operation_failed"
    DISMISS_ERROR = "dismiss_error"


class OperationKind(StrEnum):
    FETCH = "fetch"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


class OperationError(BaseModel):
    """What went wrong with a remote operation, as kept in state."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: OperationKind
    detail: str
    task_id: str | None = None
    status_code: int | None = None


class _IntentBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# State intents
# ---------------------------------------------------------------------------


class SetName(_IntentBase):
    type: Literal[IntentType.SET_NAME] = IntentType.SET_NAME
    name: str


class SetTasks(_IntentBase):
    """Replace the task list wholesale with a fetch result."""

    type: Literal[IntentType.SET_TASKS] = IntentType.SET_TASKS
    tasks: tuple[Task, ...] = ()


class AddTask(_IntentBase):
    """Append a task that already carries its service-assigned id."""

    type: Literal[IntentType.ADD_TASK] = IntentType.ADD_TASK
    task: Task


class DeleteTask(_IntentBase):
    """Remove a task locally and request its remote deletion."""

    type: Literal[IntentType.DELETE_TASK] = IntentType.DELETE_TASK
    task_id: TaskId


class EditTask(_IntentBase):
    type: Literal[IntentType.EDIT_TASK] = IntentType.EDIT_TASK
    task_id: TaskId
    title: str


class FetchTasksRequested(_IntentBase):
    type: Literal[IntentType.FETCH_TASKS_REQUESTED] = IntentType.FETCH_TASKS_REQUESTED


# ---------------------------------------------------------------------------
# Request intents (trigger a remote call, no direct state change)
# ---------------------------------------------------------------------------


class CreateTaskRequested(_IntentBase):
    type: Literal[IntentType.CREATE_TASK_REQUESTED] = IntentType.CREATE_TASK_REQUESTED
    title: str


class EditTaskRequested(_IntentBase):
    type: Literal[IntentType.EDIT_TASK_REQUESTED] = IntentType.EDIT_TASK_REQUESTED
    task_id: TaskId
    title: str


# ---------------------------------------------------------------------------
# Result intents (dispatched by effect workers)
# ---------------------------------------------------------------------------


class AddTaskSucceeded(_IntentBase):
    type: Literal[IntentType.ADD_TASK_SUCCEEDED] = IntentType.ADD_TASK_SUCCEEDED
    task: Task


class EditTaskSucceeded(_IntentBase):
    type: Literal[IntentType.EDIT_TASK_SUCCEEDED] = IntentType.EDIT_TASK_SUCCEEDED
    task: Task


class DeleteTaskSucceeded(_IntentBase):
    """Confirms a remote delete.  No watcher listens for this kind."""

    type: Literal[IntentType.DELETE_TASK_SUCCEEDED] = IntentType.DELETE_TASK_SUCCEEDED
    task_id: TaskId


class OperationFailed(_IntentBase):
    type: Literal[IntentType.OPERATION_FAILED] = IntentType.OPERATION_FAILED
    error: OperationError


class DismissError(_IntentBase):
    type: Literal[IntentType.DISMISS_ERROR] = IntentType.DISMISS_ERROR


Intent = Annotated[
    SetName
    | SetTasks
    | AddTask
    | DeleteTask
    | EditTask
    | FetchTasksRequested
    | CreateTaskRequested
    | EditTaskRequested
    | AddTaskSucceeded
    | EditTaskSucceeded
    | DeleteTaskSucceeded
    | OperationFailed
    | DismissError,
    Field(discriminator="type"),
]

_INTENT_ADAPTER: TypeAdapter[Intent] = TypeAdapter(Intent)


def parse_intent(data: Any) -> Intent:
    """Validate a plain mapping (e.g. ``{"type": "set_name", "name": "x"}``) into an intent."""
    return _INTENT_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# Action creators
# ---------------------------------------------------------------------------


def set_name(name: str) -> SetName:
    return SetName(name=name)


def set_tasks(tasks: list[Task] | tuple[Task, ...]) -> SetTasks:
    return SetTasks(tasks=tuple(tasks))


def fetch_tasks() -> FetchTasksRequested:
    return FetchTasksRequested()


def create_task(title: str) -> CreateTaskRequested:
    return CreateTaskRequested(title=title)


def edit_task(task_id: str, title: str) -> EditTaskRequested:
    return EditTaskRequested(task_id=task_id, title=title)


def delete_task(task_id: str) -> DeleteTask:
    return DeleteTask(task_id=task_id)


def dismiss_error() -> DismissError:
    return DismissError()
