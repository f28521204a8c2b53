"""Pure reducer: ``(state, intent) -> state``.

The reducer is the only code allowed to produce a new :class:`AppState`.
It never performs I/O and never raises.  When an intent changes nothing,
the *same* state object is returned so the store can skip notifying
subscribers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from tasksync.models.task import Task
from tasksync.state.app_state import AppState
from tasksync.state.intents import (
    AddTask,
    AddTaskSucceeded,
    CreateTaskRequested,
    DeleteTask,
    DeleteTaskSucceeded,
    DismissError,
    EditTask,
    EditTaskRequested,
    EditTaskSucceeded,
    FetchTasksRequested,
    IntentType,
    OperationFailed,
    SetName,
    SetTasks,
)

Handler = Callable[[AppState, Any], AppState]


def _dedupe(tasks: Iterable[Task]) -> tuple[Task, ...]:
    """Keep the first position of each id, holding the last value received for it."""
    positions: dict[str, int] = {}
    result: list[Task] = []
    for task in tasks:
        index = positions.get(task.id)
        if index is None:
            positions[task.id] = len(result)
            result.append(task)
        else:
            result[index] = task
    return tuple(result)


def _upsert(state: AppState, task: Task) -> AppState:
    tasks = list(state.tasks)
    for index, existing in enumerate(tasks):
        if existing.id == task.id:
            if existing == task:
                return state
            tasks[index] = task
            return state.model_copy(update={"tasks": tuple(tasks)})
    tasks.append(task)
    return state.model_copy(update={"tasks": tuple(tasks)})


def _remove(state: AppState, task_id: str) -> AppState:
    remaining = tuple(task for task in state.tasks if task.id != task_id)
    if len(remaining) == len(state.tasks):
        return state
    return state.model_copy(update={"tasks": remaining})


def _retitle(state: AppState, task_id: str, title: str) -> AppState:
    changed = False
    tasks: list[Task] = []
    for task in state.tasks:
        if task.id == task_id and task.title != title:
            task = task.with_title(title)
            changed = True
        tasks.append(task)
    if not changed:
        return state
    return state.model_copy(update={"tasks": tuple(tasks)})


def _set_name(state: AppState, intent: SetName) -> AppState:
    if state.user_name == intent.name:
        return state
    return state.model_copy(update={"user_name": intent.name})


def _set_tasks(state: AppState, intent: SetTasks) -> AppState:
    return state.model_copy(update={"tasks": _dedupe(intent.tasks)})


def _add_task(state: AppState, intent: AddTask | AddTaskSucceeded) -> AppState:
    return _upsert(state, intent.task)


def _delete_task(state: AppState, intent: DeleteTask | DeleteTaskSucceeded) -> AppState:
    return _remove(state, intent.task_id)


def _edit_task(state: AppState, intent: EditTask) -> AppState:
    return _retitle(state, intent.task_id, intent.title)


def _edit_task_succeeded(state: AppState, intent: EditTaskSucceeded) -> AppState:
    return _retitle(state, intent.task.id, intent.task.title)


def _operation_failed(state: AppState, intent: OperationFailed) -> AppState:
    return state.model_copy(update={"last_error": intent.error})


def _dismiss_error(state: AppState, _intent: Any) -> AppState:
    if state.last_error is None:
        return state
    return state.model_copy(update={"last_error": None})


def _unchanged(state: AppState, _intent: Any) -> AppState:
    return state


# Each kind maps to the intent class it accepts and the handler that applies it.
_HANDLERS: dict[IntentType, tuple[type, Handler]] = {
    IntentType.SET_NAME: (SetName, _set_name),
    IntentType.SET_TASKS: (SetTasks, _set_tasks),
    IntentType.ADD_TASK: (AddTask, _add_task),
    IntentType.DELETE_TASK: (DeleteTask, _delete_task),
    IntentType.EDIT_TASK: (EditTask, _edit_task),
    IntentType.FETCH_TASKS_REQUESTED: (FetchTasksRequested, _unchanged),
    IntentType.CREATE_TASK_REQUESTED: (CreateTaskRequested, _unchanged),
    IntentType.EDIT_TASK_REQUESTED: (EditTaskRequested, _unchanged),
    IntentType.ADD_TASK_SUCCEEDED: (AddTaskSucceeded, _add_task),
    IntentType.EDIT_TASK_SUCCEEDED: (EditTaskSucceeded, _edit_task_succeeded),
    IntentType.DELETE_TASK_SUCCEEDED: (DeleteTaskSucceeded, _delete_task),
    IntentType.OPERATION_FAILED: (OperationFailed, _operation_failed),
    IntentType.DISMISS_ERROR: (DismissError, _dismiss_error),
}


def reduce(state: AppState, intent: Any) -> AppState:
    """Apply *intent* to *state*.

    Anything that is not one of the intent models (unknown kinds, or objects
    that merely carry a known ``type``) leaves *state* untouched.
    """
    try:
        kind = IntentType(getattr(intent, "type", None))
    except (TypeError, ValueError):
        return state
    entry = _HANDLERS.get(kind)
    if entry is None:
        return state
    intent_class, handler = entry
    if not isinstance(intent, intent_class):
        return state
    return handler(state, intent)
