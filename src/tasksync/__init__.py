"""tasksync - Async state synchronization for a remote task list."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytasksync")
except PackageNotFoundError:
    __version__ = "0+local"
from tasksync.app import TaskSyncApp
from tasksync.client import TaskService, TaskServiceClient
from tasksync.config import TaskSyncConfig
from tasksync.effects import EffectCoordinator
from tasksync.exceptions import (
    TaskSyncConfigError,
    TaskSyncError,
    TaskSyncNotFoundError,
    TaskSyncRemoteError,
    TaskSyncResponseError,
    TaskSyncTransportError,
)
from tasksync.models import Task
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
    Intent,
    IntentType,
    OperationError,
    OperationFailed,
    OperationKind,
    SetName,
    SetTasks,
    create_task,
    delete_task,
    dismiss_error,
    edit_task,
    fetch_tasks,
    parse_intent,
    set_name,
    set_tasks,
)
from tasksync.state.reducer import reduce
from tasksync.state.store import Store

__all__ = [
    "__version__",
    "AddTask",
    "AddTaskSucceeded",
    "AppState",
    "CreateTaskRequested",
    "DeleteTask",
    "DeleteTaskSucceeded",
    "DismissError",
    "EditTask",
    "EditTaskRequested",
    "EditTaskSucceeded",
    "EffectCoordinator",
    "FetchTasksRequested",
    "Intent",
    "IntentType",
    "OperationError",
    "OperationFailed",
    "OperationKind",
    "SetName",
    "SetTasks",
    "Store",
    "Task",
    "TaskService",
    "TaskServiceClient",
    "TaskSyncApp",
    "TaskSyncConfig",
    "TaskSyncConfigError",
    "TaskSyncError",
    "TaskSyncNotFoundError",
    "TaskSyncRemoteError",
    "TaskSyncResponseError",
    "TaskSyncTransportError",
    "create_task",
    "delete_task",
    "dismiss_error",
    "edit_task",
    "fetch_tasks",
    "parse_intent",
    "reduce",
    "set_name",
    "set_tasks",
]
