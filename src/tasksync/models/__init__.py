"""Data models for task service payloads."""

from tasksync.models._base import TaskId, TaskSyncBaseModel, parse_task_id
from tasksync.models.task import Task

__all__ = [
    "Task",
    "TaskId",
    "TaskSyncBaseModel",
    "parse_task_id",
]
