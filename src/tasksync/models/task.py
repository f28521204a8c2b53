"""Task model."""

from __future__ import annotations

from tasksync.models._base import TaskId, TaskSyncBaseModel


class Task(TaskSyncBaseModel):
    """A task as stored by the remote task service.

    ``id`` is assigned by the service on creation and is never generated
    locally.  Extra fields the service returns (``createdAt`` and the like)
    are ignored.
    """

    id: TaskId
    """Opaque service-assigned identifier."""
    title: str = ""
    """User-supplied title."""

    def with_title(self, title: str) -> Task:
        """Return a copy of this task with *title* replaced."""
        return self.model_copy(update={"title": title})
