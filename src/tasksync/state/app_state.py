"""Application state snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tasksync.models.task import Task
from tasksync.state.intents import OperationError


class AppState(BaseModel):
    """Immutable view of everything the UI renders.

    Only the reducer produces new instances; every other component treats
    it as read-only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_name: str = ""
    """Locally owned, never synchronized with the task service."""
    tasks: tuple[Task, ...] = ()
    """Task list in the order last received from a fetch, then mutated in place."""
    last_error: OperationError | None = None
    """Most recent failed remote operation, until dismissed."""

    @property
    def task_ids(self) -> list[str]:
        return [task.id for task in self.tasks]
