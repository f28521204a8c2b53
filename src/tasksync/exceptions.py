"""Custom exception hierarchy for tasksync."""

from __future__ import annotations


class TaskSyncError(Exception):
    """Base exception for all tasksync errors."""


class TaskSyncConfigError(TaskSyncError):
    """Invalid or missing configuration."""


class TaskSyncTransportError(TaskSyncError):
    """The remote call did not complete (connection failure, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TaskSyncRemoteError(TaskSyncError):
    """The remote call completed with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TaskSyncNotFoundError(TaskSyncRemoteError):
    """The task service answered 404 for the requested resource."""


class TaskSyncResponseError(TaskSyncRemoteError):
    """The task service answered 2xx with a body we cannot use.

    Raised for non-JSON bodies and for JSON that does not have the shape of
    a task (or list of tasks).
    """
