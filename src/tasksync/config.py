"""Client configuration for tasksync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from tasksync.exceptions import TaskSyncConfigError

DEFAULT_BASE_URL = "https://64a67e6a096b3f0fcc7fe3e0.mockapi.io"
DEFAULT_USER_AGENT = "pytasksync"


def _env_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise TaskSyncConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TaskSyncConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the remote task service, without trailing slash.
    tasks_path : str
        Path of the task collection below ``base_url``.
    request_timeout : float or None
        Total timeout per request in seconds.  ``None`` leaves the
        transport default in place; in-flight calls are otherwise never
        aborted.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = DEFAULT_BASE_URL
    tasks_path: str = "/tasks"
    request_timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        if not base_url:
            raise TaskSyncConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", base_url)

        tasks_path = "/" + self.tasks_path.strip().strip("/")
        if tasks_path == "/":
            raise TaskSyncConfigError("tasks_path must name a collection")
        object.__setattr__(self, "tasks_path", tasks_path)

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise TaskSyncConfigError("request_timeout must be positive")

    @property
    def tasks_url(self) -> str:
        """Absolute URL of the task collection."""
        return f"{self.base_url}{self.tasks_path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> TaskSyncConfig:
        """Create configuration from environment variables.

        Reads ``TASKSYNC_BASE_URL``, ``TASKSYNC_TASKS_PATH``,
        ``TASKSYNC_REQUEST_TIMEOUT`` and ``TASKSYNC_USER_AGENT``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TASKSYNC_BASE_URL": "base_url",
            "TASKSYNC_TASKS_PATH": "tasks_path",
            "TASKSYNC_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("TASKSYNC_REQUEST_TIMEOUT")
        if timeout_env is not None and timeout_env.strip() and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float(timeout_env, "TASKSYNC_REQUEST_TIMEOUT")

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
