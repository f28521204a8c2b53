"""HTTP transport for the remote task service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from tasksync.config import TaskSyncConfig
from tasksync.exceptions import (
    TaskSyncNotFoundError,
    TaskSyncRemoteError,
    TaskSyncResponseError,
    TaskSyncTransportError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class HttpTransport:
    """JSON-over-HTTP transport backed by an ``aiohttp.ClientSession``."""

    def __init__(
        self,
        config: TaskSyncConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        An empty 2xx body decodes to ``None``.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        data: str | None = None
        if body is not None:
            headers["content-type"] = "application/json; charset=UTF-8"
            data = json.dumps(body, separators=(",", ":"))

        url = f"{self._config.base_url}{path}"
        endpoint = f"{method} {path}"

        _logger.debug("%s %s", method, url)

        kwargs: dict[str, Any] = {"data": data, "headers": headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TaskSyncTransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        if status == 404:
            raise TaskSyncNotFoundError(
                f"HTTP 404 from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )
        if not 200 <= status < 300:
            raise TaskSyncRemoteError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise TaskSyncResponseError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
