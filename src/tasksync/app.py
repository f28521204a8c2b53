"""Application facade wiring the service client, store and effects together."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import aiohttp

from tasksync._transport import Transport
from tasksync.client import TaskService, TaskServiceClient
from tasksync.config import TaskSyncConfig
from tasksync.effects.coordinator import EffectCoordinator
from tasksync.state.app_state import AppState
from tasksync.state.store import Listener, Store


class TaskSyncApp:
    """Everything a UI layer needs: a store to read and dispatch to, backed
    by effect workers talking to the remote task service.

    Usage::

        async with TaskSyncApp(TaskSyncConfig.from_env()) as app:
            app.dispatch(fetch_tasks())
            await app.join()
            print(app.get_state().tasks)

    *service* replaces the HTTP client entirely; *transport* keeps the
    client but swaps its wire layer.
    """

    def __init__(
        self,
        config: TaskSyncConfig | None = None,
        *,
        store: Store | None = None,
        service: TaskService | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or TaskSyncConfig()
        self.store = store if store is not None else Store()
        self._client: TaskServiceClient | None = None
        if service is None:
            self._client = TaskServiceClient(self._config, session=session, transport=transport)
            service = self._client
        self.service: TaskService = service
        self.effects = EffectCoordinator(self.store, self.service)

    @property
    def config(self) -> TaskSyncConfig:
        return self._config

    async def __aenter__(self) -> TaskSyncApp:
        if self._client is not None:
            await self._client.__aenter__()
        self.effects.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        try:
            await self.effects.stop()
        finally:
            if self._client is not None:
                await self._client.__aexit__(*exc)

    def dispatch(self, intent: Any) -> None:
        self.store.dispatch(intent)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def get_state(self) -> AppState:
        return self.store.get_state()

    async def join(self) -> None:
        """Wait for all in-flight remote operations and their follow-ups."""
        await self.effects.join()
