"""Effect coordinator: watches the intent stream and runs remote calls.

The coordinator registers itself as an intent observer on a
:class:`~tasksync.state.store.Store`.  Every trigger kind has its own
channel (an ``asyncio.Queue``) and its own watcher loop; the watcher spawns
one worker task per intent it takes off the channel.  Workers run
concurrently and unbounded, and report back by dispatching result intents
onto the same store.

Result intents from concurrent workers are applied in network completion
order.  Two overlapping operations on the same task id are therefore
last-writer-wins by completion time, not by request time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tasksync.client import TaskService
from tasksync.effects.workers import DEFAULT_WORKERS, OPERATION_KINDS, Worker, report_failure
from tasksync.state.intents import IntentType
from tasksync.state.store import Store

_logger = logging.getLogger(__name__)


def _intent_kind(intent: Any) -> IntentType | None:
    try:
        return IntentType(getattr(intent, "type", None))
    except (TypeError, ValueError):
        return None


class EffectCoordinator:
    """Runs one watcher per trigger intent kind.

    Usage::

        async with EffectCoordinator(store, client) as effects:
            store.dispatch(fetch_tasks())
            await effects.join()

    In-flight workers are never cancelled: :meth:`stop` stops the watchers
    but waits for every spawned worker to finish.
    """

    def __init__(
        self,
        store: Store,
        service: TaskService,
        *,
        workers: Mapping[IntentType, Worker] | None = None,
    ) -> None:
        self._store = store
        self._service = service
        self._workers: dict[IntentType, Worker] = dict(workers if workers is not None else DEFAULT_WORKERS)
        self._queues: dict[IntentType, asyncio.Queue[Any]] = {}
        self._watchers: list[asyncio.Task[None]] = []
        self._in_flight: set[asyncio.Task[None]] = set()
        self._remove_observer: Callable[[], None] | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        """Number of workers currently awaiting their remote call."""
        return len(self._in_flight)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> EffectCoordinator:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def start(self) -> None:
        """Start the watcher loops.  Must be called with a running event loop."""
        if self._running:
            return
        loop = asyncio.get_running_loop()
        for kind, worker in self._workers.items():
            queue: asyncio.Queue[Any] = asyncio.Queue()
            self._queues[kind] = queue
            self._watchers.append(
                loop.create_task(self._watch(kind, queue, worker), name=f"tasksync-watch-{kind}"),
            )
        self._remove_observer = self._store.add_observer(self._on_intent)
        self._running = True
        _logger.debug("Effect coordinator started with %d watcher(s)", len(self._watchers))

    async def stop(self) -> None:
        """Stop watching and wait for in-flight workers to complete."""
        if not self._running:
            return
        self._running = False
        if self._remove_observer is not None:
            self._remove_observer()
            self._remove_observer = None

        # Intents already routed to a channel were dispatched; they still get a worker.
        for kind, queue in self._queues.items():
            while not queue.empty():
                self._spawn(kind, self._workers[kind], queue.get_nowait())
                queue.task_done()

        for watcher in self._watchers:
            watcher.cancel()
        await asyncio.gather(*self._watchers, return_exceptions=True)
        self._watchers.clear()
        self._queues.clear()

        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
        _logger.debug("Effect coordinator stopped")

    async def join(self) -> None:
        """Wait until every routed intent has been handled by a finished worker.

        Workers spawned while waiting (e.g. from result intents) are waited
        for as well.
        """
        while True:
            for queue in list(self._queues.values()):
                await queue.join()
            if self._in_flight:
                await asyncio.gather(*list(self._in_flight), return_exceptions=True)
                continue
            if all(queue.empty() for queue in self._queues.values()):
                return

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_intent(self, intent: Any) -> None:
        if not self._running:
            return
        kind = _intent_kind(intent)
        if kind is None:
            return
        queue = self._queues.get(kind)
        if queue is not None:
            queue.put_nowait(intent)

    async def _watch(self, kind: IntentType, queue: asyncio.Queue[Any], worker: Worker) -> None:
        while True:
            intent = await queue.get()
            try:
                self._spawn(kind, worker, intent)
            finally:
                queue.task_done()

    def _spawn(self, kind: IntentType, worker: Worker, intent: Any) -> None:
        _logger.debug("Spawning %s worker", kind)
        task = asyncio.get_running_loop().create_task(
            self._run_worker(kind, worker, intent),
            name=f"tasksync-worker-{kind}",
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_worker(self, kind: IntentType, worker: Worker, intent: Any) -> None:
        try:
            await worker(self._store, self._service, intent)
        except Exception as exc:
            # Workers handle service errors themselves; anything else is a bug,
            # but it must not take down the other workers or the store.
            _logger.exception("Unexpected error in %s worker", kind)
            operation = OPERATION_KINDS.get(kind)
            if operation is not None:
                report_failure(self._store, operation, exc, task_id=getattr(intent, "task_id", None))
