"""In-memory state store.

This is the single source of truth for the application state.  It owns the
current :class:`AppState` and the only mutation entry point, :meth:`Store.dispatch`,
which runs the reducer.
"""

from __future__ import annotations

import contextlib
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from tasksync.state.app_state import AppState
from tasksync.state.reducer import reduce

_logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]
Observer = Callable[[Any], None]
Reducer = Callable[[AppState, Any], AppState]


def _describe(intent: Any) -> str:
    kind = getattr(intent, "type", None)
    return str(kind) if kind is not None else type(intent).__name__


class Store:
    """Holds application state and applies intents one at a time.

    Dispatch is synchronous and linearized: an intent dispatched while
    another is being applied (from a subscriber or observer) is queued and
    applied afterwards, in dispatch order.  For each intent the reducer runs
    first, then subscribers are notified if the state object changed, then
    intent observers see the intent.

    Usage::

        store = Store()
        unsubscribe = store.subscribe(lambda state: print(state.tasks))
        store.dispatch(set_name("Ada"))
    """

    def __init__(
        self,
        initial_state: AppState | None = None,
        *,
        reducer: Reducer = reduce,
    ) -> None:
        self._state = initial_state if initial_state is not None else AppState()
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self._observers: list[Observer] = []
        self._pending: deque[Any] = deque()
        self._dispatching = False

    def get_state(self) -> AppState:
        """Return the current state snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the new state after every state change.

        Returns a callable that removes the listener; calling it twice is
        harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return unsubscribe

    def add_observer(self, observer: Observer) -> Callable[[], None]:
        """Call *observer* with every intent after the reducer has applied it.

        This is the hook side-effect coordinators use to watch the intent
        stream.  Returns a callable that removes the observer.
        """
        self._observers.append(observer)

        def remove() -> None:
            with contextlib.suppress(ValueError):
                self._observers.remove(observer)

        return remove

    def dispatch(self, intent: Any) -> None:
        """Apply *intent* through the reducer and notify listeners and observers.

        A listener or observer that raises does not stop the others: every
        observer still sees the intent and intents queued behind it are
        still applied.  The first such exception is re-raised to the caller
        once the queue is drained; any further ones are logged.
        """
        self._pending.append(intent)
        if self._dispatching:
            return

        self._dispatching = True
        errors: list[Exception] = []
        try:
            while self._pending:
                errors.extend(self._apply(self._pending.popleft()))
        finally:
            self._dispatching = False

        if errors:
            for extra in errors[1:]:
                _logger.error("Additional callback error during dispatch", exc_info=extra)
            raise errors[0]

    def _apply(self, intent: Any) -> list[Exception]:
        _logger.debug("Dispatch %s", _describe(intent))
        previous = self._state
        self._state = self._reducer(previous, intent)

        errors: list[Exception] = []
        if self._state is not previous:
            for listener in list(self._listeners):
                try:
                    listener(self._state)
                except Exception as exc:
                    errors.append(exc)

        for observer in list(self._observers):
            try:
                observer(intent)
            except Exception as exc:
                errors.append(exc)
        return errors
