from __future__ import annotations

from typing import Any

import pytest

from tasksync.models import Task
from tasksync.state.app_state import AppState
from tasksync.state.intents import AddTask, DeleteTask, IntentType, set_name
from tasksync.state.store import Store


def test_store_starts_empty() -> None:
    state = Store().get_state()

    assert state == AppState()
    assert state.user_name == ""
    assert state.tasks == ()
    assert state.last_error is None


def test_subscribers_are_notified_on_change_only() -> None:
    store = Store()
    seen: list[AppState] = []
    store.subscribe(seen.append)

    store.dispatch(set_name("Ada"))
    store.dispatch(DeleteTask(task_id="missing"))
    store.dispatch(set_name("Ada"))

    assert [state.user_name for state in seen] == ["Ada"]


def test_unsubscribe_stops_notifications() -> None:
    store = Store()
    seen: list[AppState] = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(set_name("a"))
    unsubscribe()
    unsubscribe()
    store.dispatch(set_name("b"))

    assert len(seen) == 1
    assert store.get_state().user_name == "b"


def test_observers_see_every_intent_after_it_was_applied() -> None:
    store = Store()
    seen: list[tuple[Any, int]] = []
    store.add_observer(lambda intent: seen.append((intent.type, len(store.get_state().tasks))))

    store.dispatch(AddTask(task=Task(id="1", title="a")))
    store.dispatch(DeleteTask(task_id="missing"))

    assert seen == [(IntentType.ADD_TASK, 1), (IntentType.DELETE_TASK, 1)]


def test_reentrant_dispatch_is_linearized() -> None:
    store = Store()
    observed: list[tuple[str, str]] = []

    def listener(state: AppState) -> None:
        if state.user_name == "a":
            store.dispatch(set_name("b"))

    store.subscribe(listener)
    store.add_observer(lambda intent: observed.append((intent.name, store.get_state().user_name)))

    store.dispatch(set_name("a"))

    # The observer saw "a" before the nested dispatch was applied.
    assert observed == [("a", "a"), ("b", "b")]
    assert store.get_state().user_name == "b"


def test_listener_errors_propagate_and_store_stays_usable() -> None:
    store = Store()

    def boom(_state: AppState) -> None:
        raise RuntimeError("boom")

    unsubscribe = store.subscribe(boom)
    with pytest.raises(RuntimeError, match="boom"):
        store.dispatch(set_name("a"))
    assert store.get_state().user_name == "a"

    unsubscribe()
    store.dispatch(set_name("b"))
    assert store.get_state().user_name == "b"


def test_custom_initial_state() -> None:
    initial = AppState(user_name="Ada", tasks=(Task(id="1", title="a"),))

    store = Store(initial)

    assert store.get_state() is initial


def test_listener_error_does_not_starve_observers_or_queued_intents() -> None:
    store = Store()
    observed: list[str] = []
    later: list[str] = []

    def boom(state: AppState) -> None:
        if state.user_name == "a":
            store.dispatch(set_name("b"))
            raise RuntimeError("boom")

    store.subscribe(boom)
    store.subscribe(lambda state: later.append(state.user_name))
    store.add_observer(lambda intent: observed.append(intent.name))

    with pytest.raises(RuntimeError, match="boom"):
        store.dispatch(set_name("a"))

    assert later == ["a", "b"]
    assert observed == ["a", "b"]
    assert store.get_state().user_name == "b"


def test_only_the_first_callback_error_is_raised(caplog: pytest.LogCaptureFixture) -> None:
    store = Store()

    def first(_state: AppState) -> None:
        raise RuntimeError("first")

    def second(_intent: Any) -> None:
        raise ValueError("second")

    store.subscribe(first)
    store.add_observer(second)

    with caplog.at_level("ERROR", logger="tasksync.state.store"):
        with pytest.raises(RuntimeError, match="first"):
            store.dispatch(set_name("a"))

    assert "Additional callback error" in caplog.text
    assert store.get_state().user_name == "a"
