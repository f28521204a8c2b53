from __future__ import annotations

import random
from types import SimpleNamespace

from tasksync.models import Task
from tasksync.state.app_state import AppState
from tasksync.state.intents import (
    AddTask,
    AddTaskSucceeded,
    DeleteTask,
    DeleteTaskSucceeded,
    DismissError,
    EditTask,
    EditTaskSucceeded,
    IntentType,
    OperationError,
    OperationFailed,
    OperationKind,
    SetName,
    SetTasks,
    create_task,
    edit_task,
    fetch_tasks,
)
from tasksync.state.reducer import _HANDLERS, reduce


def _state(*pairs: tuple[str, str]) -> AppState:
    return AppState(tasks=tuple(Task(id=task_id, title=title) for task_id, title in pairs))


def _pairs(state: AppState) -> list[tuple[str, str]]:
    return [(task.id, task.title) for task in state.tasks]


def test_every_intent_kind_has_a_handler() -> None:
    assert set(_HANDLERS) == set(IntentType)


def test_set_name_replaces_user_name() -> None:
    state = reduce(AppState(), SetName(name="Ada"))

    assert state.user_name == "Ada"
    assert state.tasks == ()


def test_fetch_result_replaces_tasks_wholesale() -> None:
    state = reduce(_state(("1", "a"), ("2", "b")), SetTasks(tasks=(Task(id="3", title="c"),)))

    assert _pairs(state) == [("3", "c")]


def test_set_tasks_keeps_ids_unique() -> None:
    tasks = (Task(id="1", title="a"), Task(id="2", title="b"), Task(id="1", title="a2"))

    state = reduce(AppState(), SetTasks(tasks=tasks))

    assert _pairs(state) == [("1", "a2"), ("2", "b")]


def test_add_task_appends() -> None:
    state = reduce(_state(("1", "a")), AddTask(task=Task(id="2", title="b")))

    assert _pairs(state) == [("1", "a"), ("2", "b")]


def test_add_task_with_known_id_replaces_in_place() -> None:
    state = reduce(_state(("1", "a"), ("2", "b")), AddTask(task=Task(id="1", title="a2")))

    assert _pairs(state) == [("1", "a2"), ("2", "b")]


def test_add_task_succeeded_appends_server_task() -> None:
    state = reduce(AppState(), AddTaskSucceeded(task=Task.model_validate({"id": 42, "title": "buy milk"})))

    assert _pairs(state) == [("42", "buy milk")]


def test_delete_removes_matching_task() -> None:
    state = reduce(_state(("1", "a"), ("2", "b")), DeleteTask(task_id="1"))

    assert _pairs(state) == [("2", "b")]


def test_delete_of_unknown_id_is_a_no_op() -> None:
    before = _state(("1", "a"), ("2", "b"))

    after = reduce(before, DeleteTask(task_id="99"))

    assert after is before


def test_delete_confirmation_is_idempotent() -> None:
    state = reduce(_state(("1", "a")), DeleteTask(task_id="1"))

    confirmed = reduce(state, DeleteTaskSucceeded(task_id="1"))

    assert confirmed is state
    assert confirmed.tasks == ()


def test_edit_is_targeted() -> None:
    state = reduce(_state(("1", "a"), ("2", "b")), EditTask(task_id="2", title="b2"))

    assert _pairs(state) == [("1", "a"), ("2", "b2")]


def test_edit_of_unknown_id_is_a_no_op() -> None:
    before = _state(("1", "a"))

    assert reduce(before, EditTask(task_id="5", title="x")) is before


def test_edit_succeeded_applies_server_title() -> None:
    state = reduce(_state(("1", "a"), ("2", "b")), EditTaskSucceeded(task=Task(id="1", title="a2")))

    assert _pairs(state) == [("1", "a2"), ("2", "b")]


def test_trigger_intents_do_not_touch_state() -> None:
    before = _state(("1", "a"))

    for intent in (fetch_tasks(), create_task("new"), edit_task("1", "changed")):
        assert reduce(before, intent) is before


def test_unknown_intents_are_ignored() -> None:
    before = _state(("1", "a"))

    assert reduce(before, object()) is before
    assert reduce(before, {"type": "set_name", "name": "x"}) is before


def test_lookalike_intents_without_their_fields_are_ignored() -> None:
    before = _state(("1", "a"))

    assert reduce(before, SimpleNamespace(type="set_name")) is before
    assert reduce(before, SimpleNamespace(type="delete_task")) is before
    assert reduce(before, SimpleNamespace(type="edit_task", task_id="1")) is before


def test_operation_failed_sets_and_dismiss_clears_last_error() -> None:
    error = OperationError(kind=OperationKind.EDIT, detail="HTTP 500", task_id="1", status_code=500)
    before = _state(("1", "a"))

    failed = reduce(before, OperationFailed(error=error))
    assert failed.last_error == error
    assert failed.tasks == before.tasks

    cleared = reduce(failed, DismissError())
    assert cleared.last_error is None
    assert reduce(cleared, DismissError()) is cleared


def test_ids_stay_unique_for_arbitrary_intent_sequences() -> None:
    rng = random.Random(20240701)
    ids = [str(n) for n in range(1, 6)]
    state = AppState()

    for _ in range(500):
        roll = rng.random()
        task = Task(id=rng.choice(ids), title=f"t{rng.randint(0, 9)}")
        if roll < 0.3:
            intent: object = AddTask(task=task)
        elif roll < 0.45:
            intent = AddTaskSucceeded(task=task)
        elif roll < 0.6:
            intent = SetTasks(tasks=tuple(Task(id=rng.choice(ids), title="f") for _ in range(rng.randint(0, 6))))
        elif roll < 0.8:
            intent = DeleteTask(task_id=task.id)
        else:
            intent = EditTask(task_id=task.id, title=task.title)

        state = reduce(state, intent)
        task_ids = state.task_ids
        assert len(task_ids) == len(set(task_ids))
