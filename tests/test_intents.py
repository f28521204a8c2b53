from __future__ import annotations

import pytest
from pydantic import ValidationError

from tasksync.models import Task
from tasksync.state.intents import (
    AddTaskSucceeded,
    CreateTaskRequested,
    DeleteTask,
    EditTaskRequested,
    FetchTasksRequested,
    IntentType,
    OperationFailed,
    OperationKind,
    SetTasks,
    create_task,
    delete_task,
    edit_task,
    fetch_tasks,
    parse_intent,
    set_tasks,
)


def test_parse_intent_selects_variant_by_type() -> None:
    intent = parse_intent({"type": "add_task_succeeded", "task": {"id": 42, "title": "buy milk"}})

    assert isinstance(intent, AddTaskSucceeded)
    assert intent.type == IntentType.ADD_TASK_SUCCEEDED
    assert intent.task == Task(id="42", title="buy milk")


def test_parse_intent_operation_failed() -> None:
    intent = parse_intent(
        {"type": "operation_failed", "error": {"kind": "delete", "detail": "HTTP 500", "task_id": "3"}},
    )

    assert isinstance(intent, OperationFailed)
    assert intent.error.kind is OperationKind.DELETE
    assert intent.error.task_id == "3"


def test_parse_intent_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        parse_intent({"type": "rename_everything"})


def test_parse_intent_rejects_unexpected_fields() -> None:
    with pytest.raises(ValidationError):
        parse_intent({"type": "fetch_tasks_requested", "page": 2})


def test_action_creators() -> None:
    assert fetch_tasks() == FetchTasksRequested()
    assert create_task("buy milk") == CreateTaskRequested(title="buy milk")
    assert edit_task("1", "b2") == EditTaskRequested(task_id="1", title="b2")
    assert delete_task("9") == DeleteTask(task_id="9")

    intent = set_tasks([Task(id="1", title="a")])
    assert isinstance(intent, SetTasks)
    assert intent.tasks == (Task(id="1", title="a"),)


def test_intents_are_frozen() -> None:
    intent = delete_task("1")

    with pytest.raises(ValidationError):
        intent.task_id = "2"  # type: ignore[misc]


def test_intents_carry_server_ids_only() -> None:
    with pytest.raises(ValidationError):
        DeleteTask(task_id="")
