#!/usr/bin/env python3
"""Drive the task store from the command line.

Fetches the remote task list, applies one operation through the store and
its effect workers, and prints the resulting state.  Handy for checking a
task service by hand.

Usage
-----
::

    export TASKSYNC_BASE_URL="https://example.mockapi.io"
    python scripts/task_console.py list
    python scripts/task_console.py add "buy milk"
    python scripts/task_console.py edit 42 "buy oat milk"
    python scripts/task_console.py delete 42

Options::

    --name NAME          Greet NAME (stored locally, never sent)
    --json               Output final state as JSON
    --watch              Print every state change as it happens
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from tasksync import (  # noqa: E402
    AppState,
    TaskSyncApp,
    TaskSyncConfig,
    TaskSyncError,
    create_task,
    delete_task,
    edit_task,
    fetch_tasks,
    set_name,
)


def _print_state(state: AppState) -> None:
    if state.user_name:
        print(f"Hi {state.user_name}")
    if not state.tasks:
        print("  (no tasks)")
    for task in state.tasks:
        print(f"  [{task.id}] {task.title}")
    if state.last_error is not None:
        error = state.last_error
        print(f"  ! {error.kind} failed: {error.detail}", file=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the remote task list through tasksync.")
    parser.add_argument("--name", help="User name to greet")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output final state as JSON")
    parser.add_argument("--watch", action="store_true", help="Print every state change")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="Fetch and show all tasks")
    add = commands.add_parser("add", help="Create a task")
    add.add_argument("title")
    edit = commands.add_parser("edit", help="Change a task's title")
    edit.add_argument("task_id")
    edit.add_argument("title")
    delete = commands.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id")
    return parser


async def main() -> int:
    args = _build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = TaskSyncConfig.from_env()
    except TaskSyncError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    async with TaskSyncApp(config) as app:
        if args.watch:
            app.subscribe(lambda state: print(f"-- state: {len(state.tasks)} task(s)"))
        if args.name:
            app.dispatch(set_name(args.name))

        app.dispatch(fetch_tasks())
        await app.join()

        if args.command == "add":
            app.dispatch(create_task(args.title))
        elif args.command == "edit":
            app.dispatch(edit_task(args.task_id, args.title))
        elif args.command == "delete":
            app.dispatch(delete_task(args.task_id))
        await app.join()

        state = app.get_state()

    if args.json_mode:
        print(json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        _print_state(state)
    return 1 if state.last_error is not None else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
