from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from todo_app.domain.entities import TodoEntity, utcnow
from todo_app.domain.enums import CompletionFilter, Priority, SortKey
from todo_app.domain.errors import TodoAppError, ValidationError
from todo_app.domain.filters import TodoFilters
from todo_app.domain.status import deadline_label, is_due_soon, is_overdue
from todo_app.infra.db import init_db
from todo_app.infra.logging import setup_logging
from todo_app.infra.repository import TodoRepository
from todo_app.services.board import Notice, TodoBoard
from todo_app.services.todo_service import TodoService

logger = logging.getLogger(__name__)

PRIORITY_CHOICES = [p.value for p in Priority]
FILTER_PRIORITY_CHOICES = ["all", *PRIORITY_CHOICES]


def build_board() -> TodoBoard:
    board = TodoBoard(TodoService(TodoRepository()))
    board.refresh()
    return board


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="todo-app", description="Track personal todos with deadlines and priorities.")
    sub = ap.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="Show todos")
    ls.add_argument("--sort", choices=[k.value for k in SortKey], default=SortKey.CREATED.value)
    ls.add_argument("--status", choices=[c.value for c in CompletionFilter], default=CompletionFilter.ALL.value)
    ls.add_argument("--priority", choices=FILTER_PRIORITY_CHOICES, default="all")

    add = sub.add_parser("add", help="Add a todo")
    add.add_argument("title")
    add.add_argument("--deadline", required=True, help="Due date YYYY-MM-DD")
    add.add_argument("--priority", choices=PRIORITY_CHOICES, default=Priority.MEDIUM.value)

    edit = sub.add_parser("edit", help="Edit a todo; omitted options keep their values")
    edit.add_argument("id")
    edit.add_argument("--title", default=None)
    edit.add_argument("--deadline", default=None, help="Due date YYYY-MM-DD")
    edit.add_argument("--priority", choices=PRIORITY_CHOICES, default=None)

    toggle = sub.add_parser("toggle", help="Mark a todo done or pending")
    toggle.add_argument("id")

    delete = sub.add_parser("delete", help="Delete a todo")
    delete.add_argument("id")

    export = sub.add_parser("export", help="Write a JSON backup")
    export.add_argument("--dir", default=None, help="Target directory (default: EXPORT_DIR)")

    imp = sub.add_parser("import", help="Replace all todos with a JSON backup")
    imp.add_argument("path")
    return ap


def format_todo(todo: TodoEntity, now: datetime) -> str:
    mark = "[x]" if todo.completed else "[ ]"
    line = f"{mark} {todo.id}  {todo.priority.value:<6}  {deadline_label(todo, now):<18}  {todo.title}"
    if is_overdue(todo, now):
        line += "  OVERDUE"
    elif is_due_soon(todo, now):
        line += "  DUE SOON"
    return line


def _print_notice(notice: Notice) -> None:
    stream = sys.stderr if notice.level != "info" else sys.stdout
    print(f"{notice.title}: {notice.message}", file=stream)


def _list(board: TodoBoard, args: argparse.Namespace) -> None:
    board.sort_by = SortKey(args.sort)
    board.filters = TodoFilters.from_values(args.status, args.priority)
    view = board.list_view()
    now = utcnow()
    if not view.items:
        print("No tasks yet." if not board.todos else "No tasks match the current filters.")
    for todo in view.items:
        print(format_todo(todo, now))
    stats = board.stats(now)
    print(f"Showing {view.shown} / {view.total}")
    print(
        f"Total: {stats.total} | Completed: {stats.completed} | "
        f"Pending: {stats.pending} | Overdue: {stats.overdue}"
    )


def _edit(board: TodoBoard, args: argparse.Namespace) -> Notice:
    todo = board.start_edit(args.id)
    if todo is None:
        return Notice("Task not found", f"No task with id {args.id}", level="warning")
    return board.submit(
        args.title if args.title is not None else todo.title,
        args.deadline if args.deadline is not None else todo.deadline.date(),
        args.priority or todo.priority,
    )


def run(board: TodoBoard, args: argparse.Namespace) -> int:
    try:
        if args.command == "list":
            _list(board, args)
            return 0
        if args.command == "add":
            notice = board.submit(args.title, args.deadline, args.priority)
        elif args.command == "edit":
            notice = _edit(board, args)
        elif args.command == "toggle":
            notice = board.toggle(args.id)
        elif args.command == "delete":
            notice = board.delete(args.id)
        elif args.command == "export":
            path = board.export_to(args.dir)
            notice = Notice("Export finished", f"Saved {len(board.todos)} tasks to {path}")
        else:
            notice = board.import_from(args.path)
    except ValidationError as exc:
        for field, message in exc.errors.items():
            print(f"{field}: {message}", file=sys.stderr)
        return 1
    except (TodoAppError, OSError) as exc:
        logger.warning("%s failed: %s", args.command, exc)
        print(f"{args.command} failed: {exc}", file=sys.stderr)
        return 1

    _print_notice(notice)
    return 0 if notice.level == "info" else 1


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging()
    try:
        init_db()
    except SQLAlchemyError as exc:
        raise SystemExit(f"DB error: {exc}")

    sys.exit(run(build_board(), args))


if __name__ == "__main__":
    main()
