# src/taskpulse/cli/commands.py

from __future__ import annotations

import inspect
import logging
import uuid
from collections.abc import Callable
from typing import cast

from ..core.identity import display_id
from ..core.lifecycle import LifecyclePhase
from ..core.state import AppState
from ..tasks.roster import KNOWN_PLACES, Coordinate, ranked
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _format_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks."
    return "\n".join(f"{i}. {t.description}  ({display_id(t)})" for i, t in enumerate(tasks, start=1))


def _resolve_task_id(state: AppState, raw: str) -> uuid.UUID | None:
    """Map a 1-based position in /list to a task id."""
    try:
        pos = int(raw)
    except ValueError:
        return None
    tasks = state.store.tasks
    if 1 <= pos <= len(tasks):
        return tasks[pos - 1].id
    return None


def _parse_priority(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    return (
        "Status:\n"
        f"  Phase: {state.lifecycle.phase.value}\n"
        f"  Tasks: {len(store.tasks)} ({len(store.completed_tasks())} done)\n"
        f"  Loading: {'yes' if store.is_loading else 'no'}\n"
        f"  Stopwatch: {state.stopwatch.formatted_time} ({'running' if state.stopwatch.is_running else 'paused'})"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return _format_tasks(state.store.tasks)


def cmd_sorted(state: AppState, args: list[str]) -> str:
    return _format_tasks(state.store.tasks_sorted_by_priority())


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <priority> <title...>
    """
    if len(args) < 2:
        return "Usage: /add <priority> <title>"
    priority = _parse_priority(args[0])
    if priority is None:
        return f"Priority must be a number, got {args[0]!r}."
    task = state.store.add_task(" ".join(args[1:]), priority)
    if task is None:
        return "Nothing added (empty title)."
    return f"Added: {task.description}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <n>"
    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task at position {args[0]}."
    state.store.toggle_task(task_id)
    task = state.store.find_task(task_id)
    return f"Updated: {task.description}" if task else "Updated."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n> <priority> [title...]
    """
    if len(args) < 2:
        return "Usage: /edit <n> <priority> [title]"
    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task at position {args[0]}."
    priority = _parse_priority(args[1])
    if priority is None:
        return f"Priority must be a number, got {args[1]!r}."
    title = " ".join(args[2:]) or None
    state.store.edit_task(task_id, title=title, priority=priority)
    task = state.store.find_task(task_id)
    return f"Edited: {task.description}" if task else "Edited."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <n> [n ...]"
    positions: list[int] = []
    for raw in args:
        try:
            positions.append(int(raw) - 1)
        except ValueError:
            return f"Not a position: {raw!r}."
    before = len(state.store.tasks)
    state.store.delete_tasks_at(positions)
    return f"Deleted {before - len(state.store.tasks)} task(s)."


def cmd_fetch(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not state.store.fetch_remote_data():
        return "A fetch is already in progress."
    if emit:
        delay = getattr(state.settings, "fetch_delay_seconds", None)
        if delay is not None:
            emit(f"[FETCH] Result expected in about {delay:g}s; it will be printed here.")
    return "Fetching remote data..."


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if not state.store.is_loading:
        return "Nothing to cancel."
    state.store.cancel_fetch()
    return "Fetch cancelled."


def cmd_data(state: AppState, args: list[str]) -> str:
    store = state.store
    if store.is_loading:
        return "Loading..."
    if store.error_message:
        return f"Error: {store.error_message}"
    if not store.received_data:
        return "No data yet. Use /fetch."
    return "\n".join(f"- {item}" for item in store.received_data)


def cmd_clear(state: AppState, args: list[str]) -> str:
    state.store.clear_data()
    return "Received data cleared."


def cmd_phase(state: AppState, args: list[str]) -> str:
    """
    /phase                      -> show current phase
    /phase active|inactive|background
    """
    if not args:
        return f"Phase is {state.lifecycle.phase.value}."
    try:
        phase = LifecyclePhase.parse(args[0])
    except ValueError:
        return "Usage: /phase active|inactive|background"
    if not state.lifecycle.transition(phase):
        return f"Already {phase.value}."
    return f"Phase -> {phase.value}."


def cmd_timer(state: AppState, args: list[str]) -> str:
    """
    /timer [show|start|pause|reset]
    """
    sw = state.stopwatch
    sub = args[0].lower() if args else "show"
    if sub == "start":
        sw.start()
    elif sub == "pause":
        sw.pause()
    elif sub == "reset":
        sw.reset()
    elif sub != "show":
        return "Usage: /timer start|pause|reset|show"
    return f"Stopwatch: {sw.formatted_time} ({'running' if sw.is_running else 'paused'})"


def cmd_save(state: AppState, args: list[str]) -> str:
    ok = state.store.save()
    return "Tasks saved." if ok else "Save failed (see log)."


def cmd_students(state: AppState, args: list[str]) -> str:
    students = ranked()
    lines = [f"{i}. {s}" for i, s in enumerate(students, start=1)]
    return "Students (best grade first):\n" + "\n".join(lines)


def cmd_locate(state: AppState, args: list[str]) -> str:
    """
    /locate <latitude> <longitude>  -> is this one of the known places?
    """
    if len(args) != 2:
        return "Usage: /locate <latitude> <longitude>"
    try:
        point = Coordinate(float(args[0]), float(args[1]))
    except ValueError:
        return "Usage: /locate <latitude> <longitude>"
    if point in KNOWN_PLACES:
        return f"{point} is a known place."
    return f"{point} is not a known place."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show phase, task counts, fetch and stopwatch state.")
registry.register("list", cmd_list, help_text="List tasks in insertion order.", aliases=["ls"])
registry.register("sorted", cmd_sorted, help_text="List tasks by priority (1 = high first).")
registry.register("add", cmd_add, help_text="Add a task: /add <priority> <title>.")
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <n>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> <priority> [title].")
registry.register("delete", cmd_delete, help_text="Delete tasks: /delete <n> [n ...].", aliases=["rm"])
registry.register("fetch", cmd_fetch, help_text="Fetch remote data (simulated).")
registry.register("cancel", cmd_cancel, help_text="Cancel the running fetch.")
registry.register("data", cmd_data, help_text="Show the last fetched data or error.")
registry.register("clear", cmd_clear, help_text="Clear fetched data.")
registry.register("phase", cmd_phase, help_text="Simulate lifecycle: /phase active|inactive|background.")
registry.register("timer", cmd_timer, help_text="Stopwatch: /timer start|pause|reset|show.")
registry.register("save", cmd_save, help_text="Save tasks now.")
registry.register("students", cmd_students, help_text="Rank the sample students by grade.")
registry.register("locate", cmd_locate, help_text="Check a point: /locate <latitude> <longitude>.")
