# src/taskpulse/tasks/task_store.py

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..core.lifecycle import LifecyclePhase
from ..core.ports import ByteStore
from ..errors import FetchError, PersistenceError
from .data_fetcher import DataFetcher
from .task_models import Task, default_tasks

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "savedTasks"

StoreListener = Callable[["TaskStore"], None]


class TaskStore:
    """
    Owner of the task list and observer of a DataFetcher.

    Published state (read by listeners after every change):
    - tasks: the task collection, in insertion order
    - received_data: items from the last successful fetch
    - error_message: text of the last fetch failure (None when cleared)
    - is_loading: True between fetch_remote_data() and its outcome

    Persistence:
    - the whole list is stored as one JSON array under a fixed byte-store key
    - save() never writes a partial value; on failure the previous value stays
    - load() falls back to default_tasks() when nothing readable is stored

    Threading:
    - not thread-safe; every call is expected on the update loop thread
    """

    def __init__(
        self,
        byte_store: ByteStore,
        *,
        fetcher: DataFetcher | None = None,
        tasks_key: str = DEFAULT_TASKS_KEY,
        save_on_inactive: bool = True,
        load_on_init: bool = True,
    ) -> None:
        self._byte_store = byte_store
        self._tasks_key = tasks_key
        self._save_on_inactive = save_on_inactive
        self._listeners: list[StoreListener] = []

        self.tasks: list[Task] = []
        self.received_data: list[str] = []
        self.error_message: str | None = None
        self.is_loading: bool = False

        self.fetcher = fetcher if fetcher is not None else DataFetcher()
        self.fetcher.register_observer(self)

        if load_on_init:
            self.load()
        logger.info("TaskStore ready key=%s tasks=%d", self._tasks_key, len(self.tasks))

    # ---- listeners ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("TaskStore listener %r failed", listener)

    # ---- FetchObserver ----

    def did_receive_data(self, fetcher: Any, items: Sequence[str]) -> None:
        self.received_data = list(items)
        self.is_loading = False
        self.error_message = None
        logger.info("TaskStore received %d items", len(self.received_data))
        self._notify_changed()

    def did_fail_with_error(self, fetcher: Any, error: FetchError) -> None:
        self.is_loading = False
        self.error_message = str(error)
        logger.info("TaskStore fetch failed: %s", self.error_message)
        self._notify_changed()

    # ---- remote data ----

    def fetch_remote_data(self) -> bool:
        """
        Kick off a fetch. Returns False when one was already in flight.

        Loading state is published only after the fetcher accepted the
        request; if fetch() raises (no running loop), state is untouched.
        """
        if not self.fetcher.fetch():
            return False
        self.is_loading = True
        self.error_message = None
        self._notify_changed()
        return True

    def cancel_fetch(self) -> None:
        if not self.fetcher.is_fetching and not self.is_loading:
            return
        self.fetcher.cancel()
        self.is_loading = False
        self._notify_changed()

    def clear_data(self) -> None:
        self.received_data = []
        self.error_message = None
        self._notify_changed()

    # ---- task mutation ----

    def add_task(self, title: str, priority: int) -> Task | None:
        if not title or not title.strip():
            logger.debug("add_task ignored: empty title")
            return None

        task = Task(title=title, priority=int(priority))
        self.tasks.append(task)
        logger.info("Task added id=%s title=%r priority=%s", task.id, task.title, task.priority)
        self._notify_changed()
        return task

    def find_task(self, task_id: uuid.UUID) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def toggle_task(self, task_id: uuid.UUID) -> None:
        task = self.find_task(task_id)
        if task is None:
            logger.debug("toggle_task ignored: unknown id=%s", task_id)
            return
        task.completed = not task.completed
        logger.info("Task updated id=%s completed=%s", task.id, task.completed)
        self._notify_changed()

    def edit_task(
        self,
        task_id: uuid.UUID,
        *,
        title: str | None = None,
        priority: int | None = None,
    ) -> None:
        task = self.find_task(task_id)
        if task is None:
            logger.debug("edit_task ignored: unknown id=%s", task_id)
            return

        changed = False
        if title is not None and title.strip():
            task.title = title
            changed = True
        if priority is not None:
            task.priority = int(priority)
            changed = True

        if changed:
            logger.info("Task edited id=%s title=%r priority=%s", task.id, task.title, task.priority)
            self._notify_changed()

    def delete_task(self, task_id: uuid.UUID) -> None:
        self.delete_tasks([task_id])

    def delete_tasks(self, task_ids: Iterable[uuid.UUID]) -> None:
        ids = set(task_ids)
        if not ids:
            return
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.id not in ids]
        removed = before - len(self.tasks)
        if removed:
            logger.info("Tasks deleted: %d", removed)
            self._notify_changed()

    def delete_tasks_at(self, indexes: Iterable[int]) -> None:
        """Delete by position in self.tasks; out-of-range positions are ignored."""
        ids = [self.tasks[i].id for i in set(indexes) if 0 <= i < len(self.tasks)]
        self.delete_tasks(ids)

    # ---- queries ----

    def tasks_sorted_by_priority(self) -> list[Task]:
        return sorted(self.tasks)

    def incomplete_tasks(self) -> list[Task]:
        return [t for t in self.tasks if not t.completed]

    def completed_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.completed]

    def contains_task_with_title(self, title: str) -> bool:
        return any(t.title == title for t in self.tasks)

    # ---- persistence ----

    def _encode(self) -> bytes:
        payload = [t.to_dict() for t in self.tasks]
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")

    @staticmethod
    def _decode(data: bytes) -> list[Task]:
        raw = json.loads(data.decode("utf-8"))
        if not isinstance(raw, list):
            raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
        return [Task.from_dict(item) for item in raw]

    def save(self) -> bool:
        """Write the full task list. Returns False (and logs) on failure."""
        try:
            data = self._encode()
        except (TypeError, ValueError):
            logger.exception("Failed to encode tasks; keeping previously saved data.")
            return False

        try:
            self._byte_store.set(self._tasks_key, data)
        except PersistenceError:
            logger.exception("Failed to write tasks; keeping previously saved data.")
            return False

        logger.info("Tasks saved (%d tasks)", len(self.tasks))
        return True

    def load(self) -> None:
        """Replace self.tasks with the stored list, or with the defaults."""
        try:
            data = self._byte_store.get(self._tasks_key)
        except PersistenceError:
            logger.exception("Failed to read tasks; loading defaults.")
            data = None
        else:
            if data is None:
                logger.info("No saved tasks, loading defaults.")

        if data is None:
            self.tasks = default_tasks()
            self._notify_changed()
            return

        try:
            self.tasks = self._decode(data)
            logger.info("Tasks loaded (%d tasks)", len(self.tasks))
        except (KeyError, TypeError, ValueError):
            logger.exception("Saved tasks are unreadable; loading defaults.")
            self.tasks = default_tasks()
        self._notify_changed()

    def release_resources(self) -> None:
        """
        Close external handles held on behalf of the UI.

        Nothing here owns a socket or stream yet; the byte-store is shared
        and closed by whoever created it.
        """
        logger.info("TaskStore releasing resources.")

    # ---- lifecycle ----

    def on_lifecycle_change(self, phase: LifecyclePhase) -> None:
        match phase:
            case LifecyclePhase.ACTIVE:
                logger.debug("TaskStore: active, nothing to persist")
            case LifecyclePhase.INACTIVE:
                if self._save_on_inactive:
                    self.save()
            case LifecyclePhase.BACKGROUND:
                self.save()
                self.release_resources()
