"""A thread pool that runs bulk task groups with dependencies between them."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Set, Tuple

TaskID = int


class Runnable(ABC):
    """Work split into ``num_total_tasks`` independent tasks."""

    @abstractmethod
    def run_task(self, task_id: int, num_total_tasks: int) -> None:
        """Run task number ``task_id``."""


class _FunctionRunnable(Runnable):
    def __init__(self, func: Callable[[], None]) -> None:
        self._func = func

    def run_task(self, task_id: int, num_total_tasks: int) -> None:
        self._func()


@dataclass
class TaskGroup:
    """One submitted bulk launch and the groups it still waits for."""

    group_id: int
    runnable: Runnable
    total_num_tasks: int
    remaining: int
    depending: Set[TaskID] = field(default_factory=set)


class TaskSystem:
    """Runs task groups on a fixed set of worker threads."""

    def __init__(self, num_threads: int) -> None:
        if num_threads < 1:
            raise ValueError("num_threads must be at least 1")
        self._cond = threading.Condition()
        self._queue: Deque[Tuple[TaskGroup, int]] = deque()
        self._groups: Dict[TaskID, TaskGroup] = {}
        self._waiting: List[TaskGroup] = []
        self._next_id = 0
        self._closed = False
        self._error: Optional[BaseException] = None
        self._threads = [
            threading.Thread(target=self._worker, daemon=True) for _ in range(num_threads)
        ]
        for thread in self._threads:
            thread.start()

    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        """Run all tasks of ``runnable`` and wait for them."""
        self.run_async_with_deps(runnable, num_total_tasks, [])
        self.sync()

    def run_async_with_deps(
        self, runnable: Runnable, num_total_tasks: int, deps: Iterable[TaskID] = ()
    ) -> TaskID:
        """Submit a group that starts once every group in ``deps`` has finished."""
        if num_total_tasks < 0:
            raise ValueError("num_total_tasks must not be negative")
        with self._cond:
            if self._closed:
                raise RuntimeError("task system is closed")
            dep_set = set(deps)
            unknown = [dep for dep in dep_set if not 0 <= dep < self._next_id]
            if unknown:
                raise ValueError(f"unknown task group ids: {sorted(unknown)}")
            group = TaskGroup(
                self._next_id,
                runnable,
                num_total_tasks,
                num_total_tasks,
                {dep for dep in dep_set if dep in self._groups},
            )
            self._next_id += 1
            self._groups[group.group_id] = group
            if group.depending:
                self._waiting.append(group)
            else:
                self._launch(group)
            return group.group_id

    def sync(self) -> None:
        """Wait until every submitted group has finished.

        Re-raises the first exception raised by a task since the last sync.
        """
        with self._cond:
            self._cond.wait_for(lambda: not self._groups)
            error, self._error = self._error, None
        if error is not None:
            raise error

    def submit(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> "Future[Any]":
        """Run ``func(*args, **kwargs)`` as a one-task group and return its future."""
        future: "Future[Any]" = Future()

        def call() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(func(*args, **kwargs))
            except BaseException as exc:
                future.set_exception(exc)

        self.run_async_with_deps(_FunctionRunnable(call), 1, [])
        self.sync()
        return future

    def close(self) -> None:
        """Stop the workers once the queued tasks are done."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> "TaskSystem":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # The helpers below are called with the lock held.

    def _launch(self, group: TaskGroup) -> None:
        if group.total_num_tasks == 0:
            self._finish(group)
            return
        self._queue.extend((group, task_id) for task_id in range(group.total_num_tasks))
        self._cond.notify_all()

    def _finish(self, group: TaskGroup) -> None:
        del self._groups[group.group_id]
        ready = []
        for waiting in self._waiting:
            waiting.depending.discard(group.group_id)
            if not waiting.depending:
                ready.append(waiting)
        self._waiting = [g for g in self._waiting if g.depending]
        for waiting in ready:
            self._launch(waiting)
        self._cond.notify_all()

    def _worker(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._queue or self._closed)
                if not self._queue:
                    return
                group, task_id = self._queue.popleft()
            try:
                group.runnable.run_task(task_id, group.total_num_tasks)
            except BaseException as exc:
                with self._cond:
                    if self._error is None:
                        self._error = exc
            with self._cond:
                group.remaining -= 1
                if group.remaining == 0:
                    self._finish(group)