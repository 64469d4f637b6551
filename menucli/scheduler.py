"""A simple thread-safe task scheduler driven by a loop."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable


class LoopScheduler:
    """Runs posted tasks, in order, on the thread that drives the loop."""

    def __init__(self) -> None:
        self._tasks: deque[Callable[[], object]] = deque()
        self._running = True
        self._cond = threading.Condition()

    def __enter__(self) -> LoopScheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Stop the loop and wake any thread waiting for a task."""
        with self._cond:
            self._running = False
            self._cond.notify_all()

    def run(self) -> None:
        """Execute tasks until the scheduler is stopped."""
        while not self.stopped():
            self.exec_one()

    def stopped(self) -> bool:
        with self._cond:
            return not self._running

    def post(self, task: Callable[[], object]) -> None:
        """Queue ``task``; it may be called from any thread."""
        with self._cond:
            self._tasks.append(task)
            self._cond.notify_all()

    def exec_one(self) -> None:
        """Wait for one task and run it; return at once if stopped with nothing queued."""
        with self._cond:
            self._cond.wait_for(lambda: not self._running or bool(self._tasks))
            if not self._tasks:
                return
            task = self._tasks.popleft()
        if task is not None:
            task()

    def poll_one(self) -> bool:
        """Run one ready task without waiting; return whether one was run."""
        with self._cond:
            if not self._running or not self._tasks:
                return False
            task = self._tasks.popleft()
        if task is not None:
            task()
        return True