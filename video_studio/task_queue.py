"""
Bounded sequential task queue with a fixed pause between tasks.

Tasks run one at a time in insertion order. A failing task stops the queue
and its exception propagates; results of earlier tasks are dropped.
"""

from __future__ import annotations

import time
from typing import Any, Callable, List, Optional, Tuple

from .utils import get_logger

logger = get_logger("task_queue")


class QueueFullError(Exception):
    """Raised when adding beyond the queue's bound."""


class SequentialTaskQueue:
    def __init__(
        self,
        delay_seconds: float = 1.0,
        maxsize: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay_seconds = delay_seconds
        self.maxsize = maxsize
        self._sleep = sleep
        self._tasks: List[Tuple[str, Callable[[], Any]]] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def add(self, label: str, fn: Callable[[], Any]) -> None:
        if self.maxsize is not None and len(self._tasks) >= self.maxsize:
            raise QueueFullError(f"Queue is full ({self.maxsize} tasks)")
        self._tasks.append((label, fn))

    def run(self, on_start: Optional[Callable[[int, int, str], None]] = None) -> List[Any]:
        """
        Run every task in order and return their results.

        ``on_start(index, total, label)`` is called before each task with a
        1-based index. The pause follows every successful task, the last one
        included. The queue is emptied up front, so a failed run is never
        replayed by a later call.
        """
        tasks, self._tasks = self._tasks, []
        total = len(tasks)
        results = []
        for index, (label, fn) in enumerate(tasks, start=1):
            if on_start is not None:
                on_start(index, total, label)
            results.append(fn())
            if self.delay_seconds:
                self._sleep(self.delay_seconds)
        logger.info(f"Ran {total} task(s) sequentially")
        return results
