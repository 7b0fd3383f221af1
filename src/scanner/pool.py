"""고정 크기 스레드 풀./Fixed-size worker thread pool.

Workers drain a FIFO queue guarded by a single condition variable. A unit is
popped by exactly one worker under the lock and executed outside it. Errors
raised by a unit are handed to ``on_failure`` and never end the worker.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Optional, Type

from .exceptions import PoolClosedError

logger = logging.getLogger(__name__)

Task = Callable[[], None]
FailureHandler = Callable[[str, Exception], None]

__all__ = ["TaskPool", "Task", "FailureHandler"]


@dataclass(slots=True)
class _QueuedTask:
    label: str
    fn: Task


class TaskPool:
    """FIFO 큐를 소비하는 워커 집합./Worker set draining a FIFO queue."""

    def __init__(
        self,
        workers: int,
        *,
        on_failure: FailureHandler | None = None,
        name: str = "scan-worker",
    ) -> None:
        if workers < 1:
            raise ValueError(f"worker count must be at least 1: {workers}")
        self._on_failure = on_failure
        self._worker_count = workers
        self._queue: deque[_QueuedTask] = deque()
        self._condition = threading.Condition()
        self._closed = False
        self._active = 0
        self._completed = 0
        self._threads = [
            threading.Thread(target=self._worker_loop, name=f"{name}-{index}", daemon=True)
            for index in range(workers)
        ]
        for thread in self._threads:
            thread.start()
        logger.debug("started pool with %d workers", workers)

    @property
    def worker_count(self) -> int:
        """워커 수./Number of worker threads."""

        return self._worker_count

    @property
    def pending(self) -> int:
        """대기 중인 작업 수./Number of queued units."""

        with self._condition:
            return len(self._queue)

    @property
    def completed(self) -> int:
        """실행을 마친 작업 수./Number of units that ran to completion."""

        with self._condition:
            return self._completed

    @property
    def closed(self) -> bool:
        """종료 요청 여부./True once shutdown has begun."""

        with self._condition:
            return self._closed

    def submit(self, fn: Task, *, label: str = "") -> None:
        """작업을 큐에 추가합니다./Enqueue a unit of work."""

        with self._condition:
            if self._closed:
                raise PoolClosedError(f"pool is shut down; rejected {label or fn!r}")
            self._queue.append(_QueuedTask(label=label, fn=fn))
            self._condition.notify()

    def join(self, timeout: float | None = None) -> bool:
        """큐가 빌 때까지 기다립니다./Wait until no unit is queued or running."""

        with self._condition:
            return self._condition.wait_for(
                lambda: not self._queue and self._active == 0, timeout=timeout
            )

    def shutdown(self, *, cancel_pending: bool = False) -> list[str]:
        """입력을 닫고 워커를 합류시킵니다./Stop intake, drain and join workers.

        With ``cancel_pending`` the queued units are discarded instead of run
        and their labels are returned. Units already running always finish.
        """

        discarded: list[str] = []
        with self._condition:
            if self._closed and not self._threads:
                return discarded
            self._closed = True
            if cancel_pending:
                discarded = [task.label for task in self._queue]
                self._queue.clear()
            self._condition.notify_all()
            threads, self._threads = self._threads, []
        for thread in threads:
            thread.join()
        if discarded:
            logger.info("discarded %d queued units", len(discarded))
        logger.debug("pool shut down after %d units", self._completed)
        return discarded

    def _worker_loop(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._queue or self._closed)
                if not self._queue:
                    return
                task = self._queue.popleft()
                self._active += 1
            try:
                task.fn()
            except Exception as exc:  # noqa: BLE001 - routed to failure hook
                self._report_failure(task.label, exc)
            finally:
                with self._condition:
                    self._active -= 1
                    self._completed += 1
                    self._condition.notify_all()

    def _report_failure(self, label: str, exc: Exception) -> None:
        logger.error("unit %s failed: %s", label or "<anonymous>", exc, exc_info=exc)
        if self._on_failure is None:
            return
        try:
            self._on_failure(label, exc)
        except Exception:  # noqa: BLE001 - worker must survive a broken hook
            logger.exception("failure handler raised for %s", label or "<anonymous>")

    def __enter__(self) -> "TaskPool":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.shutdown(cancel_pending=exc_type is not None)
