"""Bounded worker pool for metadata probes."""

from __future__ import annotations

import concurrent.futures
import os
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastls.runtime_logging import get_runtime_logger

MAX_WORKERS = 64
WORKERS_PER_CPU = 4
QUEUE_FACTOR = 2

T = TypeVar("T")


def default_worker_count(
    *,
    workers_per_cpu: int = WORKERS_PER_CPU,
    ceiling: int | None = None,
) -> int:
    count = min(MAX_WORKERS, (os.cpu_count() or 1) * workers_per_cpu)
    if ceiling is not None:
        count = min(count, ceiling)
    return max(1, count)


@dataclass(slots=True)
class TaskOutcome(Generic[T]):
    """Result of one pool task: either a value or the exception it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PoolClosedError(RuntimeError):
    pass


class WorkerPool:
    """Fixed-size thread pool with a bounded submission queue.

    ``max_workers`` is clamped to :data:`MAX_WORKERS`. At most
    ``max_workers`` tasks run at once and at most
    ``max_workers * queue_factor`` more wait in the queue; ``submit`` blocks
    while the pool is full. Every accepted task runs exactly once. A task that
    raises yields a failed :class:`TaskOutcome` instead of a broken future, so
    one bad path never takes down the pool.
    """

    def __init__(self, max_workers: int | None = None, *, queue_factor: int = QUEUE_FACTOR) -> None:
        if max_workers is None:
            max_workers = default_worker_count()
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = min(MAX_WORKERS, max_workers)
        self.capacity = self.max_workers * (1 + max(0, queue_factor))
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="fastls-probe",
        )
        self._slots = threading.BoundedSemaphore(self.capacity)
        self._state_lock = threading.Lock()
        self._closed = False
        self._submitted = 0
        self._logger = get_runtime_logger()
        self._logger.debug("pool.started", max_workers=self.max_workers, capacity=self.capacity)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def submitted(self) -> int:
        return self._submitted

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> concurrent.futures.Future[TaskOutcome[T]]:
        with self._state_lock:
            if self._closed:
                raise PoolClosedError("worker pool is shut down")
            self._submitted += 1
        self._slots.acquire()
        try:
            future = self._executor.submit(self._run, fn, args, kwargs)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(self._release_slot)
        return future

    def run_all(self, fn: Callable[..., T], items: Iterable[Any]) -> list[TaskOutcome[T]]:
        """Run ``fn(item)`` for every item and wait for all of them.

        Outcomes are returned in submission order regardless of the order in
        which the workers finish.
        """
        futures = [self.submit(fn, item) for item in items]
        concurrent.futures.wait(futures)
        return [future.result() for future in futures]

    def shutdown(self) -> None:
        """Stop accepting work, then wait for every queued and running task."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        self._logger.debug("pool.stopped", submitted=self._submitted)

    def _release_slot(self, _future: concurrent.futures.Future[Any]) -> None:
        self._slots.release()

    @staticmethod
    def _run(fn: Callable[..., T], args: tuple[Any, ...], kwargs: dict[str, Any]) -> TaskOutcome[T]:
        try:
            return TaskOutcome(value=fn(*args, **kwargs))
        except Exception as exc:
            return TaskOutcome(error=exc)
