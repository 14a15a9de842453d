"""A small worker-thread job system with a bounded ring-buffer queue."""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

_IDLE_WAIT_SECONDS = 0.05


class RingBuffer:
    """Fixed-size thread-safe FIFO; holds at most ``capacity - 1`` items."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        self._capacity = capacity
        self._data: list[Any] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return (self._head - self._tail) % self._capacity

    def push_back(self, item: Any) -> bool:
        """Append ``item``; return False if the buffer is full."""
        with self._lock:
            following = (self._head + 1) % self._capacity
            if following == self._tail:
                return False
            self._data[self._head] = item
            self._head = following
            return True

    def pop_front(self) -> Any:
        """Remove and return the oldest item; raise IndexError if empty."""
        with self._lock:
            if self._tail == self._head:
                raise IndexError("pop from empty ring buffer")
            item = self._data[self._tail]
            self._data[self._tail] = None
            self._tail = (self._tail + 1) % self._capacity
            return item


@dataclass(frozen=True)
class JobDispatchArgs:
    """Position of one invocation inside a dispatched batch."""

    job_index: int
    group_index: int


class JobSystem:
    """Runs jobs on background worker threads."""

    def __init__(self, capacity: int = 256) -> None:
        self._pool = RingBuffer(capacity)
        self._wake = threading.Condition()
        self._label_lock = threading.Lock()
        self._current_label = 0
        self._finished_label = 0
        self._errors: list[BaseException] = []
        self._threads: list[threading.Thread] = []

    @property
    def num_threads(self) -> int:
        return len(self._threads)

    def initialize(self, num_threads: int | None = None) -> None:
        """Start the worker threads; defaults to one per CPU core."""
        if self._threads:
            raise RuntimeError("job system already initialized")
        count = max(1, num_threads if num_threads is not None else (os.cpu_count() or 1))
        with self._label_lock:
            self._finished_label = 0
        for thread_id in range(count):
            worker = threading.Thread(
                target=self._worker, name=f"JobSystem_{thread_id}", daemon=True
            )
            self._threads.append(worker)
            worker.start()

    def _worker(self) -> None:
        while True:
            try:
                job = self._pool.pop_front()
            except IndexError:
                with self._wake:
                    self._wake.wait(_IDLE_WAIT_SECONDS)
                continue
            try:
                job()
            except BaseException as exc:  # noqa: BLE001 - reported by wait()
                with self._label_lock:
                    self._errors.append(exc)
            finally:
                with self._label_lock:
                    self._finished_label += 1

    def _notify_one(self) -> None:
        with self._wake:
            self._wake.notify()

    def _poll(self) -> None:
        self._notify_one()
        time.sleep(0)

    def _require_workers(self) -> None:
        if not self._threads:
            raise RuntimeError("job system is not initialized")

    def _push(self, job: Callable[[], Any]) -> None:
        while not self._pool.push_back(job):
            self._poll()
        self._notify_one()

    def execute(self, job: Callable[[], Any]) -> None:
        """Queue ``job`` to run on a worker thread."""
        self._require_workers()
        with self._label_lock:
            self._current_label += 1
        self._push(job)

    def dispatch(
        self,
        job_count: int,
        group_size: int,
        job: Callable[[JobDispatchArgs], Any],
    ) -> None:
        """Run ``job`` ``job_count`` times, split into groups of ``group_size``."""
        if job_count <= 0 or group_size <= 0:
            return
        self._require_workers()
        group_count = -(-job_count // group_size)
        with self._label_lock:
            self._current_label += group_count

        def make_group(group_index: int) -> Callable[[], None]:
            start = group_index * group_size
            end = min(start + group_size, job_count)

            def run_group() -> None:
                for job_index in range(start, end):
                    job(JobDispatchArgs(job_index, group_index))

            return run_group

        for group_index in range(group_count):
            self._push(make_group(group_index))

    def is_busy(self) -> bool:
        """Return True while any queued job has not finished."""
        with self._label_lock:
            return self._finished_label < self._current_label

    def wait(self) -> None:
        """Block until all queued jobs finish; re-raise the first job error."""
        while self.is_busy():
            self._poll()
        with self._label_lock:
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]