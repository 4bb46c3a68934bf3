"""Per-store flush worker.

A single worker thread runs flush jobs in the order they were scheduled, so
at most one write to a store's file is in flight. Scheduling while a job is
still waiting to start coalesces into that job: every job snapshots the
store when it runs, not when it was scheduled.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable

logger = logging.getLogger(__name__)


class WriteQueue:
    def __init__(self, name: str) -> None:
        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"flush-{name}")
        self._lock = threading.Lock()
        self._queued: Future | None = None
        self._last: Future | None = None
        self._completed = 0
        self._failures = 0
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def failures(self) -> int:
        return self._failures

    def schedule(self, job: Callable[[], None]) -> Future:
        """Queue ``job`` behind earlier flushes; never blocks on the write."""
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Write queue {self._name} is closed")
            if self._queued is not None:
                return self._queued
            future: Future = self._executor.submit(self._run, job)
            self._queued = future
            self._last = future
            return future

    def drain(self, timeout: float | None = None) -> bool:
        """Block until every scheduled flush has finished."""
        with self._lock:
            last = self._last
        if last is None:
            return True
        done, _ = wait([last], timeout=timeout)
        return bool(done)

    def close(self, timeout: float | None = None) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.drain(timeout)
        self._executor.shutdown(wait=True)

    def _run(self, job: Callable[[], None]) -> None:
        with self._lock:
            self._queued = None
        try:
            job()
        except Exception:
            self._failures += 1
            logger.exception("Flush failed for store %s", self._name)
        else:
            self._completed += 1


__all__ = ["WriteQueue"]
