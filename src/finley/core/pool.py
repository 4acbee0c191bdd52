"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Bounded worker pool with first-failure-wins semantics.

A fixed number of worker threads pull jobs from an unbounded queue, so at
most num_workers jobs ever run at once and queue() never blocks the caller.
The first exception raised by a job (or passed to fail()) is kept and sets
the abort signal; jobs still waiting in the queue are then skipped. Jobs that
are already running are left to finish. Later errors are dropped.
"""

import logging
import queue
import threading
from typing import List, Optional

from finley.core.interfaces import Job, JobPool

logger = logging.getLogger(__name__)

_STOP = object()


class ParallelFuncPool(JobPool):
    """
    Runs up to num_workers jobs concurrently.

    Usage:
        pool = ParallelFuncPool(4)
        for path in paths:
            pool.queue(lambda p=path: decompile(p))
        error = pool.wait()
    """

    def __init__(self, num_workers: int):
        if num_workers < 1:
            raise ValueError(f"Number of workers must be at least 1, got {num_workers}")

        self._num_workers = num_workers
        self._jobs: "queue.Queue[object]" = queue.Queue()
        self._abort = threading.Event()
        self._error_lock = threading.Lock()
        self._first_error: Optional[BaseException] = None
        self._skipped = 0
        self._closed = False
        self._close_lock = threading.Lock()

        self._workers: List[threading.Thread] = []
        for i in range(num_workers):
            worker = threading.Thread(target=self._work, name=f"finley-worker-{i}", daemon=True)
            worker.start()
            self._workers.append(worker)

    @property
    def num_workers(self) -> int:
        return self._num_workers

    @property
    def aborted(self) -> bool:
        return self._abort.is_set()

    @property
    def skipped(self) -> int:
        """Number of queued jobs abandoned because the pool aborted."""
        return self._skipped

    def queue(self, job: Job) -> None:
        with self._close_lock:
            if self._closed:
                raise RuntimeError("Cannot queue a job after wait() was called")
            self._jobs.put(job)

    def fail(self, error: BaseException) -> bool:
        """
        Claims the first-error slot and triggers the abort signal.
        Returns True if this error is now the pool's first error.
        """
        with self._error_lock:
            if self._first_error is not None:
                logger.debug(f"Dropping secondary error: {error}")
                return False
            self._first_error = error
            self._abort.set()
        return True

    def wait(self) -> Optional[BaseException]:
        """
        Blocks until every queued job has finished or been skipped, then stops
        the workers. Returns the first error, or None.
        """
        with self._close_lock:
            already_closed = self._closed
            self._closed = True

        if not already_closed:
            self._jobs.join()
            for _ in self._workers:
                self._jobs.put(_STOP)
            for worker in self._workers:
                worker.join()

        with self._error_lock:
            return self._first_error

    def _work(self) -> None:
        while True:
            job = self._jobs.get()
            try:
                if job is _STOP:
                    return
                if self._abort.is_set():
                    with self._error_lock:
                        self._skipped += 1
                    continue
                try:
                    job()
                except BaseException as e:
                    self.fail(e)
            finally:
                self._jobs.task_done()
