"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout finley.
These protocols enforce structural typing using Python's `typing.Protocol` so the
walker, the job pool and the orchestrator can be swapped out in tests.

Key Components:
---------------
- HashObject: Incremental hash object (hashlib and xxhash objects both qualify).
- FileWalker: Interface for walking a directory tree and reporting unique files.
- JobPool: Interface for bounded, first-failure-wins execution of jobs.
- ProgressSink: Interface for observing queued and finished jobs.
"""

from typing import Protocol, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from finley.core.models import JobOutcome


# ===== Interfaces =====

class HashObject(Protocol):
    """
    Interface for incremental hash objects.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the walker.
    """
    def update(self, data: bytes) -> None: ...

    def hexdigest(self) -> str: ...


class FileWalker(Protocol):
    """
    Interface for walking a directory tree.

    Methods:
        search: Visits every qualifying file once and reports it to the configured callback.
    """
    def search(self) -> None:
        ...


Job = Callable[[], None]


class JobPool(Protocol):
    """
    Interface for a bounded worker pool.

    A job is a zero-argument callable that raises on failure. Only the first
    failure is retained; once it happens, queued jobs that have not started are skipped.
    """
    def queue(self, job: Job) -> None:
        """Enqueue a job without blocking the caller."""
        ...

    def fail(self, error: BaseException) -> bool:
        """Record an error raised outside of a job. Returns True if it became the first error."""
        ...

    def wait(self) -> Optional[BaseException]:
        """Block until all queued jobs are finished or skipped; return the first error."""
        ...

    @property
    def aborted(self) -> bool:
        ...


class ProgressSink(Protocol):
    """Interface for observers of job scheduling and completion."""
    def job_queued(self) -> None: ...

    def job_finished(self, outcome: "JobOutcome") -> None: ...
