"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/progress_service.py
Progress reporting decoupled from job execution.

ProgressReporter owns a single thread that drains an unbounded event queue,
so workers hand off completion events without ever waiting on the terminal.
SearchNotice logs a reassuring message when the directory walk is slow.
"""
import logging
import queue
import sys
import threading
from typing import Optional, TextIO

from tqdm import tqdm

from finley.core.interfaces import ProgressSink
from finley.core.models import DecompileStats, JobOutcome, JobStatus
from finley.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

_QUEUED = object()
_STOP = object()


class ProgressReporter(ProgressSink):
    """
    Renders either a progress bar sized to the number of queued jobs, or one
    log line per finished job when verbose.
    """

    def __init__(self, verbose: bool = False, stream: Optional[TextIO] = None):
        self.verbose = verbose
        self.stream = stream or sys.stderr
        self.stats = DecompileStats()
        self._events: "queue.Queue[object]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._bar: Optional[tqdm] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self.stats = DecompileStats()
        self._thread = threading.Thread(target=self._run, name="finley-progress", daemon=True)
        self._thread.start()

    def job_queued(self) -> None:
        self._events.put(_QUEUED)

    def job_finished(self, outcome: JobOutcome) -> None:
        self._events.put(outcome)

    def close(self) -> DecompileStats:
        """Drains pending events, stops the reporter thread and returns the collected stats."""
        if self._thread is not None:
            self._events.put(_STOP)
            self._thread.join()
            self._thread = None
        return self.stats

    def _run(self) -> None:
        if not self.verbose:
            self._bar = tqdm(total=0, unit="file", desc="Decompiling", file=self.stream, dynamic_ncols=True)
        try:
            while True:
                event = self._events.get()
                if event is _STOP:
                    return
                if event is _QUEUED:
                    self._on_queued()
                else:
                    self._on_finished(event)
        finally:
            if self._bar is not None:
                self._bar.close()
                self._bar = None

    def _on_queued(self) -> None:
        self.stats.queued += 1
        if self._bar is not None:
            self._bar.total = self.stats.queued
            self._bar.refresh()

    def _on_finished(self, outcome: JobOutcome) -> None:
        self.stats.record(outcome)
        if self._bar is not None:
            self._bar.update(1)
            return

        size = ConvertUtils.bytes_to_human(outcome.size)
        if outcome.status == JobStatus.DECOMPILED:
            logger.info(f"decompiled '{outcome.file_path}' [{size}] to '{outcome.output_dir}'")
        else:
            logger.warning(f"[warn] {outcome.detail}")


class SearchNotice:
    """
    Logs a "still searching" message if the walk outlasts initial_delay,
    repeating with the delay multiplied by backoff each time.
    """

    MESSAGE = "still searching for files to decompile, sorry for the wait :("

    def __init__(self, initial_delay: float = 5.0, backoff: float = 3.0):
        self.initial_delay = initial_delay
        self.backoff = backoff
        self.notices = 0
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self.notices = 0
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="finley-search-notice", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        delay = self.initial_delay
        while not self._stopped.wait(delay):
            self.notices += 1
            logger.warning(self.MESSAGE)
            delay *= self.backoff
