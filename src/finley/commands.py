"""
Unified command orchestrator for a decompilation run.
Wires walker → job pool → decompiler → reporter; used by the CLI and by tests.
"""
import logging
import time
from typing import Optional

from finley.core.errors import RunAborted, ToolError
from finley.core.models import DecompileParams, DecompileStats, FileRecord, JobOutcome, JobStatus, SearchConfig
from finley.core.planner import resolve_output_dir
from finley.core.pool import ParallelFuncPool
from finley.core.walker import UniqueFileWalker
from finley.services.decompiler_service import DecompilerService
from finley.services.progress_service import ProgressReporter, SearchNotice
from finley.services.report_service import ReportService

logger = logging.getLogger(__name__)


class DecompileCommand:
    """
    Orchestrates the entire decompilation workflow:
    1. Walk the target directory, hashing candidates as they are found
    2. Queue one decompiler job per unique file while the walk continues
    3. Record duplicates and recoverable decompiler failures on disk
    4. Wait for the pool and surface the first fatal error, if any

    Usage:
        params = DecompileParams(...)
        stats = DecompileCommand(params).execute()
    """

    def __init__(
            self,
            params: DecompileParams,
            decompiler: Optional[DecompilerService] = None,
            reporter: Optional[ProgressReporter] = None,
            notice: Optional[SearchNotice] = None,
    ):
        self.params = params
        self.decompiler = decompiler or DecompilerService(params.decompiler_path, timeout=params.timeout)
        self.reporter = reporter or ProgressReporter(verbose=params.verbose)
        self.notice = notice or SearchNotice()
        self._pool: Optional[ParallelFuncPool] = None
        self._ignored = 0

    def execute(self) -> DecompileStats:
        """
        Run the decompilation with the configured parameters.

        Returns:
            Statistics for the run.

        Raises:
            The first fatal error of the run (TraversalError, SetupError,
            ReportError, or ToolError when tool errors are fatal).
        """
        start = time.time()
        self._pool = ParallelFuncPool(self.params.num_workers)
        self._ignored = 0

        walker = UniqueFileWalker(SearchConfig(
            target_dir=self.params.target_dir,
            recursive=self.params.recursive,
            allow_duplicates=self.params.allow_duplicates,
            include_file=self.params.include_file,
            found_file=self._on_file_found,
            hasher_factory=self.params.hasher_factory(),
        ))

        self.reporter.start()
        self.notice.start()
        try:
            walker.search()
        except RunAborted:
            logger.debug("Search stopped early, job pool already failed")
        except Exception as e:
            self._pool.fail(e)
        finally:
            self.notice.stop()

        error = self._pool.wait()
        stats = self.reporter.close()
        stats.ignored = self._ignored
        stats.skipped = self._pool.skipped
        stats.total_time = time.time() - start

        if error is not None:
            raise error
        return stats

    def _on_file_found(self, record: FileRecord) -> None:
        if self._pool.aborted:
            raise RunAborted("job pool aborted")

        output_dir = resolve_output_dir(record.search_root, record.path, self.params.output_dir)

        if record.already_seen:
            ReportService.write_ignored_log(output_dir, record)
            self._ignored += 1
            logger.info(f"ignored '{record.path}', already seen at '{record.first_seen_path}'")
            return

        self.reporter.job_queued()
        self._pool.queue(lambda: self._run_job(record, output_dir))

    def _run_job(self, record: FileRecord, output_dir: str) -> None:
        try:
            self.decompiler.decompile(record.path, output_dir)
        except ToolError as e:
            if self.params.fatal_tool_errors:
                raise
            ReportService.write_failure_log(output_dir, e)
            self.reporter.job_finished(JobOutcome(
                file_path=record.path,
                output_dir=output_dir,
                status=JobStatus.FAILED,
                size=record.size,
                detail=str(e),
            ))
            return

        if record.hash:
            ReportService.write_hash_file(output_dir, record.hash)

        self.reporter.job_finished(JobOutcome(
            file_path=record.path,
            output_dir=output_dir,
            status=JobStatus.DECOMPILED,
            size=record.size,
        ))
