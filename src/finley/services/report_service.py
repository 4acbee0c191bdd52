"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Marker files written next to the decompiler output so operators can audit a run.
Nothing in finley reads them back.
"""
import os
from pathlib import Path

from finley.core.errors import ReportError
from finley.core.models import FileRecord

HASH_FILE_NAME = "hash.txt"
FAILURE_LOG_NAME = "decompile-failure.log"
IGNORED_LOG_NAME = "ignored.log"


class ReportService:
    """
    Writes hash, failure and ignored markers.
    Every write failure is raised as ReportError: an unusable output
    filesystem is fatal to the run.
    """

    @staticmethod
    def write_hash_file(output_dir: str, file_hash: str) -> Path:
        """Records the content hash of the input that produced output_dir."""
        return ReportService._write(Path(output_dir) / HASH_FILE_NAME, f"{file_hash}\n")

    @staticmethod
    def write_failure_log(output_dir: str, error: Exception) -> Path:
        """Records the full diagnostic text of a decompiler failure."""
        return ReportService._write(Path(output_dir) / FAILURE_LOG_NAME, f"{error}\n")

    @staticmethod
    def write_ignored_log(output_dir: str, record: FileRecord) -> Path:
        """Creates output_dir for a duplicate file and notes where its content was first seen."""
        path = Path(output_dir)
        try:
            os.makedirs(path, mode=0o700, exist_ok=True)
        except OSError as e:
            raise ReportError(
                f"failed to create directory for ignored .NET file '{record.path}' - {e}"
            ) from e

        text = (
            f"file has already been seen at '{record.first_seen_path}', hash of file is {record.hash}\n"
            f"ignored file: '{record.path}'\n"
        )
        return ReportService._write(path / IGNORED_LOG_NAME, text)

    @staticmethod
    def _write(path: Path, text: str) -> Path:
        try:
            path.write_text(text, encoding="utf-8")
            os.chmod(path, 0o600)
        except OSError as e:
            raise ReportError(f"failed to write '{path}' - {e}") from e
        return path
