"""
Core dispatch engine — walker, hasher, job pool and output planner.

This package contains the concurrency-critical foundation of finley:
- UniqueFileWalker: single-pass directory traversal with content-hash deduplication
- HASH_ALGORITHMS: sha256 (default) and xxHash constructors for the walker
- ParallelFuncPool: bounded worker pool with first-failure-wins semantics
- resolve_output_dir: deterministic mapping of input files to output directories
- Models: FileRecord, SearchConfig, DecompileParams and run statistics

Nothing here starts a subprocess or touches the terminal — see finley.services.
"""

from .errors import (
    FinleyError, ConfigError, TraversalError, SetupError, ToolError, ReportError, RunAborted)
from .hasher import HASH_ALGORITHMS, DEFAULT_HASH_ALGORITHM, hash_file
from .models import (
    FileRecord, SearchConfig, DecompileParams, DecompileStats, JobOutcome, JobStatus)
from .walker import UniqueFileWalker, find_unique_files
from .pool import ParallelFuncPool
from .planner import resolve_output_dir

__all__ = [
    "FinleyError",
    "ConfigError",
    "TraversalError",
    "SetupError",
    "ToolError",
    "ReportError",
    "RunAborted",
    "HASH_ALGORITHMS",
    "DEFAULT_HASH_ALGORITHM",
    "hash_file",
    "FileRecord",
    "SearchConfig",
    "DecompileParams",
    "DecompileStats",
    "JobOutcome",
    "JobStatus",
    "UniqueFileWalker",
    "find_unique_files",
    "ParallelFuncPool",
    "resolve_output_dir",
]
