"""
finley — decompile many .NET binaries concurrently without a GUI.

Core features:
- Recursive or top-level search for binaries by extension
- Content-hash deduplication: identical binaries are decompiled once
- Bounded pool of concurrent ilspycmd processes with first-failure-wins semantics
- Recoverable decompiler failures recorded next to the output
- CLI interface with a progress bar or per-file log lines
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("finley")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Public API: only what users should import directly
from finley.commands import DecompileCommand
from finley.core import (
    DecompileParams, DecompileStats, FileRecord, SearchConfig,
    ParallelFuncPool, UniqueFileWalker, find_unique_files, resolve_output_dir)
from finley.services import DecompilerService, ReportService, ProgressReporter
from finley.utils.convert_utils import ConvertUtils

__all__ = [
    "DecompileCommand",
    "DecompileParams",
    "DecompileStats",
    "FileRecord",
    "SearchConfig",
    "ParallelFuncPool",
    "UniqueFileWalker",
    "find_unique_files",
    "resolve_output_dir",
    "DecompilerService",
    "ReportService",
    "ProgressReporter",
    "ConvertUtils",
    "__version__",
]
