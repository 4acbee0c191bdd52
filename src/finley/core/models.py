"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file discovery, job dispatch and run configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
import os
import stat as stat_module

from finley.core.interfaces import HashObject
from finley.core.hasher import DEFAULT_HASH_ALGORITHM, HASH_ALGORITHMS


# =============================
# Enums
# =============================

class JobStatus(Enum):
    """Outcome of a single decompiler job, as seen by the progress reporter."""
    DECOMPILED = "decompiled"
    FAILED = "failed"

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A single file reported by the walker.
    Built at the moment a qualifying file is discovered and handed to the
    discovery callback; never retained by the walker afterwards.
    """
    path: str  # absolute
    parent_dir: str
    search_root: str  # absolute
    stat: os.stat_result
    already_seen: bool = False
    hash: str = ""  # empty when deduplication is disabled
    first_seen_path: Optional[str] = None

    @property
    def size(self) -> int:
        return self.stat.st_size

    @property
    def mode(self) -> int:
        return self.stat.st_mode

    @property
    def is_regular(self) -> bool:
        return stat_module.S_ISREG(self.stat.st_mode)

    def __repr__(self):
        return f"<FileRecord path={self.path}, seen={self.already_seen}>"


@dataclass
class SearchConfig:
    """
    Configures a walk.

    include_file decides whether a discovered file is considered at all;
    found_file is invoked once per considered file. Both are required.
    hasher_factory returns a fresh hashlib-style object; sha256 is used when None.
    When allow_duplicates is True nothing is hashed and every file is
    reported as never seen.
    """
    target_dir: str
    recursive: bool = False
    allow_duplicates: bool = False
    include_file: Optional[Callable[[str], bool]] = None
    found_file: Optional[Callable[[FileRecord], None]] = None
    hasher_factory: Optional[Callable[[], HashObject]] = None

    def validate(self) -> None:
        if self.include_file is None:
            raise ValueError("include_file cannot be None")
        if self.found_file is None:
            raise ValueError("found_file cannot be None")

    def pick_hasher(self) -> HashObject:
        """Returns a new hash object from the configured factory, or the default."""
        if self.hasher_factory is None:
            return HASH_ALGORITHMS[DEFAULT_HASH_ALGORITHM]()
        return self.hasher_factory()


@dataclass(frozen=True)
class JobOutcome:
    """Completion event for one decompiler job."""
    file_path: str
    output_dir: str
    status: JobStatus
    size: int = 0
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.DECOMPILED


@dataclass
class DecompileStats:
    """
    Counters collected over one run.
    """
    queued: int = 0
    decompiled: int = 0
    failed: int = 0
    ignored: int = 0
    skipped: int = 0
    total_time: float = 0.0

    def record(self, outcome: JobOutcome) -> None:
        if outcome.succeeded:
            self.decompiled += 1
        else:
            self.failed += 1

    @property
    def completed(self) -> int:
        return self.decompiled + self.failed

    def print_summary(self) -> str:
        lines = [
            "📊 Decompilation Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Queued: {self.queued}",
            f"Decompiled: {self.decompiled}",
            f"Failed (recorded): {self.failed}",
            f"Ignored duplicates: {self.ignored}",
        ]
        if self.skipped:
            lines.append(f"Skipped after abort: {self.skipped}")
        return "\n".join(lines)


"""
DTO for decompilation parameters with built-in validation.
Built once by the CLI and passed explicitly to every component.
"""

@dataclass
class DecompileParams:
    """Parameters for a decompilation run with validation."""
    target_dir: str
    output_dir: str
    decompiler_path: str
    extensions: List[str] = field(default_factory=lambda: [".dll", ".exe"])
    respect_file_case: bool = False
    recursive: bool = False
    allow_duplicates: bool = False
    num_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    fatal_tool_errors: bool = False
    verbose: bool = False
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    timeout: Optional[float] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.target_dir:
            raise ValueError("Target directory cannot be empty")

        if not self.output_dir:
            raise ValueError("Output directory cannot be empty")

        if self.num_workers < 1:
            raise ValueError("Number of workers must be at least 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("Timeout must be a positive number of seconds")

        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ValueError(
                f"Unknown hash algorithm: '{self.hash_algorithm}'. "
                f"Valid options: {', '.join(HASH_ALGORITHMS)}"
            )

        # Normalize extensions: ensure they start with dot; lowercase unless case matters
        normalized = []
        for ext in self.extensions:
            ext = ext.strip()
            if not self.respect_file_case:
                ext = ext.lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        if not normalized:
            raise ValueError("At least one file extension is required")
        self.extensions = normalized

    def include_file(self, file_path: str) -> bool:
        """Inclusion predicate handed to the walker: suffix match on the full path."""
        if not self.respect_file_case:
            file_path = file_path.lower()
        return any(file_path.endswith(ext) for ext in self.extensions)

    def hasher_factory(self) -> Callable[[], HashObject]:
        return HASH_ALGORITHMS[self.hash_algorithm]

    @staticmethod
    def from_human_readable(
            target_dir: str,
            decompiler_path: str,
            extensions_str: str = ".dll,.exe",
            output_dir: Optional[str] = None,
            **kwargs,
    ) -> 'DecompileParams':
        """
        Factory method to create params from human-readable inputs.
        The output directory defaults to the base name of the target directory.
        """
        ext_list = [
            ext.strip() for ext in extensions_str.split(",") if ext.strip()
        ] if extensions_str else []

        if not output_dir:
            output_dir = default_output_dir(target_dir)

        return DecompileParams(
            target_dir=target_dir,
            output_dir=output_dir,
            decompiler_path=decompiler_path,
            extensions=ext_list,
            **kwargs,
        )


def default_output_dir(target_dir: str) -> str:
    """Base name of the (resolved) target directory, relative to the working directory."""
    return os.path.basename(os.path.abspath(target_dir)) or "finley-output"
