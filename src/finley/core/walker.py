"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Walks a directory tree once and reports every qualifying file to a callback,
flagging files whose content hash has already been seen during the walk.
Features:
- Single top-down os.walk traversal in sorted (deterministic) order
- Optional recursion: without it, subdirectories of the root are pruned
- Symlinks, devices and other non-regular entries are skipped
- Content hashes are streamed, never read whole into memory
- Listing and read errors abort the walk instead of being skipped
"""

import os
import stat
import logging
from typing import Dict

logger = logging.getLogger(__name__)

# Local imports
from finley.core.errors import TraversalError
from finley.core.hasher import hash_file
from finley.core.interfaces import FileWalker
from finley.core.models import FileRecord, SearchConfig


class UniqueFileWalker(FileWalker):
    """
    Stateful walker owning the hash ledger for one search.

    Attributes:
        config: Validated search configuration
        abs_target_dir: Absolute path of the searched directory
        ledger: Content hash -> path of the first file that produced it
    """

    def __init__(self, config: SearchConfig):
        config.validate()
        self.config = config
        self.abs_target_dir = os.path.abspath(config.target_dir)
        self.ledger: Dict[str, str] = {}

    def search(self) -> None:
        """
        Visits every regular file under the target directory exactly once.
        Exceptions raised by the discovery callback propagate unchanged.
        """
        logger.debug(f"Starting search in {self.abs_target_dir} "
                     f"(recursive={self.config.recursive}, allow_duplicates={self.config.allow_duplicates})")

        if not os.path.exists(self.abs_target_dir):
            raise TraversalError(f"Directory does not exist: {self.abs_target_dir}")
        if not os.path.isdir(self.abs_target_dir):
            raise TraversalError(f"Not a directory: {self.abs_target_dir}")

        for root, dirs, files in os.walk(self.abs_target_dir, onerror=self._on_walk_error):
            if self.config.recursive:
                dirs.sort()
            else:
                # Only the top level is scanned; prune before os.walk enters any subdirectory
                dirs[:] = []

            for filename in sorted(files):
                self._visit(os.path.join(root, filename), root)

        logger.debug(f"Search finished, {len(self.ledger)} unique hashes recorded")

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        raise TraversalError(f"failed to list directory '{error.filename}' - {error}") from error

    def _visit(self, file_path: str, parent_dir: str) -> None:
        try:
            info = os.lstat(file_path)
        except OSError as e:
            raise TraversalError(f"failed to stat file '{file_path}' - {e}") from e

        if not stat.S_ISREG(info.st_mode):
            logger.debug(f"Skipping non-regular file: {file_path}")
            return

        if not self.config.include_file(file_path):
            return

        already_seen = False
        file_hash = ""
        first_seen_path = None
        if not self.config.allow_duplicates:
            try:
                file_hash = hash_file(file_path, self.config.pick_hasher())
            except OSError as e:
                raise TraversalError(f"failed to hash file '{file_path}' - {e}") from e

            first_seen_path = self.ledger.get(file_hash)
            already_seen = first_seen_path is not None
            if not already_seen:
                self.ledger[file_hash] = file_path
            else:
                logger.debug(f"Duplicate of {first_seen_path}: {file_path}")

        self.config.found_file(FileRecord(
            path=file_path,
            parent_dir=parent_dir,
            search_root=self.abs_target_dir,
            stat=info,
            already_seen=already_seen,
            hash=file_hash,
            first_seen_path=first_seen_path,
        ))


def find_unique_files(config: SearchConfig) -> None:
    """
    Searches config.target_dir using the provided config.
    Duplicate detection can be switched off with config.allow_duplicates.
    """
    UniqueFileWalker(config).search()
