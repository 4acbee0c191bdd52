"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Error taxonomy shared by the walker, the job pool, the decompiler runner and the CLI.
"""
from typing import Optional


class FinleyError(RuntimeError):
    """Base class for every error raised by finley itself."""


class ConfigError(FinleyError):
    """Invalid startup configuration (bad flags, decompiler not found)."""


class TraversalError(FinleyError):
    """A directory could not be listed or a file could not be read for hashing."""


class SetupError(FinleyError):
    """A job could not prepare its output directory."""


class ReportError(FinleyError):
    """A hash, failure or ignored marker could not be written."""


class ToolError(FinleyError):
    """
    The external decompiler failed: non-zero exit, launch failure or timeout.
    Carries the combined stdout/stderr of the process for diagnostics.
    """

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode

    def __str__(self) -> str:
        base = super().__str__()
        if self.output:
            return f"{base} - {self.output.strip()}"
        return base


class RunAborted(FinleyError):
    """Raised from the discovery callback once the job pool has already failed."""
