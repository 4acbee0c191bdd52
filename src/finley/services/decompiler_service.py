"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/decompiler_service.py
Runs the external .NET decompiler (ilspycmd) against a single file.
"""
import os
import shutil
import subprocess
import logging
from typing import List, Optional

from finley.core.errors import ConfigError, SetupError, ToolError

logger = logging.getLogger(__name__)

DEFAULT_DECOMPILER = "ilspycmd"


class DecompilerService:
    """
    Thin wrapper around one decompiler executable.
    The executable must accept: <file> -p -o <output dir>, and exit zero on success.
    """

    def __init__(self, executable: str, timeout: Optional[float] = None):
        self.executable = executable
        self.timeout = timeout

    @staticmethod
    def locate(name: str = DEFAULT_DECOMPILER) -> str:
        """Resolves the decompiler through PATH (or as a path). Fails fast if it is missing."""
        resolved = shutil.which(name)
        if resolved is None:
            raise ConfigError(f"failed to find the specified decompiler binary ('{name}')")
        return resolved

    def build_command(self, file_path: str, output_dir: str) -> List[str]:
        return [self.executable, file_path, "-p", "-o", output_dir]

    def decompile(self, file_path: str, output_dir: str) -> str:
        """
        Decompiles file_path into output_dir and returns the tool's combined output.

        Raises:
            SetupError: If the output directory cannot be created.
            ToolError: If the tool cannot be launched, times out or exits non-zero.
        """
        try:
            os.makedirs(output_dir, mode=0o700, exist_ok=True)
        except OSError as e:
            raise SetupError(f"failed to create output subdirectory '{output_dir}' - {e}") from e

        command = self.build_command(file_path, output_dir)
        logger.debug(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ToolError(
                f"failed to decompile .NET file '{file_path}' - timed out after {self.timeout}s",
                output=_decode(e.output),
            ) from e
        except OSError as e:
            raise ToolError(f"failed to decompile .NET file '{file_path}' - {e}") from e

        output = _decode(result.stdout)
        if result.returncode != 0:
            raise ToolError(
                f"failed to decompile .NET file '{file_path}' - exit status {result.returncode}",
                output=output,
                returncode=result.returncode,
            )
        return output


def _decode(raw: Optional[bytes]) -> str:
    if not raw:
        return ""
    return raw.decode("utf-8", errors="replace")
