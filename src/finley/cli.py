#!/usr/bin/env python3
"""
finley CLI — Command line interface for batch .NET decompilation.
Walks a directory, skips files whose content was already seen, and runs a
bounded number of ilspycmd processes concurrently.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import NoReturn, Optional
import logging

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

try:
    import tqdm
except ImportError:
    _MISSING_DEPS.append("tqdm")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install .", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from tqdm.contrib.logging import logging_redirect_tqdm

from finley import __version__
from finley.core.errors import ConfigError, FinleyError
from finley.core.models import DecompileParams, DecompileStats, default_output_dir
from finley.commands import DecompileCommand
from finley.services.decompiler_service import DecompilerService, DEFAULT_DECOMPILER
from finley.utils.convert_utils import ConvertUtils
from finley.aliases import (
    HASH_CHOICES, HASH_HELP_TEXT, DEFAULT_HASH_ALGORITHM,
    USAGE_TEXT, DESCRIPTION_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="finley",
            usage=USAGE_TEXT,
            description=DESCRIPTION_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "directory",
            type=str,
            help="Directory to search for .NET binaries"
        )

        # Filtering options
        parser.add_argument(
            "--extensions", "-e",
            default=".dll,.exe",
            type=str,
            metavar='',
            help="Comma separated list of file extensions to search for. Default: .dll,.exe"
        )
        parser.add_argument(
            "--respect-file-case",
            action="store_true",
            help="Respect filenames' case when matching their extensions"
        )
        parser.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Scan recursively (default: top level only)"
        )
        parser.add_argument(
            "--allow-duplicates",
            action="store_true",
            help="Decompile files even if their hash has already been encountered"
        )
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default=DEFAULT_HASH_ALGORITHM,
            type=str,
            help=HASH_HELP_TEXT
        )

        # Decompiler options
        parser.add_argument(
            "--output", "-o",
            default="",
            type=str,
            metavar='',
            help="The output directory. Default: base name of the target directory"
        )
        parser.add_argument(
            "--num-workers",
            default=os.cpu_count() or 1,
            type=int,
            metavar='',
            help="Number of .NET decompiler instances to run concurrently. Default: CPU count"
        )
        parser.add_argument(
            "--no-ilspy-errors",
            action="store_true",
            help="Exit if ILSpy fails to decompile a file"
        )
        parser.add_argument(
            "--ilspy",
            default=DEFAULT_DECOMPILER,
            type=str,
            metavar='',
            help=f"The 'ilspycmd' binary to use. Default: {DEFAULT_DECOMPILER}"
        )
        parser.add_argument(
            "--timeout",
            default=None,
            type=float,
            metavar='',
            help="Seconds to wait for one decompiler run before counting it as failed. Default: no limit"
        )

        # Output options
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Display log messages rather than a progress bar"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
            help="Display the version number and exit"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        root_path = Path(args.directory).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.directory}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.directory}")

        if not [ext for ext in args.extensions.split(",") if ext.strip()]:
            self.error_exit("Please specify a comma separated list of file extensions")

        if args.num_workers < 1:
            self.error_exit("Number of workers must be at least 1")

        if args.timeout is not None and args.timeout <= 0:
            self.error_exit("Timeout must be a positive number of seconds")

        output_path = Path(args.output or default_output_dir(args.directory))
        if output_path.exists() and not output_path.is_dir():
            self.error_exit(f"Output path is not a directory: {output_path}")

    def locate_decompiler(self, args: argparse.Namespace) -> str:
        """Resolve the decompiler binary before any traversal begins."""
        try:
            return DecompilerService.locate(args.ilspy)
        except ConfigError as e:
            self.error_exit(str(e))

    def create_params(self, args: argparse.Namespace, decompiler_path: str) -> DecompileParams:
        """Create DecompileParams from CLI arguments."""
        try:
            return DecompileParams.from_human_readable(
                target_dir=str(Path(args.directory).resolve()),
                decompiler_path=decompiler_path,
                extensions_str=args.extensions,
                output_dir=args.output or default_output_dir(args.directory),
                respect_file_case=args.respect_file_case,
                recursive=args.recursive,
                allow_duplicates=args.allow_duplicates,
                num_workers=args.num_workers,
                fatal_tool_errors=args.no_ilspy_errors,
                verbose=args.verbose,
                hash_algorithm=args.hash,
                timeout=args.timeout,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def run_decompilation(self, params: DecompileParams) -> DecompileStats:
        """Execute the decompilation workflow."""
        command = DecompileCommand(params)
        try:
            if self.verbose:
                stats = command.execute()
            else:
                # Keep log records from tearing the progress bar apart
                with logging_redirect_tqdm():
                    stats = command.execute()
        except FinleyError as e:
            self.error_exit(str(e))

        if self.verbose:
            print("\n" + stats.print_summary())
        return stats

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        """INFO when verbose, DEBUG when the DEBUG environment variable is set."""
        level = logging.INFO if verbose else logging.WARNING
        if os.environ.get("DEBUG"):
            level = logging.DEBUG
        logging.getLogger().setLevel(level)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[list] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.configure_logging(self.verbose)

        self.validate_args(args)
        decompiler_path = self.locate_decompiler(args)
        params = self.create_params(args, decompiler_path)

        print(f"Scanning directory: {params.target_dir}")
        print(f"Output directory: {params.output_dir}")

        stats = self.run_decompilation(params)

        elapsed = time.time() - self.start_time
        print(f"✅ Finished after {ConvertUtils.seconds_to_human(elapsed)} "
              f"({stats.decompiled} decompiled, {stats.failed} failed, {stats.ignored} ignored)")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
