from finley.core.hasher import HASH_ALGORITHMS, DEFAULT_HASH_ALGORITHM

HASH_CHOICES = list(HASH_ALGORITHMS.keys())

HASH_HELP_TEXT = (
    "Hash used to recognize duplicate files:\n"
    "  sha256 : Cryptographic content hash (default)\n"
    "  xxh64  : xxHash64, much faster, not cryptographic\n"
    "  xxh128 : xxHash128, much faster, not cryptographic\n"
    f"Default: {DEFAULT_HASH_ALGORITHM}"
)

USAGE_TEXT = "%(prog)s [options] directory-path/"

DESCRIPTION_TEXT = (
    "finley — decompile many .NET binaries concurrently without a GUI.\n"
    "Each unique file is handed to ilspycmd; files with identical content are decompiled once."
)

EPILOG_TEXT = """
Examples:
  Decompile every .dll and .exe at the top level of a directory
  %(prog)s ~/Downloads/app

  Scan recursively, only .dll files, write output to ./decompiled
  %(prog)s -r -e .dll -o decompiled ~/Downloads/app

  Use 2 decompiler processes and stop at the first decompiler failure
  %(prog)s -r --num-workers 2 --no-ilspy-errors ~/Downloads/app

  Use a specific ilspycmd binary and show one log line per file
  %(prog)s --ilspy ~/.dotnet/tools/ilspycmd -v ~/Downloads/app

Output layout (inside each per-file output directory):
  hash.txt               content hash of the decompiled file
  decompile-failure.log  decompiler output when decompilation failed
  ignored.log            where the same content was first seen
"""
