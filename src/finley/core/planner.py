"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/planner.py
Maps a discovered file to the directory its decompiled output goes into.
"""

import os


def resolve_output_dir(search_root: str, file_path: str, output_root: str) -> str:
    """
    Returns output_root joined with the file's path relative to search_root.

    Every input file gets its own directory, named after the file and nested
    the same way the file is nested under the search root, so files sharing a
    basename in different directories never share an output directory.

    Raises:
        ValueError: If file_path is not located under search_root.
    """
    relative = os.path.relpath(os.path.abspath(file_path), os.path.abspath(search_root))
    if relative == os.curdir or relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise ValueError(f"File '{file_path}' is not inside search directory '{search_root}'")
    return os.path.join(output_root, relative)
