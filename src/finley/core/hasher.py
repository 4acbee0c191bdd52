"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Content hashing for the walker's duplicate detection.

Algorithms are hashlib-style constructors: calling one returns an object with
update() and hexdigest(). Both hashlib and xxhash objects satisfy HashObject,
so any of them can be plugged into SearchConfig.hasher_factory.
"""

import hashlib
from typing import Callable, Dict

import xxhash

from finley.core.interfaces import HashObject

CHUNK_SIZE = 1024 * 1024  # 1 MiB

DEFAULT_HASH_ALGORITHM = "sha256"

# Use the same way to register any other hashing algorithm
HASH_ALGORITHMS: Dict[str, Callable[[], HashObject]] = {
    "sha256": hashlib.sha256,
    "xxh64": xxhash.xxh64,
    "xxh128": xxhash.xxh128,
}


def hash_file(path: str, hasher: HashObject, chunk_size: int = CHUNK_SIZE) -> str:
    """Feeds the file at path into hasher and returns the hex digest."""
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest()
