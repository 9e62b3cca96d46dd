"""File hashing and copying helpers."""

from .copy import copy_file, copy_tree, is_exist, mkdir_all
from .hashing import hash_bytes, hash_file
from .pools import DIGEST_SIZE, HEX_SIZE, BufferPool, BufferPools, HashState

__all__ = [
    # Copy
    "copy_file",
    "copy_tree",
    "is_exist",
    "mkdir_all",
    # Hashing
    "hash_file",
    "hash_bytes",
    # Pools
    "BufferPool",
    "BufferPools",
    "HashState",
    "DIGEST_SIZE",
    "HEX_SIZE",
]
