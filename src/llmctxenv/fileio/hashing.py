"""SHA-256 content hashing of files."""

from __future__ import annotations

import binascii
import hashlib
import os

from ..core.errors import HashError
from .pools import BufferPools


def hash_file(path: str | os.PathLike[str], pools: BufferPools | None = None) -> str:
    """Return the lowercase hex SHA-256 digest of a file's contents.

    Symlinks are followed. The file is streamed in chunks, so its size is
    not limited by memory.

    Args:
        path: File to hash.
        pools: Scratch pools to draw from. Defaults to the shared pools.

    Raises:
        HashError: If the file cannot be opened or read. The OS error is
            chained as ``__cause__``.
    """
    pools = pools or BufferPools.shared()

    try:
        f = open(path, "rb", buffering=0)
    except OSError as e:
        raise HashError(path, e.strerror or str(e)) from e

    with f, pools.hash_states.lease() as state, pools.copy_buffers.lease() as buf:
        with memoryview(buf) as view:
            try:
                while n := f.readinto(view):
                    state.update(view[:n])
            except OSError as e:
                raise HashError(path, e.strerror or str(e)) from e

        with pools.digests.lease() as digest, pools.hex_buffers.lease() as hex_out:
            state.digest_into(digest)
            memoryview(hex_out)[:] = binascii.hexlify(digest)
            return hex_out.decode("ascii")


def hash_bytes(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of in-memory content."""
    return hashlib.sha256(data).hexdigest()
