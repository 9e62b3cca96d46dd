"""File and directory tree copying.

Copies never overwrite: an existing destination file makes the copy fail
with ``FileExistsError``. Directories are created as needed. Symlinks are
followed, so a link is copied as whatever it points to.
"""

from __future__ import annotations

import contextlib
import errno
import os
import stat
from typing import BinaryIO

from ..core import defaults as D
from .pools import BufferPools

StrPath = str | os.PathLike[str]


def is_exist(path: StrPath) -> bool:
    """Report whether a path exists.

    Only a not-found error counts as absent; a path that exists but cannot
    be inspected is reported as present. A broken symlink is absent.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def mkdir_all(path: StrPath, mode: int) -> None:
    """Create ``path`` and any missing parents, each with ``mode``.

    Does nothing if ``path`` is already a directory.

    Raises:
        FileExistsError: If ``path`` or a parent exists and is not a directory.
    """
    path = os.fspath(path)
    if os.path.isdir(path):
        return
    parent = os.path.dirname(path.rstrip(os.sep))
    if parent and parent != path:
        mkdir_all(parent, mode)
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        if not os.path.isdir(path):
            raise


def copy_file(
    dest: StrPath,
    source: StrPath,
    perm: int,
    pools: BufferPools | None = None,
) -> None:
    """Copy the contents of ``source`` to a new file ``dest`` with mode ``perm``.

    Raises:
        FileNotFoundError: If the source does not exist.
        PermissionError: If the source cannot be read or dest cannot be created.
        FileExistsError: If dest already exists. It is left untouched.
        OSError: On any other read, write or close failure.
    """
    pools = pools or BufferPools.shared()

    with open(source, "rb", buffering=0) as src:
        fd = os.open(dest, os.O_WRONLY | os.O_CREAT | os.O_EXCL, perm)
        try:
            dst = os.fdopen(fd, "wb", buffering=0)
        except BaseException:
            os.close(fd)
            raise

        try:
            # The mode given to open() is masked by the umask.
            os.fchmod(dst.fileno(), perm & 0o7777)
            _copy_stream(dst, src, pools)
        except BaseException:
            with contextlib.suppress(OSError):
                dst.close()
            raise
        dst.close()


def _copy_stream(dst: BinaryIO, src: BinaryIO, pools: BufferPools) -> None:
    with pools.copy_buffers.lease() as buf, memoryview(buf) as view:
        while n := src.readinto(view):
            chunk = view[:n]
            while chunk:
                chunk = chunk[dst.write(chunk):]


def copy_tree(src_dir: StrPath, dest_dir: StrPath, pools: BufferPools | None = None) -> int:
    """Recursively copy the contents of ``src_dir`` into ``dest_dir``.

    Files keep their permission bits. Directories are created with mode
    0o755 if missing. The copy stops at the first error; whatever was
    already copied stays on disk.

    Returns:
        Number of files copied.

    Raises:
        OSError: The first error encountered (``FileNotFoundError``,
            ``PermissionError``, ``FileExistsError``, ...). A symlink that
            leads back into one of its ancestor directories raises with
            ``errno.ELOOP``.
    """
    pools = pools or BufferPools.shared()
    return _copy_tree(os.fspath(src_dir), os.fspath(dest_dir), pools, frozenset())


def _copy_tree(
    src_dir: str,
    dest_dir: str,
    pools: BufferPools,
    ancestors: frozenset[tuple[int, int]],
) -> int:
    mkdir_all(dest_dir, D.COPY_DIR_MODE)

    dir_info = os.stat(src_dir)
    ancestors = ancestors | {(dir_info.st_dev, dir_info.st_ino)}

    with os.scandir(src_dir) as it:
        names = sorted(entry.name for entry in it)

    copied = 0
    for name in names:
        src = os.path.join(src_dir, name)
        dest = os.path.join(dest_dir, name)

        info = os.stat(src)
        if stat.S_ISDIR(info.st_mode):
            if (info.st_dev, info.st_ino) in ancestors:
                raise OSError(errno.ELOOP, "directory cycle through symlink", src)
            mkdir_all(dest, D.COPY_DIR_MODE)
            copied += _copy_tree(src, dest, pools, ancestors)
        else:
            mkdir_all(os.path.dirname(dest), D.COPY_DIR_MODE)
            copy_file(dest, src, stat.S_IMODE(info.st_mode) & 0o777, pools)
            copied += 1
    return copied
