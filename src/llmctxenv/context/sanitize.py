"""Directory-name sanitization for project paths.

A project path becomes a single directory name: path separators and dots
become ``-`` and each uppercase ASCII letter ``X`` becomes ``!x``, so
``My.App/src`` and ``my-app/src`` map to different names on
case-insensitive filesystems.
"""

from __future__ import annotations

import os
import string

_DIRNAME_TABLE = str.maketrans(
    {
        ".": "-",
        os.sep: "-",
        **{c: "!" + c.lower() for c in string.ascii_uppercase},
    }
)


def sanitize_dirname(path: str) -> str:
    """Map a path to a string usable as one directory name.

    The result contains no path separator, no ``.`` and no uppercase ASCII
    letter. Applying it to its own output returns the output unchanged.
    """
    return path.translate(_DIRNAME_TABLE)
