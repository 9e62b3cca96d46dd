"""Exceptions raised by llmctxenv.

Filesystem failures during copying are not wrapped: the builtin
``FileNotFoundError``, ``PermissionError``, ``FileExistsError`` and
``OSError`` propagate to the caller unchanged.
"""

from __future__ import annotations

import os


class LLMCtxEnvError(Exception):
    """Base class for llmctxenv errors."""

    pass


class EnvironmentUnavailableError(LLMCtxEnvError):
    """Raised when the working directory or home directory cannot be obtained."""

    pass


class ProviderError(LLMCtxEnvError):
    """Raised when a provider name is missing or unknown."""

    pass


class HashError(LLMCtxEnvError):
    """Raised when a file cannot be hashed.

    The underlying ``OSError`` is available as ``__cause__``.
    """

    def __init__(self, path: str | os.PathLike[str], message: str):
        self.path = os.fspath(path)
        self.message = message
        super().__init__(f"hash {self.path!r}: {message}")
