"""Resolution of global and per-project context directories."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from pathlib import Path

from ..core import defaults as D
from ..core.config import ContextRoot, get_context_root, user_home_dir
from ..core.errors import EnvironmentUnavailableError
from .providers import Provider
from .sanitize import sanitize_dirname


class ContextPathResolver:
    """Maps a provider and the working directory to context directories.

    Layout under the root::

        <root>/global/<provider>
        <root>/local/<provider>/<sanitized project path>

    Nothing is created on disk; callers create directories as needed.
    """

    def __init__(
        self,
        root: ContextRoot | None = None,
        getcwd: Callable[[], str] = os.getcwd,
        home_dir: Callable[[], str] = user_home_dir,
    ):
        self._root = root or get_context_root()
        self._getcwd = getcwd
        self._home_dir = home_dir

    @property
    def root(self) -> Path:
        """The context root directory."""
        return self._root.path

    def global_dir(self, provider: Provider | str) -> Path:
        """Return the global context directory for a provider."""
        return self.root / D.GLOBAL_DIRNAME / str(provider)

    def local_dir(self, provider: Provider | str) -> Path:
        """Return the context directory of the current project for a provider.

        The working directory is made relative to the home directory when it
        lies under it, then sanitized into a single directory name.

        Raises:
            EnvironmentUnavailableError: If the working directory or the home
                directory cannot be obtained.
        """
        try:
            cwd = self._getcwd()
        except OSError as e:
            raise EnvironmentUnavailableError(f"get current directory: {e}") from e

        if not os.path.isabs(cwd):
            try:
                cwd = os.path.abspath(cwd)
            except OSError as e:
                raise EnvironmentUnavailableError(f"resolve current directory {cwd!r}: {e}") from e

        try:
            home = self._home_dir()
        except (OSError, KeyError, RuntimeError) as e:
            raise EnvironmentUnavailableError(f"get current user home directory: {e}") from e
        if not home:
            raise EnvironmentUnavailableError("get current user home directory: empty path")

        return self.root / D.LOCAL_DIRNAME / str(provider) / sanitize_dirname(
            project_relpath(cwd, home)
        )


def project_relpath(cwd: str, home: str) -> str:
    """Strip the home directory prefix from ``cwd``.

    Returns the empty string when ``cwd`` is the home directory itself, and
    ``cwd`` unchanged (leading separator included) when it does not start
    with ``<home>/``. A home of ``/`` gives the prefix ``//``, so nothing
    is stripped there.
    """
    home = home.rstrip(os.sep)
    if cwd.rstrip(os.sep) == home:
        return ""
    prefix = (home or os.sep) + os.sep
    if cwd.startswith(prefix):
        return cwd[len(prefix):]
    return cwd


_resolver: ContextPathResolver | None = None
_resolver_lock = threading.Lock()


def get_resolver() -> ContextPathResolver:
    """Get the process-wide resolver bound to the process-wide context root."""
    global _resolver
    if _resolver is None:
        with _resolver_lock:
            if _resolver is None:
                _resolver = ContextPathResolver()
    return _resolver


def global_dir(provider: Provider | str) -> Path:
    """Return the global context directory for a provider."""
    return get_resolver().global_dir(provider)


def local_dir(provider: Provider | str) -> Path:
    """Return the current project's context directory for a provider."""
    return get_resolver().local_dir(provider)
