"""Configuration management for llmctxenv."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import defaults as D
from .errors import EnvironmentUnavailableError

logger = logging.getLogger(__name__)


def user_home_dir() -> str:
    """Return the current user's home directory.

    Raises:
        EnvironmentUnavailableError: If no home directory can be determined.
    """
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise EnvironmentUnavailableError("get current user home directory: $HOME is not defined")
    return home


class ContextRoot:
    """Holder for the root directory of all context environments.

    The root is ``$LLMCTXENV_ROOT`` when set and non-empty, otherwise
    ``<home>/.llmctxenv``. It is resolved on first access and cached;
    ``reset()`` drops the cached value so the next access resolves again.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        home_dir: Callable[[], str] = user_home_dir,
    ):
        self._environ = environ
        self._home_dir = home_dir
        self._path: Path | None = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """The resolved root directory."""
        if self._path is None:
            with self._lock:
                if self._path is None:
                    self._path = self._resolve()
        return self._path

    def reset(self, path: str | os.PathLike[str] | None = None) -> None:
        """Forget the cached root, or pin it to ``path``."""
        with self._lock:
            self._path = Path(path) if path is not None else None

    def _resolve(self) -> Path:
        environ = os.environ if self._environ is None else self._environ
        if override := environ.get(D.ENV_ROOT):
            return Path(override)
        return Path(self._home_dir()) / D.ROOT_DIRNAME


_context_root = ContextRoot()


def get_context_root() -> ContextRoot:
    """Get the process-wide context root holder."""
    return _context_root


def parse_dir_mode(value: Any) -> int:
    """Parse a directory mode given as an int or an octal string ("0700", "0o700")."""
    if isinstance(value, bool):
        raise ValueError(f"invalid directory mode: {value!r}")
    if isinstance(value, int):
        mode = value
    else:
        mode = int(str(value).strip(), 8)
    if not 0 <= mode <= 0o7777:
        raise ValueError(f"invalid directory mode: {value!r}")
    return mode


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Main application configuration."""

    root: Path = field(default_factory=lambda: get_context_root().path)
    default_provider: str | None = D.DEFAULT_PROVIDER
    dir_mode: int = D.DEFAULT_DIR_MODE
    verbose: bool = D.DEFAULT_VERBOSE

    @property
    def config_file(self) -> Path:
        """Default config file location inside the root."""
        return self.root / D.CONFIG_FILENAME

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        root: ContextRoot | None = None,
    ) -> Config:
        """Load configuration from the config file and environment.

        Priority (highest wins):
          1. Environment variables (LLMCTXENV_PROVIDER, LLMCTXENV_VERBOSE)
          2. Config file (<root>/config.yaml or custom path)
          3. Defaults

        Args:
            config_path: Optional path to a YAML config file.
            root: Root holder to use instead of the process-wide one.

        Returns:
            Populated Config instance.
        """
        config = cls(root=(root or get_context_root()).path)
        file_path = config_path or config.config_file

        if file_path.exists():
            config._merge_from_file(file_path)

        config._apply_env_overrides()
        return config

    def _merge_from_file(self, path: Path) -> None:
        """Merge configuration from a YAML file, ignoring invalid content."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("top-level value must be a mapping")

            if "default_provider" in data:
                provider = data["default_provider"]
                self.default_provider = str(provider) if provider else None
            if "dir_mode" in data:
                self.dir_mode = parse_dir_mode(data["dir_mode"])
            if "verbose" in data:
                self.verbose = _parse_bool(data["verbose"])
        except (yaml.YAMLError, OSError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if provider := os.environ.get(D.ENV_PROVIDER):
            self.default_provider = provider
        if _parse_bool(os.environ.get(D.ENV_VERBOSE, "")):
            self.verbose = True

    def save(self, config_path: Path | None = None) -> Path:
        """Save current config to file.

        Args:
            config_path: Optional path override.

        Returns:
            The path written.
        """
        file_path = config_path or self.config_file
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data: dict[str, Any] = {
            "dir_mode": oct(self.dir_mode),
            "verbose": self.verbose,
        }
        if self.default_provider:
            data["default_provider"] = self.default_provider

        with open(file_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)
        return file_path
