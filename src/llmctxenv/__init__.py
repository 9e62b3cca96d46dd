"""llmctxenv: manage per-provider context files of LLM CLIs.

llmctxenv keeps the context files read by LLM command-line tools
(CLAUDE.md, GEMINI.md, AGENTS.md, ...) under one root directory:
- Global context: one directory per provider
- Local context: one directory per provider per project
- Helpers for hashing and copying context files

Usage:
    # CLI
    $ llmctxenv list --provider claude
    $ llmctxenv list --provider claude --global

    # Python API
    from llmctxenv import Provider, local_dir, hash_file

    path = local_dir(Provider.CLAUDE_CODE)
"""

try:
    from importlib.metadata import version as _get_version

    __version__ = _get_version("llmctxenv")
except Exception:
    __version__ = "0.0.0-dev"


# Core exports (lazy imports for faster startup)
def __getattr__(name: str):
    """Lazy import for main classes and functions."""
    if name in ("Provider", "ContextPathResolver", "global_dir", "local_dir", "sanitize_dirname"):
        from . import context

        return getattr(context, name)
    if name in ("hash_file", "copy_file", "copy_tree"):
        from . import fileio

        return getattr(fileio, name)
    if name == "Config":
        from .core.config import Config

        return Config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "Provider",
    "ContextPathResolver",
    "global_dir",
    "local_dir",
    "sanitize_dirname",
    "hash_file",
    "copy_file",
    "copy_tree",
    "Config",
]
