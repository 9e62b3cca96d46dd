"""Provider context directory resolution."""

from .providers import CONTEXT_FILES, Provider, context_files, parse_provider
from .resolver import ContextPathResolver, get_resolver, global_dir, local_dir, project_relpath
from .sanitize import sanitize_dirname

__all__ = [
    # Providers
    "Provider",
    "CONTEXT_FILES",
    "context_files",
    "parse_provider",
    # Resolver
    "ContextPathResolver",
    "get_resolver",
    "global_dir",
    "local_dir",
    "project_relpath",
    # Sanitization
    "sanitize_dirname",
]
