"""Core module for llmctxenv."""

from . import defaults
from .config import Config, ContextRoot, get_context_root, parse_dir_mode, user_home_dir
from .errors import EnvironmentUnavailableError, HashError, LLMCtxEnvError, ProviderError

__all__ = [
    # Defaults
    "defaults",
    # Config
    "Config",
    "ContextRoot",
    "get_context_root",
    "parse_dir_mode",
    "user_home_dir",
    # Errors
    "LLMCtxEnvError",
    "EnvironmentUnavailableError",
    "HashError",
    "ProviderError",
]
