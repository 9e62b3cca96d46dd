"""Default configuration values for llmctxenv.

All configurable defaults are defined here. These can be overridden by:
1. Config file (<root>/config.yaml)
2. Environment variables
3. CLI flags

Priority (highest to lowest):
CLI flags > Environment > Config file > Defaults
"""

from __future__ import annotations

# =============================================================================
# ENVIRONMENT
# =============================================================================

# Overrides the context root directory when set and non-empty
ENV_ROOT: str = "LLMCTXENV_ROOT"

# Provider used when --provider is omitted
ENV_PROVIDER: str = "LLMCTXENV_PROVIDER"

# Enables debug logging ("1", "true", "yes")
ENV_VERBOSE: str = "LLMCTXENV_VERBOSE"

# =============================================================================
# LAYOUT
# =============================================================================

# Root directory name under the user's home directory
ROOT_DIRNAME: str = ".llmctxenv"

# Subdirectory holding one directory per provider
GLOBAL_DIRNAME: str = "global"

# Subdirectory holding one directory per provider per project
LOCAL_DIRNAME: str = "local"

# Config file name inside the root directory
CONFIG_FILENAME: str = "config.yaml"

# =============================================================================
# FILESYSTEM
# =============================================================================

# Mode for context directories created on first use (owner-only)
DEFAULT_DIR_MODE: int = 0o700

# Mode for intermediate directories created while copying trees
COPY_DIR_MODE: int = 0o755

# Streaming chunk size for hashing and copying (32 KiB)
COPY_BUFFER_SIZE: int = 32 * 1024

# =============================================================================
# CLI
# =============================================================================

# Provider used when neither flag nor config nor env names one
DEFAULT_PROVIDER: str | None = None

# Debug logging
DEFAULT_VERBOSE: bool = False

LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_default_config_yaml() -> str:
    """Generate the default configuration as YAML.

    Returns:
        YAML string with all default settings and documentation.
    """
    return """# llmctxenv Configuration
# =======================
#
# Settings can also be overridden by:
#   - Environment variables: LLMCTXENV_*
#   - CLI flags (highest priority)
#
# The root directory itself is chosen with LLMCTXENV_ROOT
# (default: ~/.llmctxenv) and cannot be set from this file.

# Provider used when --provider is omitted
# (claude, gemini-cli, qwen-cli, codex, opencode, goose, crush)
# default_provider: claude

# Mode for context directories created on first use
dir_mode: "0o700"

# Enable debug logging
verbose: false
"""
