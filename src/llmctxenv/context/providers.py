"""LLM CLI providers and their context file conventions."""

from __future__ import annotations

from enum import Enum

from ..core.errors import ProviderError


class Provider(str, Enum):
    """An LLM CLI ecosystem with its own context file convention."""

    CLAUDE_CODE = "claude"  # https://docs.anthropic.com/en/docs/claude-code/
    GEMINI_CLI = "gemini-cli"  # https://github.com/google-gemini/gemini-cli
    QWEN_CLI = "qwen-cli"  # https://github.com/QwenLM/qwen-code
    CODEX = "codex"  # https://github.com/openai/codex
    OPENCODE = "opencode"  # https://github.com/sst/opencode
    GOOSE = "goose"  # https://github.com/block/goose
    CRUSH = "crush"  # https://github.com/charmbracelet/crush

    def __str__(self) -> str:
        return self.value


# Filenames that hold the system context for each provider
CONTEXT_FILES: dict[Provider, list[str]] = {
    Provider.CLAUDE_CODE: ["CLAUDE.md"],
    Provider.GEMINI_CLI: ["GEMINI.md"],
    Provider.QWEN_CLI: ["QWEN.md"],
    Provider.CODEX: ["AGENTS.md"],
    Provider.OPENCODE: ["AGENTS.md"],
    Provider.GOOSE: [".goosehints"],
    Provider.CRUSH: ["CRUSH.md"],
}


def parse_provider(name: str | None) -> Provider:
    """Parse a provider name.

    Raises:
        ProviderError: If the name is empty or not a known provider.
    """
    if not name:
        raise ProviderError("--provider flag must be not empty")
    try:
        return Provider(name.lower())
    except ValueError:
        valid = ", ".join(p.value for p in Provider)
        raise ProviderError(f"unknown provider {name!r}. Valid providers: {valid}") from None


def context_files(provider: Provider | str) -> list[str]:
    """Return the canonical context filenames for a provider."""
    return list(CONTEXT_FILES.get(parse_provider(str(provider)), []))
