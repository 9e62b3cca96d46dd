"""Main CLI application using Typer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from .. import __version__
from ..context import CONTEXT_FILES, Provider, get_resolver, parse_provider
from ..core import defaults as D
from ..core.config import Config
from ..core.errors import HashError, LLMCtxEnvError
from ..fileio import hash_file, mkdir_all
from .commands import config as config_commands
from .output import console, create_table, print_error, print_info, print_plain

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="llmctxenv",
    help="Manages the LLM CLIs context environment.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(config_commands.app, name="config")

ProviderOption = Annotated[
    Optional[str],
    typer.Option(
        "--provider",
        "--cli",
        "-c",
        help="Provider whose context files to manage (e.g. claude, gemini-cli)",
    ),
]
GlobalOption = Annotated[
    bool,
    typer.Option("--global", "-g", help="Use the global context instead of the project's"),
]


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=D.LOG_FORMAT)
    logging.getLogger("llmctxenv").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"llmctxenv version: {__version__}", highlight=False)
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Set verbose mode"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show llmctxenv version.",
        ),
    ] = False,
):
    """Manages the LLM CLIs context environment.

    Examples:
        llmctxenv list -c claude          # Project context files
        llmctxenv list -c claude --global # Global context files
        llmctxenv path -c gemini-cli      # Where they live
        llmctxenv hash -c codex           # SHA-256 of each file
        llmctxenv config show             # Current configuration
    """
    configure_logging(verbose)


def _load_config() -> Config:
    config = config_commands.load_config()
    if config.verbose:
        logging.getLogger("llmctxenv").setLevel(logging.DEBUG)
    return config


def _resolve_dir(provider_name: str | None, use_global: bool, config: Config) -> tuple[Provider, Path]:
    """Resolve the context directory, exiting with an error message on failure."""
    try:
        provider = parse_provider(provider_name or config.default_provider)
        resolver = get_resolver()
        directory = resolver.global_dir(provider) if use_global else resolver.local_dir(provider)
    except LLMCtxEnvError as e:
        print_error(str(e))
        raise typer.Exit(1)
    return provider, directory


def _list_files(directory: Path) -> list[str]:
    """Sorted names of the non-directory entries of ``directory``."""
    with os.scandir(directory) as it:
        return sorted(entry.name for entry in it if not entry.is_dir())


@app.command("list")
def list_files(
    provider: ProviderOption = None,
    use_global: GlobalOption = False,
):
    """List managed system context files.

    The context directory is created (owner-only) on first use.
    """
    config = _load_config()
    prov, directory = _resolve_dir(provider, use_global, config)
    logger.debug("list: provider=%s global=%s dir=%s", prov, use_global, directory)

    if not directory.exists():
        try:
            mkdir_all(directory, config.dir_mode)
        except OSError as e:
            print_error(f"mkdir all {directory} path: {e}")
            raise typer.Exit(1)
        logger.debug("created context directory %s", directory)
        return

    try:
        files = _list_files(directory)
    except OSError as e:
        print_error(f"read dir {directory}: {e}")
        raise typer.Exit(1)

    print_plain("files:\n" + "\n".join(files))


@app.command("path")
def show_path(
    provider: ProviderOption = None,
    use_global: GlobalOption = False,
):
    """Print the context directory without creating it."""
    config = _load_config()
    _, directory = _resolve_dir(provider, use_global, config)
    print_plain(str(directory))


@app.command("hash")
def hash_files(
    provider: ProviderOption = None,
    use_global: GlobalOption = False,
):
    """Print the SHA-256 digest of each context file."""
    config = _load_config()
    _, directory = _resolve_dir(provider, use_global, config)

    if not directory.exists():
        print_info(f"No context directory: {escape(str(directory))}")
        return

    try:
        files = _list_files(directory)
    except OSError as e:
        print_error(f"read dir {directory}: {e}")
        raise typer.Exit(1)

    try:
        for name in files:
            try:
                digest = hash_file(directory / name)
            except HashError as e:
                print_error(str(e))
                raise typer.Exit(1)
            print_plain(f"{digest}  {name}")
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        raise typer.Exit(130)


@app.command("providers")
def list_providers():
    """List known providers and their context files."""
    table = create_table("Providers", [("Provider", "cyan"), ("Context files", "")])
    for prov in Provider:
        table.add_row(prov.value, ", ".join(CONTEXT_FILES[prov]))
    console.print(table)


if __name__ == "__main__":
    app()
