"""Configuration commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from ...context import parse_provider
from ...core import defaults as D
from ...core.config import Config, parse_dir_mode
from ...core.errors import LLMCtxEnvError, ProviderError
from ..output import console, print_error, print_info, print_success

app = typer.Typer(help="Manage configuration")


def load_config() -> Config:
    """Load the config, exiting with an error message if the root cannot be resolved."""
    try:
        return Config.load()
    except LLMCtxEnvError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("show")
def show_config():
    """Show current configuration."""
    config = load_config()

    console.print("[cyan]Current Configuration[/cyan]\n")
    console.print(f"  root: {escape(str(config.root))}", highlight=False, soft_wrap=True)
    console.print(f"  default_provider: {escape(config.default_provider or '(none)')}", highlight=False)
    console.print(f"  dir_mode: {oct(config.dir_mode)}", highlight=False)
    console.print(f"  verbose: {config.verbose}", highlight=False)
    console.print()

    if config.config_file.exists():
        print_info(f"Config file: {escape(str(config.config_file))}")
    else:
        print_info("No config file (using defaults)")


@app.command("set")
def set_config(
    key: Annotated[str, typer.Argument(help="Config key (provider, dir_mode, verbose)")],
    value: Annotated[str, typer.Argument(help="Config value")],
):
    """Set a configuration value.

    Available keys:
    - provider: Provider used when --provider is omitted ("none" to clear)
    - dir_mode: Mode for created context directories (octal, e.g. 0700)
    - verbose: Enable debug logging (true/false)
    """
    config = load_config()
    key_lower = key.lower()

    if key_lower in ("provider", "default_provider"):
        if value.lower() == "none":
            config.default_provider = None
        else:
            try:
                config.default_provider = parse_provider(value).value
            except ProviderError as e:
                print_error(str(e))
                raise typer.Exit(1)
    elif key_lower == "dir_mode":
        try:
            config.dir_mode = parse_dir_mode(value)
        except ValueError:
            print_error(f"Invalid directory mode: {value}")
            raise typer.Exit(1)
    elif key_lower == "verbose":
        config.verbose = value.lower() in ("true", "1", "yes", "on")
    else:
        print_error(f"Unknown config key: {key}")
        console.print("\nRun 'llmctxenv config set --help' for available keys")
        raise typer.Exit(1)

    config.save()
    print_success(f"Set {escape(key)} = {escape(value)}")


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
):
    """Create a documented config file in the root directory."""
    config_path = load_config().config_file

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(D.get_default_config_yaml())

    print_success(f"Created config: {escape(str(config_path))}")


@app.command("path")
def show_paths():
    """Show configuration file path."""
    config = load_config()
    console.print(f"[bold]Root:[/bold] {escape(str(config.root))}", highlight=False, soft_wrap=True)
    console.print(f"[bold]Config:[/bold] {escape(str(config.config_file))}", highlight=False, soft_wrap=True)
    if config.config_file.exists():
        console.print("  [green]✓ exists[/green]")
    else:
        console.print("  [dim]not created[/dim]")
