"""Tests for the llmctxenv CLI."""

from __future__ import annotations

import hashlib
import os
import stat
import sys

import pytest
import yaml
from typer.testing import CliRunner

from llmctxenv import __version__
from llmctxenv.cli.app import app
from llmctxenv.core.config import get_context_root
from llmctxenv.core.errors import EnvironmentUnavailableError

runner = CliRunner()

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX paths")


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Isolated root, home and project working directory."""
    base = tmp_path.resolve()
    root = base / "root"
    home = base / "home"
    project = home / "Projects" / "app.v2"
    project.mkdir(parents=True)

    monkeypatch.setenv("LLMCTXENV_ROOT", str(root))
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("LLMCTXENV_PROVIDER", raising=False)
    monkeypatch.delenv("LLMCTXENV_VERBOSE", raising=False)
    monkeypatch.chdir(project)

    get_context_root().reset()
    yield root
    get_context_root().reset()


def local_dir(root, provider="claude"):
    return root / "local" / provider / "!projects-app-v2"


class TestList:
    """llmctxenv list"""

    def test_creates_missing_directory(self, env):
        result = runner.invoke(app, ["list", "--provider", "claude"])

        assert result.exit_code == 0, result.output
        assert result.output == ""
        directory = local_dir(env)
        assert directory.is_dir()
        assert stat.S_IMODE(directory.stat().st_mode) == 0o700

    def test_lists_sorted_files_only(self, env):
        directory = local_dir(env)
        directory.mkdir(parents=True)
        (directory / "CLAUDE.md").write_text("a")
        (directory / "AGENTS.md").write_text("b")
        (directory / "notes").mkdir()

        result = runner.invoke(app, ["list", "-c", "claude"])

        assert result.exit_code == 0, result.output
        assert result.output == "files:\nAGENTS.md\nCLAUDE.md\n"

    def test_empty_directory(self, env):
        local_dir(env).mkdir(parents=True)

        result = runner.invoke(app, ["list", "--cli", "claude"])

        assert result.exit_code == 0
        assert result.output == "files:\n\n"

    def test_global(self, env):
        result = runner.invoke(app, ["list", "-c", "gemini-cli", "--global"])

        assert result.exit_code == 0
        assert (env / "global" / "gemini-cli").is_dir()
        assert not (env / "local").exists()

    def test_missing_provider(self, env):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "--provider flag must be not empty" in result.output
        assert not env.exists()

    def test_unknown_provider(self, env):
        result = runner.invoke(app, ["list", "-c", "cursor"])

        assert result.exit_code == 1
        assert "unknown provider 'cursor'" in result.output

    def test_provider_from_environment(self, env, monkeypatch):
        monkeypatch.setenv("LLMCTXENV_PROVIDER", "codex")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert local_dir(env, "codex").is_dir()

    def test_provider_from_config_file(self, env):
        env.mkdir(parents=True)
        (env / "config.yaml").write_text("default_provider: goose\n")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert local_dir(env, "goose").is_dir()

    def test_dir_mode_from_config_file(self, env):
        env.mkdir(parents=True)
        (env / "config.yaml").write_text('dir_mode: "0o750"\n')

        old_umask = os.umask(0o022)
        try:
            result = runner.invoke(app, ["list", "-c", "claude"])
        finally:
            os.umask(old_umask)

        assert result.exit_code == 0
        assert stat.S_IMODE(local_dir(env).stat().st_mode) == 0o750


class TestPath:
    def test_local(self, env):
        result = runner.invoke(app, ["path", "-c", "claude"])

        assert result.exit_code == 0
        assert result.output == f"{local_dir(env)}\n"
        assert not env.exists()

    def test_global(self, env):
        result = runner.invoke(app, ["path", "-c", "crush", "-g"])

        assert result.exit_code == 0
        assert result.output == f"{env / 'global' / 'crush'}\n"


class TestHash:
    def test_prints_digests(self, env):
        directory = env / "global" / "claude"
        directory.mkdir(parents=True)
        (directory / "CLAUDE.md").write_bytes(b"global context")
        (directory / "empty.md").write_bytes(b"")

        result = runner.invoke(app, ["hash", "-c", "claude", "--global"])

        assert result.exit_code == 0, result.output
        assert result.output == (
            f"{hashlib.sha256(b'global context').hexdigest()}  CLAUDE.md\n"
            f"{hashlib.sha256(b'').hexdigest()}  empty.md\n"
        )

    def test_missing_directory(self, env):
        result = runner.invoke(app, ["hash", "-c", "claude"])

        assert result.exit_code == 0
        assert "No context directory" in result.output
        assert not env.exists()

    def test_broken_symlink_fails(self, env):
        directory = local_dir(env)
        directory.mkdir(parents=True)
        (directory / "dangling.md").symlink_to(directory / "nowhere")

        result = runner.invoke(app, ["hash", "-c", "claude"])

        assert result.exit_code == 1
        assert "dangling.md" in result.output


class TestProviders:
    def test_lists_every_provider(self, env):
        result = runner.invoke(app, ["providers"])

        assert result.exit_code == 0
        for name in ("claude", "gemini-cli", "qwen-cli", "codex", "opencode", "goose", "crush"):
            assert name in result.output
        assert ".goosehints" in result.output


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output == f"llmctxenv version: {__version__}\n"


class TestConfigCommands:
    """llmctxenv config ..."""

    def test_show_defaults(self, env):
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "default_provider: (none)" in result.output
        assert "dir_mode: 0o700" in result.output
        assert "No config file" in result.output

    def test_set_provider(self, env):
        result = runner.invoke(app, ["config", "set", "provider", "Gemini-CLI"])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load((env / "config.yaml").read_text())
        assert data["default_provider"] == "gemini-cli"

        show = runner.invoke(app, ["config", "show"])
        assert "default_provider: gemini-cli" in show.output

    def test_clear_provider(self, env):
        runner.invoke(app, ["config", "set", "provider", "codex"])
        result = runner.invoke(app, ["config", "set", "provider", "none"])

        assert result.exit_code == 0
        data = yaml.safe_load((env / "config.yaml").read_text())
        assert "default_provider" not in data

    def test_set_unknown_provider(self, env):
        result = runner.invoke(app, ["config", "set", "provider", "cursor"])

        assert result.exit_code == 1
        assert not (env / "config.yaml").exists()

    def test_set_dir_mode(self, env):
        result = runner.invoke(app, ["config", "set", "dir_mode", "0750"])

        assert result.exit_code == 0
        data = yaml.safe_load((env / "config.yaml").read_text())
        assert data["dir_mode"] == "0o750"

    def test_set_invalid_dir_mode(self, env):
        result = runner.invoke(app, ["config", "set", "dir_mode", "rwx"])

        assert result.exit_code == 1
        assert "Invalid directory mode" in result.output

    def test_set_unknown_key(self, env):
        result = runner.invoke(app, ["config", "set", "color", "blue"])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output

    def test_init(self, env):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        data = yaml.safe_load((env / "config.yaml").read_text())
        assert data == {"dir_mode": "0o700", "verbose": False}

    def test_init_refuses_to_overwrite(self, env):
        env.mkdir(parents=True)
        (env / "config.yaml").write_text("default_provider: codex\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert (env / "config.yaml").read_text() == "default_provider: codex\n"

    def test_init_force(self, env):
        env.mkdir(parents=True)
        (env / "config.yaml").write_text("default_provider: codex\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert "default_provider" not in yaml.safe_load((env / "config.yaml").read_text())

    def test_path_with_brackets_is_printed_verbatim(self, env, monkeypatch):
        root = env.parent / "[bold]root"
        monkeypatch.setenv("LLMCTXENV_ROOT", str(root))
        get_context_root().reset()

        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert f"Root: {root}" in result.output
        assert f"Config: {root / 'config.yaml'}" in result.output

    def test_show_with_brackets_in_root(self, env, monkeypatch):
        root = env.parent / "[red]ctx"
        monkeypatch.setenv("LLMCTXENV_ROOT", str(root))
        get_context_root().reset()

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert f"root: {root}" in result.output


class TestUnavailableHome:
    """No root override and no home directory."""

    @pytest.fixture
    def no_home(self, env, monkeypatch):
        def home_dir():
            raise EnvironmentUnavailableError("get current user home directory: $HOME is not defined")

        monkeypatch.delenv("LLMCTXENV_ROOT")
        monkeypatch.setattr(get_context_root(), "_home_dir", home_dir)
        get_context_root().reset()

    @pytest.mark.parametrize(
        "args",
        [["list", "-c", "claude"], ["path", "-c", "claude", "-g"], ["config", "show"], ["config", "init"]],
    )
    def test_reports_error(self, no_home, args):
        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error: get current user home directory" in result.output
