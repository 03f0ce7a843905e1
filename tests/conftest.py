"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from nvim_installer.helpers import CommandFailureError, CommandRunner
from nvim_installer.installers import InstallerConfig


class RecordingRunner(CommandRunner):
    """Command runner that records commands instead of executing them."""

    def __init__(self, available=(), returncodes=None):
        self.available = set(available)
        self.returncodes = returncodes or {}
        self.calls = []

    def which(self, program):
        return f"/usr/bin/{program}" if program in self.available else None

    def run(self, command, check=True, suppress_output=False):
        self.calls.append(list(command))
        returncode = self.returncodes.get(tuple(command), 0)
        if check and returncode != 0:
            raise CommandFailureError(
                f"Command failed with exit code {returncode}", list(command), returncode
            )
        return returncode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    """Isolate the tests from the environment of the developer."""
    for name in (
        "NVIM_INSTALLER_CONFIG_DIR",
        "NVIM_INSTALLER_SOURCE",
        "NVIM_INSTALLER_EDITOR",
        "NVIM_INSTALLER_PACKAGE_MANAGER",
        "NVIM_INSTALLER_KEEP_GOING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def home(monkeypatch, tmp_path: Path) -> Path:
    """Return a temporary home directory set as HOME."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def config_dir(home: Path) -> Path:
    return home / ".config" / "nvim"


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Return a source init.lua outside of the home directory."""
    source_dir = tmp_path / "source"
    source_dir.mkdir()
    source = source_dir / "init.lua"
    source.write_text('vim.g.mapleader = " "\n')
    return source


@pytest.fixture
def installer_config(config_dir: Path, source_file: Path) -> InstallerConfig:
    return InstallerConfig(config_dir=str(config_dir), source_file=str(source_file))


@pytest.fixture
def runner() -> RecordingRunner:
    """Return a runner on a host with Neovim and pacman."""
    return RecordingRunner(available={"nvim", "pacman"})
