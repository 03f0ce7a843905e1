from dataclasses import dataclass
from enum import Enum
import logging

import click

from nvim_installer.helpers import CommandFailureError, CommandRunner
from nvim_installer.installers.base import BaseInstaller, InstallerConfig

logger = logging.getLogger(__name__)


class PackageManager(Enum):
    """Package managers with a known dependency set"""

    PACMAN = "pacman"
    APT = "apt"
    DNF = "dnf"
    UNKNOWN = "unknown"


# probing order
SUPPORTED_PACKAGE_MANAGERS = [PackageManager.PACMAN, PackageManager.APT, PackageManager.DNF]


@dataclass(frozen=True)
class InstallCommand:
    program: str
    args: tuple
    description: str = ""

    @property
    def argv(self) -> list:
        return [self.program, *self.args]


NPM_GLOBAL_TOOLS = ("typescript", "typescript-language-server", "eslint")

DEPENDENCY_SETS = {
    PackageManager.PACMAN: (
        InstallCommand(
            "sudo",
            (
                "pacman", "-S", "--needed",
                "base-devel", "git", "ripgrep", "fd", "lazygit",
                "lua-language-server", "stylua", "luacheck",
                "rust-analyzer",
                "python-pyright", "python-ruff",
                "clang",
                "jdk-openjdk",
                "nodejs", "npm",
            ),
            "system packages",
        ),
        InstallCommand(
            "sudo",
            ("npm", "install", "-g", *NPM_GLOBAL_TOOLS),
            "formatters and linters via npm",
        ),
    ),
    PackageManager.APT: (
        InstallCommand("sudo", ("apt", "update"), "package cache"),
        InstallCommand(
            "sudo",
            (
                "apt", "install", "-y",
                "build-essential", "git", "ripgrep", "fd-find", "lazygit",
                "clang", "clangd",
                "python3-pip",
                "default-jdk",
                "nodejs", "npm",
            ),
            "system packages",
        ),
        InstallCommand(
            "sudo",
            ("npm", "install", "-g", "lua-language-server", *NPM_GLOBAL_TOOLS),
            "language servers via npm",
        ),
        InstallCommand(
            "pip3",
            ("install", "--user", "pyright", "ruff", "stylua"),
            "python tools via pip",
        ),
    ),
    PackageManager.DNF: (
        InstallCommand(
            "sudo",
            (
                "dnf", "install", "-y",
                "@development-tools", "git", "ripgrep", "fd-find", "lazygit",
                "clang", "clang-tools-extra",
                "python3-pip",
                "java-latest-openjdk-devel",
                "nodejs", "npm",
            ),
            "system packages",
        ),
        InstallCommand(
            "sudo",
            ("npm", "install", "-g", "lua-language-server", *NPM_GLOBAL_TOOLS),
            "language servers via npm",
        ),
        InstallCommand(
            "pip3",
            ("install", "--user", "pyright", "ruff"),
            "python tools via pip",
        ),
    ),
    PackageManager.UNKNOWN: (),
}

MANUAL_INSTRUCTIONS = [
    "- git, gcc, make",
    "- ripgrep, fd, lazygit",
    "- Language servers: lua-language-server, nixd, rust-analyzer, pyright, clangd, etc.",
    "- Formatters: stylua, nixfmt",
    "- Linters: luacheck, ruff, cppcheck, eslint",
]


def detect_package_manager(runner: CommandRunner) -> PackageManager:
    """First supported package manager found on PATH"""
    for manager in SUPPORTED_PACKAGE_MANAGERS:
        if runner.which(manager.value):
            logger.debug("Found package manager: %s", manager.value)
            return manager

    return PackageManager.UNKNOWN


class DependencyInstaller(BaseInstaller):
    """Installer for language servers, formatters and linters"""

    def __init__(self, config: InstallerConfig, runner: CommandRunner, kind: PackageManager):
        super().__init__(config, runner)
        self.kind = kind
        self.keep_going = config.keep_going

    def get_commands(self) -> tuple:
        return DEPENDENCY_SETS[self.kind]

    def print_manual_instructions(self):
        click.echo("   ⚠️ Unknown package manager. Install dependencies manually:")
        for line in MANUAL_INSTRUCTIONS:
            click.echo(f"    {line}")

    def install_dependencies(self):
        """
        Run the dependency commands of the package manager in order.

        Stops at the first failing command unless keep_going is set, then
        every command runs and the first failure is raised at the end.
        """
        if self.kind == PackageManager.UNKNOWN:
            self.print_manual_instructions()
            self.warnings.append("Dependencies must be installed manually")
            return

        failures = []
        for command in self.get_commands():
            click.echo(f"   📦 Installing {command.description}...")
            try:
                self.runner.run(command.argv)
            except CommandFailureError as e:
                if not self.keep_going:
                    raise
                self.warnings.append(str(e))
                failures.append(e)

        if failures:
            raise CommandFailureError(
                f"{len(failures)} of {len(self.get_commands())} dependency commands failed",
                failures[0].command,
                failures[0].exit_code,
            )

        click.echo("   ✓ Dependencies installed")

    def install(self):
        self.install_dependencies()

    def get_status(self) -> dict:
        return {
            "Package manager": self.kind.value,
            "Supported package manager": self.kind != PackageManager.UNKNOWN,
        }
