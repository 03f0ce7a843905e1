#!/usr/bin/env python3
"""
Neovim Config Installer - CLI Module

Installs the bundled Neovim configuration for the current user:
- detects the package manager (pacman, apt, dnf)
- checks that Neovim is installed
- backs up the existing configuration directory
- copies init.lua into place
- installs language servers, formatters and linters
"""

from dataclasses import asdict
import json
import logging
import os
import traceback

import click
from dotenv import find_dotenv, load_dotenv

from nvim_installer.helpers import CommandRunner, InstallerError
from nvim_installer.installers import (
    BaseInstaller,
    ConfigInstaller,
    DependencyInstaller,
    EditorInstaller,
    InstallerConfig,
    PackageManager,
    detect_package_manager,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

NEXT_STEPS = """
=== Setup complete! ===

Next steps:
1. Open Neovim: nvim
2. Lazy.nvim will auto-install plugins (wait for it to finish)
3. Run :Mason to check LSP server status
4. Restart Neovim
"""

NOTES = [
    "Note: First launch will have some errors - this is normal!",
    "Everything will work after plugins finish installing.",
]

KEYBINDINGS = [
    ("<Space>ff", "Find files"),
    ("<Space>fg", "Live grep"),
    ("<Space>e", "File explorer"),
    ("<Space>o", "Oil (directory editor)"),
    ("<Space>lg", "Lazygit"),
    ("<C-\\>", "Toggle terminal"),
]


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class NvimOrchestrator:
    """Runs the installation steps in order"""

    def __init__(self, runner: CommandRunner = None):
        load_dotenv(find_dotenv(usecwd=True))
        self.runner = runner or CommandRunner()
        self.config = InstallerConfig(
            config_dir=os.getenv("NVIM_INSTALLER_CONFIG_DIR")
            or BaseInstaller.get_default_config_dir(),
            source_file=os.getenv("NVIM_INSTALLER_SOURCE")
            or BaseInstaller.get_default_source_file(),
            editor=os.getenv("NVIM_INSTALLER_EDITOR") or "nvim",
            package_manager=os.getenv("NVIM_INSTALLER_PACKAGE_MANAGER") or None,
            keep_going=env_flag("NVIM_INSTALLER_KEEP_GOING"),
        )
        self._package_manager = None

    @property
    def package_manager(self) -> PackageManager:
        """Configured or detected package manager, resolved once per run"""
        if self._package_manager is None:
            if self.config.package_manager:
                try:
                    self._package_manager = PackageManager(self.config.package_manager.lower())
                except ValueError as e:
                    raise click.UsageError(
                        f"Invalid package manager: {self.config.package_manager}"
                    ) from e
            else:
                self._package_manager = detect_package_manager(self.runner)

        return self._package_manager

    def get_installers(self) -> dict:
        return {
            "editor": EditorInstaller(self.config, self.runner),
            "config": ConfigInstaller(self.config, self.runner),
            "dependencies": DependencyInstaller(self.config, self.runner, self.package_manager),
        }

    def run(self) -> dict:
        """Execute all steps, any failure aborts the run"""
        click.echo("=== Neovim Config Installer ===")
        click.echo("")
        logger.debug("Configuration: %s", json.dumps(asdict(self.config), indent=4))

        installers = self.get_installers()
        click.echo(f"Detected package manager: {self.package_manager.value}")
        click.echo("")

        editor: EditorInstaller = installers["editor"]
        editor.check_precondition()

        config: ConfigInstaller = installers["config"]
        config.check_source()
        config.backup_existing()
        config.install_config()

        click.echo("")
        click.echo("=== Installing dependencies ===")
        click.echo("")
        installers["dependencies"].install_dependencies()

        print_summary()
        return installers


def print_summary():
    """Final instructions for the user"""
    click.echo(NEXT_STEPS)
    for note in NOTES:
        click.echo(f"⚠️ {note}")

    click.echo("")
    click.echo("Keybindings:")
    for key, action in KEYBINDINGS:
        click.echo(f"  {key:<9} - {action}")

    click.echo("")
    click.echo("Happy vimming! 🚀")


def print_messages(installers: dict):
    for name, installer in installers.items():
        for warning in installer.warnings:
            click.echo(f"⚠️ Warning during {name} installation: {warning}")

        for info in installer.infos:
            click.echo(f"ℹ️ Info during {name} installation: {info}")


# --- CLI Implementation ---
@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (debug logging)")
@click.pass_context
def cli(ctx, verbose):
    """Neovim Config Installer"""
    ctx.ensure_object(dict)

    # Set logging level based on verbose flag
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    ctx.obj["orchestrator"] = NvimOrchestrator(ctx.obj.get("runner"))
    ctx.obj["orchestrator"].config.verbose = verbose

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


@cli.command()
@click.option(
    "--keep-going", is_flag=True, help="Run every dependency command even if one of them fails"
)
@click.pass_context
def install(ctx, keep_going):
    """
    Install the configuration and its dependencies (default command)
    """
    orchestrator: NvimOrchestrator = ctx.obj["orchestrator"]
    # cli argument has priority over environment variable
    if keep_going:
        orchestrator.config.keep_going = True

    try:
        installers = orchestrator.run()
    except InstallerError as e:
        click.echo(f"✗ {e}", err=True)
        if orchestrator.config.verbose:
            traceback.print_exc()
        ctx.exit(e.exit_code)

    if any(installer.warnings or installer.infos for installer in installers.values()):
        click.echo("=====================================")
        print_messages(installers)


@cli.command()
@click.pass_context
def status(ctx):
    """
    Display the status of the editor, the configuration and the dependencies
    """
    orchestrator: NvimOrchestrator = ctx.obj["orchestrator"]
    installers = orchestrator.get_installers()

    for name, installer in installers.items():
        click.echo(f"\nStatus for {name}:")
        for k, v in installer.get_status().items():
            if v is None or isinstance(v, bool):
                v = {None: "❓", True: "✅", False: "❌"}[v]
            click.echo(f"  {k}: {v}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
