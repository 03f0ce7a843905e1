import click

from nvim_installer.helpers import CommandRunner, MissingDependencyError
from nvim_installer.installers.base import BaseInstaller, InstallerConfig


class EditorInstaller(BaseInstaller):
    """Gate for the editor binary, nothing is installed here"""

    def __init__(self, config: InstallerConfig, runner: CommandRunner):
        super().__init__(config, runner)
        self.editor = config.editor

    def is_editor_installed(self) -> bool:
        return self.runner.which(self.editor) is not None

    def check_precondition(self):
        """Fail if the editor is missing"""
        if not self.is_editor_installed():
            click.echo("   ✗ Neovim not found!")
            click.echo("   Install it first, then run this installer again.")
            raise MissingDependencyError(f"Required binary not found: {self.editor}")

        click.echo("   ✓ Neovim found")

    def install(self):
        self.check_precondition()

    def get_status(self) -> dict:
        return {
            f"{self.editor} installed": self.is_editor_installed(),
        }
