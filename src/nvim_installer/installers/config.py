import os

import click

from nvim_installer.helpers import CommandRunner, FileHelper, MissingFileError
from nvim_installer.installers.base import BaseInstaller, InstallerConfig


class ConfigInstaller(BaseInstaller):
    """Installer for the Neovim configuration directory"""

    def __init__(self, config: InstallerConfig, runner: CommandRunner):
        super().__init__(config, runner)
        self.config_dir = config.config_dir
        self.source_file = config.source_file
        self.backup_path = None

    @property
    def target_file(self) -> str:
        return os.path.join(self.config_dir, os.path.basename(self.source_file))

    def check_source(self):
        """Fail before touching the filesystem if there is nothing to install"""
        if not os.path.isfile(self.source_file):
            click.echo(
                f"   ✗ Error: {os.path.basename(self.source_file)} not found in "
                f"{os.path.dirname(self.source_file)}"
            )
            raise MissingFileError(f"Source configuration not found: {self.source_file}")

    def backup_existing(self):
        """Rename an existing configuration directory"""
        self.backup_path = FileHelper.backup_existing(self.config_dir)
        if self.backup_path:
            click.echo(f"   📦 Backed up existing config to {self.backup_path}")
            self.infos.append(f"Previous configuration saved to {self.backup_path}")

    def install_config(self):
        """Create the configuration directory and copy the file"""
        target = FileHelper.install_config(self.source_file, self.config_dir)
        click.echo(f"   ✓ Copied {os.path.basename(target)}")

    def install(self):
        self.check_source()
        self.backup_existing()
        self.install_config()

    def get_status(self) -> dict:
        return {
            "Source config present": os.path.isfile(self.source_file),
            "Config directory present": os.path.isdir(self.config_dir),
            "Config installed": FileHelper.files_identical(self.source_file, self.target_file),
            "Backups": len(FileHelper.list_backups(self.config_dir)),
        }
