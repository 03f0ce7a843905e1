from abc import ABC, abstractmethod
from dataclasses import dataclass
import os

from nvim_installer.helpers import CommandRunner

ETC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "etc")


@dataclass
class InstallerConfig:
    config_dir: str
    source_file: str
    editor: str = "nvim"
    package_manager: str | None = None
    keep_going: bool = False
    verbose: bool = False


class BaseInstaller(ABC):
    """Base class for all component installers"""

    def __init__(self, config: InstallerConfig, runner: CommandRunner):
        self.config = config
        self.runner = runner
        self.warnings = []
        self.infos = []

    @abstractmethod
    def install(self):
        """Install the component"""
        pass

    @abstractmethod
    def get_status(self) -> dict:
        """Get component status information"""
        pass

    @staticmethod
    def get_default_config_dir() -> str:
        """Neovim configuration directory of the current user"""
        return os.path.join(os.path.expanduser("~"), ".config", "nvim")

    @staticmethod
    def get_default_source_file() -> str:
        """The configuration file shipped with the installer"""
        return os.path.join(ETC_DIR, "init.lua")
