from nvim_installer.installers.base import BaseInstaller, InstallerConfig
from nvim_installer.installers.config import ConfigInstaller
from nvim_installer.installers.dependencies import (
    DEPENDENCY_SETS,
    DependencyInstaller,
    InstallCommand,
    PackageManager,
    detect_package_manager,
)
from nvim_installer.installers.editor import EditorInstaller


__all__ = [
    "InstallerConfig",
    "BaseInstaller",
    "ConfigInstaller",
    "DependencyInstaller",
    "EditorInstaller",
    "InstallCommand",
    "PackageManager",
    "DEPENDENCY_SETS",
    "detect_package_manager",
]
