from datetime import datetime
import logging
import os
import shutil
import subprocess

import click

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class InstallerError(Exception):
    """Base error of the installer, carries the process exit code"""

    exit_code = 1


class MissingDependencyError(InstallerError):
    """A required binary is not installed"""

    pass


class MissingFileError(InstallerError):
    """The source configuration file does not exist"""

    pass


class InstallerIOError(InstallerError):
    """Backup, mkdir or copy failure"""

    pass


class CommandFailureError(InstallerError):
    """An external command exited with non-zero code"""

    def __init__(self, message: str, command: list = None, returncode: int = 1):
        super().__init__(message)
        self.command = command or []
        self.exit_code = returncode


class CommandRunner:
    """Executes external commands, the only process boundary of the installer"""

    def which(self, program: str) -> str | None:
        """Path of the executable or None if it is not on PATH"""
        return shutil.which(program)

    def run(self, command: list, check: bool = True, suppress_output: bool = False) -> int:
        """
        Run command with its output streamed line by line

        Args:
            command (list): Program and its arguments
            check (bool, optional): Whether to raise an error on non-zero exit code. Defaults to True.
            suppress_output (bool, optional): Whether to suppress command terminal output. Defaults to False.

        Returns:
            int: The return code of the command
        """
        command_str = " ".join(command)
        logger.debug("Running command: %s", command_str)
        if not suppress_output:
            click.echo(f"   ⚡Starting command at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
            click.echo(f"    > Running: {command_str}")

        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            # same code as the shell for a missing program
            returncode = 127
            click.echo(f"    ⚠️ Command not found: {command[0]}")
            if check:
                raise CommandFailureError(
                    f"Command not found: {command[0]}", command, returncode
                ) from e
            return returncode

        with process:
            for line in process.stdout:
                if not suppress_output:
                    click.echo("    |\t" + line.rstrip())

            returncode = process.wait()
        logger.debug("Command finished with code %s: %s", returncode, command_str)

        if not suppress_output:
            click.echo(f"   ⚡Finished command at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        if check and returncode != 0:
            click.echo(f"    ⚠️ Command failed with exit code {returncode}!")
            raise CommandFailureError(
                f"Command failed with exit code {returncode}: {command_str}", command, returncode
            )

        return returncode


class FileHelper:
    """Helper class for the configuration directory operations"""

    @staticmethod
    def get_backup_path(path: str, timestamp: datetime = None) -> str:
        """Backup location of the path for the given time"""
        timestamp = timestamp or datetime.now()
        return f"{path.rstrip(os.sep)}.backup.{timestamp.strftime(BACKUP_TIMESTAMP_FORMAT)}"

    @staticmethod
    def list_backups(path: str) -> list:
        """Existing backups of the path, oldest first"""
        path = path.rstrip(os.sep)
        parent = os.path.dirname(path) or "."
        prefix = os.path.basename(path) + ".backup."
        if not os.path.isdir(parent):
            return []

        return sorted(
            os.path.join(parent, entry) for entry in os.listdir(parent) if entry.startswith(prefix)
        )

    @staticmethod
    def backup_existing(path: str, timestamp: datetime = None) -> str | None:
        """
        Move the existing path out of the way

        Returns:
            str | None: The backup path or None if there was nothing to back up
        """
        if not os.path.lexists(path):
            logger.debug("Nothing to back up at %s", path)
            return None

        backup_path = FileHelper.get_backup_path(path, timestamp)
        if os.path.lexists(backup_path):
            raise InstallerIOError(f"Backup location already exists: {backup_path}")

        try:
            os.rename(path, backup_path)
        except OSError as e:
            raise InstallerIOError(f"Failed to back up {path} to {backup_path}: {e}") from e

        logger.info("Moved %s to %s", path, backup_path)
        return backup_path

    @staticmethod
    def install_config(source_file: str, dest_dir: str) -> str:
        """
        Copy the source file into the destination directory

        Returns:
            str: Path of the installed file
        """
        if not os.path.isfile(source_file):
            raise MissingFileError(
                f"{os.path.basename(source_file)} not found in {os.path.dirname(source_file)}"
            )

        target = os.path.join(dest_dir, os.path.basename(source_file))
        try:
            os.makedirs(dest_dir, exist_ok=True)
            shutil.copyfile(source_file, target)
        except OSError as e:
            raise InstallerIOError(f"Failed to copy {source_file} to {target}: {e}") from e

        logger.info("Copied %s to %s", source_file, target)
        return target

    @staticmethod
    def files_identical(first: str, second: str) -> bool:
        """Check if both files exist with the same content"""
        if not (os.path.isfile(first) and os.path.isfile(second)):
            return False

        with open(first, "rb") as f1, open(second, "rb") as f2:
            return f1.read() == f2.read()
