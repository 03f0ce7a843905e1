"""
Tests for the editor precondition and the configuration installer.
"""

import os
import re

import pytest

from nvim_installer.helpers import MissingDependencyError, MissingFileError
from nvim_installer.installers import BaseInstaller, ConfigInstaller, EditorInstaller

from conftest import RecordingRunner

BACKUP_NAME = re.compile(r"^nvim\.backup\.\d{8}_\d{6}$")


class TestEditorInstaller:
    def test_editor_present(self, installer_config, capsys):
        EditorInstaller(installer_config, RecordingRunner({"nvim"})).check_precondition()
        assert "Neovim found" in capsys.readouterr().out

    def test_editor_missing(self, installer_config):
        with pytest.raises(MissingDependencyError) as error:
            EditorInstaller(installer_config, RecordingRunner()).check_precondition()
        assert error.value.exit_code == 1

    def test_custom_editor(self, installer_config):
        installer_config.editor = "nvim-nightly"
        installer = EditorInstaller(installer_config, RecordingRunner({"nvim-nightly"}))
        installer.install()
        assert installer.get_status() == {"nvim-nightly installed": True}


class TestConfigInstaller:
    def test_fresh_install(self, installer_config, config_dir, source_file):
        installer = ConfigInstaller(installer_config, RecordingRunner())
        installer.install()

        assert os.listdir(config_dir) == ["init.lua"]
        assert (config_dir / "init.lua").read_text() == source_file.read_text()
        assert installer.backup_path is None
        assert installer.infos == []

    def test_existing_config_is_backed_up(self, installer_config, config_dir, source_file):
        config_dir.mkdir(parents=True)
        (config_dir / "init.lua").write_text("-- old\n")
        (config_dir / "lua").mkdir()

        installer = ConfigInstaller(installer_config, RecordingRunner())
        installer.install()

        backups = [e for e in os.listdir(config_dir.parent) if e.startswith("nvim.backup.")]
        assert len(backups) == 1
        assert BACKUP_NAME.match(backups[0])
        assert (config_dir.parent / backups[0] / "init.lua").read_text() == "-- old\n"
        assert os.listdir(config_dir) == ["init.lua"]
        assert (config_dir / "init.lua").read_text() == source_file.read_text()
        assert len(installer.infos) == 1

    def test_missing_source_leaves_existing_config(self, installer_config, config_dir, tmp_path):
        config_dir.mkdir(parents=True)
        installer_config.source_file = str(tmp_path / "missing" / "init.lua")

        with pytest.raises(MissingFileError):
            ConfigInstaller(installer_config, RecordingRunner()).install()

        assert os.listdir(config_dir.parent) == ["nvim"]

    def test_status(self, installer_config, config_dir):
        installer = ConfigInstaller(installer_config, RecordingRunner())
        assert installer.get_status() == {
            "Source config present": True,
            "Config directory present": False,
            "Config installed": False,
            "Backups": 0,
        }

        installer.install()
        assert installer.get_status()["Config installed"] is True


class TestDefaults:
    def test_default_config_dir_follows_home(self, home):
        assert BaseInstaller.get_default_config_dir() == str(home / ".config" / "nvim")

    def test_bundled_source_exists(self):
        source = BaseInstaller.get_default_source_file()
        assert os.path.basename(source) == "init.lua"
        assert os.path.isfile(source)
