"""Tests for drillbit.utils.platform module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from drillbit.utils.platform import (
    PLUGINS_DIR_ENV,
    PluginsDirectoryError,
    default_plugins_directory,
    get_os,
    get_plugins_directory,
)


class TestGetOs:
    """Tests for get_os function."""

    @pytest.mark.parametrize(
        ("system", "expected"),
        [("Darwin", "macos"), ("Windows", "windows"), ("Linux", "linux")],
    )
    def test_maps_platform_system(self, system: str, expected: str):
        """Maps platform.system() to an OS name."""
        with patch("drillbit.utils.platform.platform.system", return_value=system):
            assert get_os() == expected


class TestDefaultPluginsDirectory:
    """Tests for default_plugins_directory function."""

    def test_windows(self, monkeypatch, temp_dir: Path):
        """Uses LOCALAPPDATA on Windows."""
        monkeypatch.setenv("LOCALAPPDATA", str(temp_dir))
        with patch("drillbit.utils.platform.get_os", return_value="windows"):
            assert default_plugins_directory() == temp_dir / "Roblox" / "Plugins"

    def test_windows_without_local_app_data(self, monkeypatch):
        """Fails when LOCALAPPDATA is unset."""
        monkeypatch.delenv("LOCALAPPDATA", raising=False)
        with patch("drillbit.utils.platform.get_os", return_value="windows"):
            with pytest.raises(PluginsDirectoryError, match="LOCALAPPDATA"):
                default_plugins_directory()

    def test_macos(self, temp_dir: Path):
        """Uses ~/Documents on macOS."""
        with (
            patch("drillbit.utils.platform.get_os", return_value="macos"),
            patch("drillbit.utils.platform.get_home_directory", return_value=str(temp_dir)),
        ):
            assert default_plugins_directory() == temp_dir / "Documents" / "Roblox" / "Plugins"

    def test_unsupported_os(self):
        """Other operating systems need an explicit directory."""
        with patch("drillbit.utils.platform.get_os", return_value="linux"):
            with pytest.raises(PluginsDirectoryError, match=PLUGINS_DIR_ENV):
                default_plugins_directory()


class TestGetPluginsDirectory:
    """Tests for get_plugins_directory function."""

    def test_override(self, temp_dir: Path, monkeypatch):
        """An explicit override wins over the environment."""
        monkeypatch.setenv(PLUGINS_DIR_ENV, "/nonexistent")

        assert get_plugins_directory(temp_dir) == temp_dir

    def test_override_must_exist(self, temp_dir: Path):
        """A missing override directory is an error."""
        with pytest.raises(PluginsDirectoryError, match="does not exist"):
            get_plugins_directory(temp_dir / "missing")

    def test_environment_variable(self, temp_dir: Path, monkeypatch):
        """DRILLBIT_PLUGINS_DIR names the directory."""
        monkeypatch.setenv(PLUGINS_DIR_ENV, str(temp_dir))

        assert get_plugins_directory() == temp_dir

    def test_environment_variable_must_exist(self, temp_dir: Path, monkeypatch):
        """DRILLBIT_PLUGINS_DIR must name an existing directory."""
        monkeypatch.setenv(PLUGINS_DIR_ENV, str(temp_dir / "missing"))

        with pytest.raises(PluginsDirectoryError, match="existing directory"):
            get_plugins_directory()

    def test_creates_default(self, temp_dir: Path, monkeypatch):
        """The OS default is created if missing."""
        monkeypatch.delenv(PLUGINS_DIR_ENV, raising=False)
        default = temp_dir / "Roblox" / "Plugins"
        with patch("drillbit.utils.platform.default_plugins_directory", return_value=default):
            assert get_plugins_directory() == default

        assert default.is_dir()
