"""Platform detection and Roblox Studio directory lookup."""

import logging
import os
import platform
from pathlib import Path
from typing import Literal

from drillbit.utils.filesystem import ensure_directory

logger = logging.getLogger(__name__)

PlatformOS = Literal["windows", "linux", "macos"]

# Environment variable naming an existing directory to install plugins into
PLUGINS_DIR_ENV = "DRILLBIT_PLUGINS_DIR"


class PluginsDirectoryError(Exception):
    """Error locating the Roblox Studio plugins directory."""


def get_os() -> PlatformOS:
    """Get the current operating system.

    Returns:
        One of: "windows", "linux", "macos"
    """
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    elif system == "windows":
        return "windows"
    else:
        return "linux"


def get_home_directory() -> str:
    """Get the user's home directory."""
    return os.path.expanduser("~")


def get_env(name: str, default: str | None = None) -> str | None:
    """Get an environment variable.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.environ.get(name, default)


def default_plugins_directory() -> Path:
    """Get the OS default Roblox Studio plugins directory.

    Raises:
        PluginsDirectoryError: If Roblox Studio is not supported on this OS
    """
    current_os = get_os()

    if current_os == "windows":
        local_app_data = get_env("LOCALAPPDATA")
        if not local_app_data:
            raise PluginsDirectoryError("LOCALAPPDATA is not set")
        return Path(local_app_data) / "Roblox" / "Plugins"
    elif current_os == "macos":
        return Path(get_home_directory()) / "Documents" / "Roblox" / "Plugins"

    raise PluginsDirectoryError(
        f"Roblox Studio is not supported on {current_os}. "
        f"Set {PLUGINS_DIR_ENV} to the plugins directory to use."
    )


def get_plugins_directory(override: Path | None = None) -> Path:
    """Resolve the directory plugins are installed into.

    Resolution order: the explicit override, then DRILLBIT_PLUGINS_DIR,
    then the OS default (created if it does not exist yet).

    Args:
        override: Directory given on the command line, if any

    Returns:
        Path to an existing directory

    Raises:
        PluginsDirectoryError: If an override does not name an existing
            directory or no default exists for this OS
    """
    if override is not None:
        if not override.is_dir():
            raise PluginsDirectoryError(f"Plugins directory does not exist: {override}")
        return override

    env_value = get_env(PLUGINS_DIR_ENV)
    if env_value:
        env_path = Path(env_value)
        if not env_path.is_dir():
            raise PluginsDirectoryError(
                f"{PLUGINS_DIR_ENV} does not name an existing directory: {env_value}"
            )
        logger.debug("Using plugins directory from %s: %s", PLUGINS_DIR_ENV, env_path)
        return env_path

    path = default_plugins_directory()
    logger.debug("Using default plugins directory: %s", path)
    try:
        return ensure_directory(path)
    except OSError as e:
        raise PluginsDirectoryError(f"Cannot create plugins directory {path}: {e}") from e
