"""Manifest file parsing utilities."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from drillbit.config.schemas import ALLOWED_EXTENSIONS, LocalSource, Manifest

MANIFEST_FILE = "drillbit.toml"


class ConfigError(Exception):
    """Error loading or parsing configuration."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


def load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Parsed TOML as a dictionary

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    if not path.exists():
        raise ConfigError(f"File not found: {path}", path)

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", path) from e


def validate_local_extensions(manifest: Manifest, path: Path | None = None) -> None:
    """Check that every local plugin has an allowed file extension.

    Raises:
        ConfigError: Naming the first offending plugin key
    """
    allowed = ", ".join(ALLOWED_EXTENSIONS)

    for name, source in manifest.plugins.items():
        if not isinstance(source, LocalSource):
            continue

        extension = source.extension
        if not extension:
            raise ConfigError(
                f"Plugin '{name}' must have a file extension. Allowed extensions: {allowed}",
                path,
            )
        if extension not in ALLOWED_EXTENSIONS:
            raise ConfigError(
                f"Plugin '{name}' has invalid file extension '{extension}'. "
                f"Allowed extensions: {allowed}",
                path,
            )


def load_manifest(project_root: Path) -> Manifest:
    """Load the plugin manifest from drillbit.toml.

    Args:
        project_root: Directory containing drillbit.toml

    Returns:
        Parsed and validated Manifest

    Raises:
        ConfigError: If the file is missing, malformed, or lists a local
            plugin with a disallowed extension
    """
    manifest_path = project_root / MANIFEST_FILE
    data = load_toml(manifest_path)

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid manifest: {e}", manifest_path) from e

    validate_local_extensions(manifest, manifest_path)
    return manifest
