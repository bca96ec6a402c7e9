"""Project model representing a directory with a drillbit.toml manifest."""

from pathlib import Path

from drillbit.config.parser import MANIFEST_FILE, load_manifest
from drillbit.config.schemas import Manifest, PluginSource


class Project:
    """Represents a drillbit project.

    A project is the directory holding drillbit.toml. Its directory name
    scopes the identity of every plugin it installs, so the same plugin key
    used by two projects lands in two different files.
    """

    def __init__(self, root: Path, manifest: Manifest):
        """Initialize a Project.

        Args:
            root: Path to the project root directory
            manifest: Parsed plugin manifest
        """
        self._root = root.resolve()
        self._manifest = manifest

    @classmethod
    def load(cls, path: Path | None = None) -> "Project":
        """Load a project from disk.

        Args:
            path: Path to the project root, or None to use the cwd

        Returns:
            Loaded Project instance

        Raises:
            FileNotFoundError: If there is no drillbit.toml in the directory
            ConfigError: If the manifest is invalid
        """
        path = Path.cwd() if path is None else path.resolve()

        if not (path / MANIFEST_FILE).exists():
            raise FileNotFoundError(f"No {MANIFEST_FILE} found in {path}")

        return cls(path, load_manifest(path))

    @property
    def root(self) -> Path:
        """Get the project root directory."""
        return self._root

    @property
    def name(self) -> str:
        """Get the project name used to scope plugin ids."""
        return self._root.name

    @property
    def manifest(self) -> Manifest:
        """Get the plugin manifest."""
        return self._manifest

    @property
    def plugins(self) -> dict[str, PluginSource]:
        """Get the plugins declared in the manifest."""
        return self._manifest.plugins
