"""Abstract base class for plugin backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from drillbit.config.schemas import ALLOWED_EXTENSIONS, PluginSource, SourceKind

if TYPE_CHECKING:
    from drillbit.backends.http import HttpClient


class BackendError(Exception):
    """Error fetching a plugin from its source."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


@dataclass(frozen=True)
class FetchedAsset:
    """Raw plugin content returned by a backend."""

    data: bytes
    extension: str | None = None


class Backend(ABC):
    """Abstract base class for plugin backends.

    A backend fetches the bytes of one kind of plugin source (local files,
    Roblox cloud assets, release URLs) and derives the file name stem the
    plugin is installed under.
    """

    def __init__(self, project_root: Path, http_client: "HttpClient | None" = None):
        """Initialize the backend.

        Args:
            project_root: Directory containing drillbit.toml
            http_client: Shared HTTP client for remote backends
        """
        self.project_root = project_root
        self._http_client = http_client

    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        """Get the source kind this backend handles."""
        ...

    @abstractmethod
    def download(self, source: PluginSource) -> FetchedAsset:
        """Fetch the plugin's content.

        Args:
            source: Plugin source of this backend's kind

        Returns:
            The content and an optional extension override

        Raises:
            BackendError: If the content cannot be fetched
        """
        ...

    @abstractmethod
    def plugin_id(self, source: PluginSource, key: str, project_name: str) -> str:
        """Derive the destination file name stem for a plugin.

        The result must be deterministic for the same inputs.

        Args:
            source: Plugin source of this backend's kind
            key: Plugin key in the manifest
            project_name: Name of the installing project's directory

        Returns:
            File name stem
        """
        ...

    def _check_source(self, source: PluginSource) -> None:
        if source.kind != self.kind:
            raise TypeError(f"{type(self).__name__} cannot handle {source.kind} plugins")


def destination_name(stem: str, extension: str | None) -> str:
    """Combine a plugin id with a backend's extension override.

    Args:
        stem: Plugin id from Backend.plugin_id()
        extension: Extension override from FetchedAsset, if any

    Returns:
        Final file name inside the plugins directory
    """
    if not extension or stem.endswith(f".{extension}"):
        return stem

    suffix = PurePosixPath(stem).suffix
    if suffix[1:] in ALLOWED_EXTENSIONS:
        return f"{stem[: -len(suffix)]}.{extension}"
    return f"{stem}.{extension}"
