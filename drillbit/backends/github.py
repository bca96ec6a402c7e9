"""Backend for plugins published at a direct URL, such as a GitHub release asset."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

from drillbit.backends import register_backend
from drillbit.backends.base import Backend, FetchedAsset
from drillbit.backends.http import HttpClient
from drillbit.config.schemas import GitHubSource, PluginSource, SourceKind

logger = logging.getLogger(__name__)

UNKNOWN_BASENAME = "unknown"


def url_basename(url: str) -> str | None:
    """Get the last path segment of a URL, or None if the path is empty."""
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        return None
    # Percent escapes stay encoded so the segment never holds a path separator
    return segments[-1].replace("\\", "_")


def url_extension(url: str) -> str | None:
    """Get the extension of a URL's last path segment, if it has one."""
    basename = url_basename(url)
    if not basename or "." not in basename:
        return None
    extension = basename.rsplit(".", 1)[1]
    return extension or None


@register_backend("github")
class GitHubBackend(Backend):
    """Downloads plugin files with a single unauthenticated GET."""

    def __init__(self, project_root: Path, http_client: HttpClient | None = None):
        super().__init__(project_root, http_client or HttpClient())

    @property
    def kind(self) -> SourceKind:
        return "github"

    def download(self, source: PluginSource) -> FetchedAsset:
        self._check_source(source)
        assert isinstance(source, GitHubSource)

        logger.debug("Downloading release asset %s", source.github)
        data = self._http_client.get(source.github)
        return FetchedAsset(data=data, extension=url_extension(source.github))

    def plugin_id(self, source: PluginSource, key: str, project_name: str) -> str:
        self._check_source(source)
        assert isinstance(source, GitHubSource)
        return f"{project_name}_{url_basename(source.github) or UNKNOWN_BASENAME}"
