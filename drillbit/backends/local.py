"""Backend for plugin files stored alongside the manifest."""

import logging

from drillbit.backends import register_backend
from drillbit.backends.base import Backend, BackendError, FetchedAsset
from drillbit.config.schemas import LocalSource, PluginSource, SourceKind

logger = logging.getLogger(__name__)

# Source extensions installed under a different extension
EXTENSION_OVERRIDES = {"luau": "lua"}


@register_backend("local")
class LocalBackend(Backend):
    """Reads plugin files relative to the project root."""

    @property
    def kind(self) -> SourceKind:
        return "local"

    def download(self, source: PluginSource) -> FetchedAsset:
        self._check_source(source)
        assert isinstance(source, LocalSource)

        path = self.project_root / source.path
        logger.debug("Reading local plugin %s", path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise BackendError(f"Failed to read plugin {path}: {e}", source=str(path)) from e

        # .luau sources are installed as .lua with unchanged bytes
        return FetchedAsset(data=data, extension=EXTENSION_OVERRIDES.get(source.extension))

    def plugin_id(self, source: PluginSource, key: str, project_name: str) -> str:
        self._check_source(source)
        assert isinstance(source, LocalSource)
        return f"{project_name}_{source.path.name}"
