"""Plugin backends for drillbit.

This module provides the backend registration system and the per-run
BackendSet. Each backend implements the Backend interface for one plugin
source kind.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drillbit.backends.base import Backend
    from drillbit.backends.http import HttpClient
    from drillbit.config.schemas import PluginSource

_BACKENDS: dict[str, type[Backend]] = {}
_LOADED = False

# Known backend modules - add new backends here
_BACKEND_MODULES = [
    "drillbit.backends.cloud",
    "drillbit.backends.github",
    "drillbit.backends.local",
]


def register_backend(kind: str) -> Callable[[type[Backend]], type[Backend]]:
    """Decorator for backend registration.

    Usage:
        @register_backend("local")
        class LocalBackend(Backend):
            ...
    """

    def decorator(cls: type[Backend]) -> type[Backend]:
        _BACKENDS[kind] = cls
        return cls

    return decorator


def _load_backends() -> None:
    """Load all backend modules to trigger registration."""
    global _LOADED
    if _LOADED:
        return

    for module_name in _BACKEND_MODULES:
        importlib.import_module(module_name)

    _LOADED = True


def get_backend_class(kind: str) -> type[Backend]:
    """Get a backend class by source kind.

    Raises:
        ValueError: If no backend is registered for the kind
    """
    _load_backends()

    if kind not in _BACKENDS:
        available = ", ".join(_BACKENDS.keys()) or "none"
        raise ValueError(f"Unknown backend: {kind}. Available backends: {available}")
    return _BACKENDS[kind]


def list_backends() -> list[str]:
    """List all registered backend kinds."""
    _load_backends()
    return list(_BACKENDS.keys())


class BackendSet:
    """Backends used during one run, created on first use.

    At most one backend exists per source kind, so state such as the cloud
    session cookie is shared by every plugin of that kind.
    """

    def __init__(
        self,
        project_root: Path,
        http_client: HttpClient | None = None,
        backends: dict[str, Backend] | None = None,
    ):
        """Initialize the backend set.

        Args:
            project_root: Directory containing drillbit.toml
            http_client: HTTP client shared by remote backends
            backends: Pre-built backends keyed by kind
        """
        self._project_root = project_root
        self._http_client = http_client
        self._instances: dict[str, Backend] = dict(backends or {})

    def get(self, source: PluginSource) -> Backend:
        """Get the backend for a plugin source, creating it if needed."""
        kind = source.kind
        if kind not in self._instances:
            if self._http_client is None:
                from drillbit.backends.http import HttpClient

                self._http_client = HttpClient()
            backend_class = get_backend_class(kind)
            self._instances[kind] = backend_class(self._project_root, self._http_client)
        return self._instances[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._instances
