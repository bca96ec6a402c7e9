"""Plugin installation orchestrator.

This module contains the PluginInstaller which installs every plugin in a
project's manifest into the Roblox Studio plugins directory. Fetching is
delegated to the backends; the installer derives destination paths and skips
content that is already present in the directory under any name.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from drillbit.auth.cookie import AuthError
from drillbit.backends import BackendSet
from drillbit.backends.base import BackendError, destination_name
from drillbit.config.schemas import PluginSource
from drillbit.core.dedup import DedupIndex
from drillbit.core.project import Project
from drillbit.utils.filesystem import compute_hash, write_binary_file

logger = logging.getLogger("drillbit.installer")

InstallStatus = Literal["installed", "skipped"]


class InstallError(Exception):
    """Error during plugin installation."""

    def __init__(self, message: str, plugin_name: str | None = None):
        self.plugin_name = plugin_name
        super().__init__(message)


@dataclass
class InstallResult:
    """Result of installing a single plugin."""

    plugin_name: str
    plugin_id: str
    status: InstallStatus
    path: Path
    message: str = ""

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"


@dataclass
class InstallSummary:
    """Summary of an installation run."""

    results: list[InstallResult] = field(default_factory=list)

    @property
    def installed_count(self) -> int:
        return sum(1 for r in self.results if r.status == "installed")

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.status == "skipped")


class PluginInstaller:
    """Orchestrates plugin installation.

    Plugins are installed one at a time. The first failure aborts the run;
    plugins written before it stay in place.
    """

    def __init__(
        self,
        project: Project,
        plugins_dir: Path,
        backends: BackendSet | None = None,
        reporter: Callable[[InstallResult], None] | None = None,
    ):
        """Initialize the installer.

        Args:
            project: The project whose manifest is installed
            plugins_dir: Directory to install plugins into
            backends: Backends to fetch with (default: created lazily)
            reporter: Called with each result as soon as it is known
        """
        self.project = project
        self.plugins_dir = plugins_dir
        self.backends = backends or BackendSet(project.root)
        self.reporter = reporter

    def install(self) -> InstallSummary:
        """Install every plugin in the project's manifest.

        Returns:
            InstallSummary with one result per plugin

        Raises:
            InstallError: If the plugins directory cannot be scanned or any
                plugin fails to install
        """
        plugins = self.project.plugins
        summary = InstallSummary()

        try:
            index = DedupIndex.build(self.plugins_dir)
        except OSError as e:
            raise InstallError(f"Failed to scan plugins directory {self.plugins_dir}: {e}") from e

        if not plugins:
            logger.info("No plugins to install")
            return summary

        logger.info("Installing %d plugin(s) into %s", len(plugins), self.plugins_dir)

        for name, source in plugins.items():
            result = self._install_single_plugin(name, source, index)
            summary.results.append(result)
            if self.reporter is not None:
                self.reporter(result)

        logger.info(
            "Plugins installed successfully: %d written, %d skipped",
            summary.installed_count,
            summary.skipped_count,
        )
        return summary

    def _install_single_plugin(
        self,
        name: str,
        source: PluginSource,
        index: DedupIndex,
    ) -> InstallResult:
        """Fetch one plugin and write it unless its content is already installed."""
        try:
            backend = self.backends.get(source)
            plugin_id = backend.plugin_id(source, name, self.project.name)

            logger.info('Reading "%s"...', name)
            asset = backend.download(source)
        except (BackendError, AuthError) as e:
            raise InstallError(f"Failed to install '{name}': {e}", plugin_name=name) from e

        file_name = destination_name(plugin_id, asset.extension)
        path = self.plugins_dir / file_name
        if path.parent != self.plugins_dir:
            raise InstallError(
                f"Failed to install '{name}': '{file_name}' is not a plain file name",
                plugin_name=name,
            )

        content_hash = compute_hash(asset.data)

        existing = index.get(content_hash)
        if existing is not None:
            logger.info('"%s" already exists at "%s", skipping...', name, existing)
            return InstallResult(
                plugin_name=name,
                plugin_id=plugin_id,
                status="skipped",
                path=existing,
                message=f"{name} already exists at {existing}",
            )

        logger.info('Writing "%s"...', path)
        try:
            write_binary_file(path, asset.data)
        except OSError as e:
            raise InstallError(
                f"Failed to write '{name}' to {path}: {e}", plugin_name=name
            ) from e

        index.add(content_hash, path)
        return InstallResult(
            plugin_name=name,
            plugin_id=plugin_id,
            status="installed",
            path=path,
            message=f"Installed {name} to {path}",
        )
