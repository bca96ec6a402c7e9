"""Shared fixtures for drillbit tests."""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from drillbit.config.parser import MANIFEST_FILE
from drillbit.core.project import Project


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory."""
    path = Path(tempfile.mkdtemp(prefix="drillbit_test_"))
    yield path
    if path.exists():
        shutil.rmtree(path)


@pytest.fixture
def temp_project(temp_dir: Path) -> Path:
    """Create a temporary project directory."""
    project_dir = temp_dir / "my-game"
    project_dir.mkdir()
    return project_dir


@pytest.fixture
def plugins_dir(temp_dir: Path) -> Path:
    """Create an empty plugins directory."""
    path = temp_dir / "Plugins"
    path.mkdir()
    return path


@pytest.fixture
def write_manifest(temp_project: Path):
    """Write a drillbit.toml into the temporary project."""

    def _write(content: str) -> Path:
        path = temp_project / MANIFEST_FILE
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def load_project(temp_project: Path):
    """Load the temporary project after its manifest has been written."""

    def _load() -> Project:
        return Project.load(temp_project)

    return _load
