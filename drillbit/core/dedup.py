"""Content-addressed index of the files in the plugins directory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from drillbit.utils.filesystem import compute_file_hash

logger = logging.getLogger(__name__)


class DedupIndex:
    """Maps content hashes to the file that currently holds that content.

    The index lives for a single run. It is built from the plugins directory
    and then extended with every file the installer writes, so content that
    is already installed under any name is never written twice.
    """

    def __init__(self, entries: dict[str, Path] | None = None):
        self._entries: dict[str, Path] = dict(entries or {})

    @classmethod
    def build(cls, directory: Path) -> DedupIndex:
        """Hash every regular file directly inside a directory.

        Subdirectories are skipped. Files are visited in name order, and when
        two files share a hash the later one is recorded.

        Args:
            directory: The plugins directory

        Returns:
            Populated index

        Raises:
            OSError: If the directory cannot be listed or a file cannot be read
        """
        index = cls()
        for path in sorted(directory.iterdir(), key=lambda p: p.name):
            if not path.is_file():
                continue
            index.add(compute_file_hash(path), path)

        logger.debug("Indexed %d file(s) in %s", len(index), directory)
        return index

    def get(self, content_hash: str) -> Path | None:
        """Get the path holding the given content, if any."""
        return self._entries.get(content_hash)

    def add(self, content_hash: str, path: Path) -> None:
        """Record that a path holds the given content."""
        self._entries[content_hash] = path

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
