"""Filesystem utilities for drillbit."""

import hashlib
from pathlib import Path

# BLAKE2b truncated to a 256-bit digest
HASH_DIGEST_SIZE = 32


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def compute_hash(data: bytes) -> str:
    """Compute the content hash of a byte string.

    Args:
        data: Bytes to hash

    Returns:
        Hex-encoded 256-bit BLAKE2b digest
    """
    return hashlib.blake2b(data, digest_size=HASH_DIGEST_SIZE).hexdigest()


def compute_file_hash(path: Path) -> str:
    """Compute the content hash of a file.

    Produces the same digest as compute_hash() on the file's bytes.

    Args:
        path: Path to the file

    Returns:
        Hex-encoded 256-bit BLAKE2b digest
    """
    hasher = hashlib.blake2b(digest_size=HASH_DIGEST_SIZE)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def write_binary_file(path: Path, data: bytes) -> None:
    """Write bytes to a file, replacing any existing content.

    The parent directory must already exist.

    Args:
        path: Path to the file
        data: Content to write
    """
    path.write_bytes(data)
