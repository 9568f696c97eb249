"""Filesystem capability handed to the site generator.

The generator never touches the disk directly; it goes through an object with
``list_files``, ``read_file`` and ``write_file`` so tests can substitute an
in-memory implementation.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path


class FileSystem(typ.Protocol):
    """Operations the generator needs from a filesystem."""

    def list_files(self, root: Path) -> list[Path]:
        """Return every file below ``root`` in a stable order."""
        ...

    def read_file(self, path: Path) -> bytes:
        """Return the contents of ``path``."""
        ...

    def write_file(self, path: Path, data: bytes) -> None:
        """Write ``data`` to ``path``, creating parent directories."""
        ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the local disk."""

    def list_files(self, root: Path) -> list[Path]:
        """Return every regular file under ``root`` sorted by path."""
        return sorted(path for path in root.rglob("*") if path.is_file())

    def read_file(self, path: Path) -> bytes:
        """Return the raw bytes stored at ``path``."""
        return path.read_bytes()

    def write_file(self, path: Path, data: bytes) -> None:
        """Write ``data`` to ``path``, creating the parent directory first."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


__all__ = ["FileSystem", "LocalFileSystem"]
