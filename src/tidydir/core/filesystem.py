"""File-system provider used by the organizer.

The organizer never touches the disk directly; it goes through a
FileSystemProvider so tests can inject failures and so moves stay
behind one seam with a single collision rule.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

from tidydir.core.models import DirectoryEntry

logger = logging.getLogger(__name__)


class FileSystemProvider(Protocol):
    """Protocol for the file-system operations the organizer needs."""

    def list_entries(self, path: Path) -> list[DirectoryEntry]:
        """List the immediate entries of ``path``."""

    def exists(self, path: Path) -> bool:
        """Return True if anything exists at ``path``."""

    def is_directory(self, path: Path) -> bool:
        """Return True if ``path`` is an existing directory."""

    def make_directory(self, path: Path, *, recursive: bool = True) -> None:
        """Create ``path``; a no-op if the directory already exists."""

    def move(self, source: Path, destination: Path) -> None:
        """Move ``source`` to ``destination``.

        Raises:
            FileExistsError: If ``destination`` already exists
        """


class LocalFileSystem:
    """FileSystemProvider backed by the local disk."""

    def list_entries(self, path: Path) -> list[DirectoryEntry]:
        entries: list[DirectoryEntry] = []
        with os.scandir(path) as iterator:
            for item in iterator:
                # Symlinks to directories are listed as directories and never moved.
                entries.append(
                    DirectoryEntry(name=item.name, is_directory=item.is_dir()),
                )
        return entries

    def exists(self, path: Path) -> bool:
        # lexists so a dangling symlink still counts as an occupied name
        return os.path.lexists(path)

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def make_directory(self, path: Path, *, recursive: bool = True) -> None:
        Path(path).mkdir(parents=recursive, exist_ok=True)
        logger.debug("Ensured directory: %s", path)

    def move(self, source: Path, destination: Path) -> None:
        if self.exists(destination):
            msg = f"File already exists at destination: {destination}"
            raise FileExistsError(msg)
        shutil.move(str(source), str(destination))
        logger.debug("Moved: %s -> %s", source, destination)


__all__ = ["FileSystemProvider", "LocalFileSystem"]
