"""Filesystem savepoint lookup.

This module picks the most recently modified entry of a savepoint
directory. Disk access goes through an injectable filesystem protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Protocol

from core.constants import PATH_SEPARATOR
from core.errors import NoSavepointsError, SavepointInspectionError, SavepointListingError
from core.location import FilesystemLocation
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class EntryStat:
    """Stat fields needed to rank savepoint entries."""

    modified_at: float


class FileSystem(Protocol):
    """Directory operations required by the filesystem backend."""

    def list_dir(self, path: str) -> list[str]: ...

    def stat(self, path: str) -> EntryStat: ...


class LocalFileSystem:
    """FileSystem implementation backed by the local operating system."""

    def list_dir(self, path: str) -> list[str]:
        """Return entry names of a directory."""
        return os.listdir(path)

    def stat(self, path: str) -> EntryStat:
        """Return the modification time of an entry."""
        return EntryStat(modified_at=os.stat(path).st_mtime)


class FilesystemBackend:
    """Finds the newest savepoint entry in a directory."""

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        """Create a filesystem backend.

        Args:
            filesystem: Optional filesystem; the local OS when omitted.
        """
        self._filesystem = filesystem or LocalFileSystem()

    def find_latest(self, location: FilesystemLocation) -> str:
        """Return the path of the most recently modified entry.

        Every entry counts as a savepoint; ties keep the entry that sorts
        first by name.

        Args:
            location: Savepoint directory.

        Returns:
            ``directory/entry`` path of the newest entry.

        Raises:
            SavepointListingError: If the directory cannot be read.
            NoSavepointsError: If the directory has no entries.
            SavepointInspectionError: If any entry cannot be stat'ed.
        """
        directory = _strip_trailing_separator(location.path)
        names = self._list_entries(directory)
        if not names:
            raise NoSavepointsError(f"No savepoints present in directory: {directory}")
        newest_path = ""
        newest_time: float | None = None
        for name in names:
            entry_path = f"{directory}{PATH_SEPARATOR}{name}"
            modified_at = self._stat_entry(entry_path).modified_at
            if newest_time is None or modified_at > newest_time:
                newest_path = entry_path
                newest_time = modified_at
        _LOGGER.debug(
            "filesystem_listed", directory=directory, entries=len(names), newest=newest_path
        )
        return newest_path

    def _list_entries(self, directory: str) -> list[str]:
        """List entry names of a savepoint directory in name order.

        Args:
            directory: Normalized directory path.

        Returns:
            Sorted entry names.

        Raises:
            SavepointListingError: If the directory cannot be read.
        """
        try:
            return sorted(self._filesystem.list_dir(directory))
        except OSError as error:
            raise SavepointListingError(
                f"Failed to read savepoint directory {directory}: {error}. "
                "Provide an existing, readable directory."
            ) from error

    def _stat_entry(self, entry_path: str) -> EntryStat:
        """Stat a single directory entry.

        Args:
            entry_path: Joined ``directory/entry`` path.

        Returns:
            Entry stat fields.

        Raises:
            SavepointInspectionError: If the entry cannot be stat'ed.
        """
        try:
            return self._filesystem.stat(entry_path)
        except OSError as error:
            raise SavepointInspectionError(
                f"Failed to stat savepoint entry {entry_path}: {error}."
            ) from error


def _strip_trailing_separator(path: str) -> str:
    """Drop a single trailing separator, keeping the root path intact."""
    if len(path) > 1 and path.endswith(PATH_SEPARATOR):
        return path[: -len(PATH_SEPARATOR)]
    return path
