"""Latest savepoint resolution.

This module classifies a savepoint directory and dispatches the lookup
to the matching backend. Backend results and errors pass through as-is.
"""

from __future__ import annotations

from typing import Callable

from core.config import ObjectStoreConfig
from core.location import FilesystemLocation, classify_location
from core.logging_config import get_logger
from locate.filesystem import FileSystem, FilesystemBackend
from locate.object_store import ObjectStoreBackend

_LOGGER = get_logger(__name__)


class SavepointResolver:
    """Resolves the newest savepoint for filesystem or object-store paths."""

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        object_store_config: ObjectStoreConfig | None = None,
        object_store_factory: Callable[[ObjectStoreConfig], ObjectStoreBackend] | None = None,
    ) -> None:
        """Create a resolver.

        Args:
            filesystem: Optional filesystem used for local directories.
            object_store_config: Optional config; read from env when omitted.
            object_store_factory: Optional builder for the object-store backend.
        """
        self._filesystem_backend = FilesystemBackend(filesystem)
        self._object_store_config = object_store_config
        self._object_store_factory = object_store_factory or ObjectStoreBackend

    def resolve(self, directory: str) -> str:
        """Return the newest savepoint in a directory.

        Args:
            directory: Filesystem path or ``s3``/``s3a``/``s3p`` URI.

        Returns:
            Path or URI of the newest savepoint. Empty when an object-store
            prefix holds no metadata markers.

        Raises:
            SavepointConfigError: If object-store config is missing.
            SavepointConnectionError: If the S3 client cannot be built.
            SavepointListingError: If listing fails or a local directory is empty.
            SavepointInspectionError: If a local entry cannot be stat'ed.
        """
        location = classify_location(directory)
        if isinstance(location, FilesystemLocation):
            result = self._filesystem_backend.find_latest(location)
        else:
            config = self._object_store_config or ObjectStoreConfig.from_env()
            result = self._object_store_factory(config).find_latest(location)
        _LOGGER.debug("savepoint_resolved", directory=directory, savepoint=result)
        return result


def retrieve_latest_savepoint(directory: str, filesystem: FileSystem | None = None) -> str:
    """Resolve the newest savepoint with env-derived object-store config."""
    return SavepointResolver(filesystem=filesystem).resolve(directory)
