"""Public SDK surface for the savepoint locator.

This module provides a stable import path for operational tooling.
It re-exports the resolver, backends, and typed config models.
"""

from __future__ import annotations

from core.config import ObjectStoreConfig
from core.errors import (
    NoSavepointsError,
    SavepointConfigError,
    SavepointConnectionError,
    SavepointError,
    SavepointInspectionError,
    SavepointListingError,
)
from core.location import (
    FilesystemLocation,
    ObjectStoreLocation,
    classify_location,
    is_object_store_uri,
)
from locate.filesystem import EntryStat, FileSystem, FilesystemBackend, LocalFileSystem
from locate.object_store import ObjectStoreBackend, create_s3_client
from locate.resolver import SavepointResolver, retrieve_latest_savepoint

__all__ = [
    "EntryStat",
    "FileSystem",
    "FilesystemBackend",
    "FilesystemLocation",
    "LocalFileSystem",
    "NoSavepointsError",
    "ObjectStoreBackend",
    "ObjectStoreConfig",
    "ObjectStoreLocation",
    "SavepointConfigError",
    "SavepointConnectionError",
    "SavepointError",
    "SavepointInspectionError",
    "SavepointListingError",
    "SavepointResolver",
    "classify_location",
    "create_s3_client",
    "is_object_store_uri",
    "retrieve_latest_savepoint",
]
