"""Savepoint directory classification helpers.

This module decides whether a directory string addresses an object store
or a filesystem. Classification is pure and never touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from core.constants import OBJECT_STORE_SCHEMES, PATH_SEPARATOR


@dataclass(frozen=True)
class FilesystemLocation:
    """Local or mounted savepoint directory."""

    path: str


@dataclass(frozen=True)
class ObjectStoreLocation:
    """Parsed object-store savepoint location.

    Attributes:
        scheme: Scheme alias as written by the caller, lower-cased.
        bucket: Bucket name taken from the URI authority.
        prefix: Key prefix without leading separators, or None.
    """

    scheme: str
    bucket: str
    prefix: str | None

    def object_uri(self, key: str) -> str:
        """Rebuild a full URI for an object key in this bucket.

        A single leading separator on the key doubles as the path separator.
        """
        if key.startswith(PATH_SEPARATOR):
            return f"{self.scheme}://{self.bucket}{key}"
        return f"{self.scheme}://{self.bucket}{PATH_SEPARATOR}{key}"


SavepointLocation = FilesystemLocation | ObjectStoreLocation


def classify_location(directory: str) -> SavepointLocation:
    """Classify a savepoint directory by its URI scheme.

    Args:
        directory: Filesystem path or ``s3://bucket/prefix`` style URI.

    Returns:
        Object-store location for recognized schemes, filesystem otherwise.
    """
    try:
        parts = urlsplit(directory)
    except ValueError:
        return FilesystemLocation(path=directory)
    if parts.scheme not in OBJECT_STORE_SCHEMES:
        return FilesystemLocation(path=directory)
    prefix = parts.path.lstrip(PATH_SEPARATOR)
    return ObjectStoreLocation(
        scheme=parts.scheme,
        bucket=parts.netloc.rpartition("@")[2],
        prefix=prefix or None,
    )


def is_object_store_uri(directory: str) -> bool:
    """Return whether a directory string addresses an object store."""
    return isinstance(classify_location(directory), ObjectStoreLocation)
