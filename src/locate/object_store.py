"""Object-store savepoint lookup.

This module lists an S3 bucket page by page and picks the newest
savepoint metadata marker. It owns boto3 client creation for lookups.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterator

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from core.config import ObjectStoreConfig
from core.constants import (
    LIST_OBJECTS_OPERATION,
    S3_SERVICE_NAME,
    SAVEPOINT_METADATA_SUFFIX,
)
from core.errors import SavepointConnectionError, SavepointListingError
from core.location import ObjectStoreLocation
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def create_s3_client(config: ObjectStoreConfig) -> Any:
    """Create a boto3 S3 client for savepoint listings.

    Args:
        config: Validated object-store config.

    Returns:
        Boto3 S3 client.

    Raises:
        SavepointConnectionError: If the session or client cannot be built.
    """
    client_config = None
    if config.force_path_style:
        client_config = BotoConfig(s3={"addressing_style": "path"})
    try:
        session = boto3.session.Session(**_build_session_kwargs(config))
        return session.client(
            S3_SERVICE_NAME,
            endpoint_url=config.endpoint_url,
            use_ssl=config.use_ssl,
            config=client_config,
        )
    except (BotoCoreError, ValueError) as error:
        raise SavepointConnectionError(
            f"creating S3 session: {error}. "
            "Check the region, endpoint, and credential settings."
        ) from error


def _build_session_kwargs(config: ObjectStoreConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Object-store config.

    Returns:
        Session keyword arguments.
    """
    kwargs = {"region_name": config.region}
    if config.access_key_id and config.secret_access_key:
        kwargs["aws_access_key_id"] = config.access_key_id
        kwargs["aws_secret_access_key"] = config.secret_access_key
    if config.session_token:
        kwargs["aws_session_token"] = config.session_token
    return kwargs


class ObjectStoreBackend:
    """Finds the newest savepoint marker under an S3 prefix."""

    def __init__(self, config: ObjectStoreConfig | None = None, client: Any = None) -> None:
        """Create an object-store backend.

        Args:
            config: Config used to build a client when none is given.
            client: Optional prebuilt S3 client.
        """
        if client is None:
            client = create_s3_client(config or ObjectStoreConfig.from_env())
        self._client = client

    def find_latest(self, location: ObjectStoreLocation) -> str:
        """Return the URI of the newest savepoint metadata marker.

        Args:
            location: Bucket and optional prefix to search.

        Returns:
            ``scheme://bucket/key`` of the newest marker, or an empty
            string when no marker exists.

        Raises:
            SavepointListingError: If listing any page fails.
        """
        newest_key: str | None = None
        newest_time: datetime | None = None
        scanned = 0
        for obj in self._iter_objects(location):
            scanned += 1
            key = obj["Key"]
            if not key.endswith(SAVEPOINT_METADATA_SUFFIX):
                continue
            modified_at = obj["LastModified"]
            if newest_time is None or modified_at > newest_time:
                newest_key = key
                newest_time = modified_at
        _LOGGER.debug(
            "object_store_listed",
            bucket=location.bucket,
            prefix=location.prefix,
            scanned=scanned,
            newest_key=newest_key,
        )
        if newest_key is None:
            return ""
        return location.object_uri(newest_key)

    def _iter_objects(self, location: ObjectStoreLocation) -> Iterator[dict[str, Any]]:
        """Yield listed objects across every result page.

        Args:
            location: Bucket and optional prefix to list.

        Yields:
            Object summaries with ``Key`` and ``LastModified``.

        Raises:
            SavepointListingError: If the listing call fails.
        """
        list_kwargs = {"Bucket": location.bucket}
        if location.prefix:
            list_kwargs["Prefix"] = location.prefix
        try:
            paginator = self._client.get_paginator(LIST_OBJECTS_OPERATION)
            for page in paginator.paginate(**list_kwargs):
                yield from page.get("Contents", [])
        except (BotoCoreError, ClientError) as error:
            raise SavepointListingError(
                f"listing S3 objects in {location.object_uri(location.prefix or '')}: {error}. "
                "Check bucket permissions and retry."
            ) from error
