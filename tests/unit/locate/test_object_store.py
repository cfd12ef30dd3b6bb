"""Unit tests for object-store savepoint lookup."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import boto3
import pytest
from botocore.stub import Stubber

from core.config import ObjectStoreConfig
from core.errors import SavepointConnectionError, SavepointListingError
from core.location import ObjectStoreLocation
from locate.object_store import ObjectStoreBackend, create_s3_client

_BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
_LOCATION = ObjectStoreLocation(scheme="s3", bucket="savepoints", prefix="jobs")


def _at(minutes: int) -> datetime:
    return _BASE_TIME + timedelta(minutes=minutes)


def _object(key: str, minutes: int) -> dict[str, Any]:
    return {"Key": key, "LastModified": _at(minutes), "Size": 1}


def _page(objects: list[dict[str, Any]], next_token: str | None = None) -> dict[str, Any]:
    page: dict[str, Any] = {"Contents": objects, "IsTruncated": next_token is not None}
    if next_token is not None:
        page["NextContinuationToken"] = next_token
    return page


def _stubbed_client() -> Any:
    session = boto3.session.Session(
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    return session.client("s3")


class _FakePaginator:
    def __init__(self, pages: list[dict[str, Any]]) -> None:
        self.pages = pages
        self.calls: list[dict[str, Any]] = []

    def paginate(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        return iter(self.pages)


class _FakeClient:
    def __init__(self, pages: list[dict[str, Any]]) -> None:
        self.paginator = _FakePaginator(pages)
        self.operations: list[str] = []

    def get_paginator(self, operation: str) -> _FakePaginator:
        self.operations.append(operation)
        return self.paginator


def test_find_latest_picks_newest_metadata_marker() -> None:
    """Only _metadata keys should compete, newest one wins."""
    client = _FakeClient(
        [
            _page(
                [
                    _object("jobs/a/_metadata", 1),
                    _object("jobs/b/_metadata", 2),
                    _object("jobs/c/other", 3),
                ]
            )
        ]
    )

    result = ObjectStoreBackend(client=client).find_latest(_LOCATION)

    assert result == "s3://savepoints/jobs/b/_metadata"


def test_find_latest_passes_bucket_and_prefix() -> None:
    """Listing should target the bucket and stripped prefix."""
    client = _FakeClient([_page([])])

    ObjectStoreBackend(client=client).find_latest(_LOCATION)

    assert client.operations == ["list_objects_v2"] and client.paginator.calls == [
        {"Bucket": "savepoints", "Prefix": "jobs"}
    ]


def test_find_latest_omits_prefix_for_bare_bucket() -> None:
    """A bucket-only location should list without a Prefix argument."""
    client = _FakeClient([_page([])])
    location = ObjectStoreLocation(scheme="s3a", bucket="savepoints", prefix=None)

    ObjectStoreBackend(client=client).find_latest(location)

    assert client.paginator.calls == [{"Bucket": "savepoints"}]


@pytest.mark.parametrize(
    "pages",
    [
        [],
        [{"IsTruncated": False}],
        [_page([_object("jobs/a/state", 1), _object("jobs/b/metadata.json", 2)])],
    ],
)
def test_find_latest_returns_empty_string_without_markers(pages: list[dict[str, Any]]) -> None:
    """No matching marker is an empty result, not an error."""
    result = ObjectStoreBackend(client=_FakeClient(pages)).find_latest(_LOCATION)

    assert result == ""


def test_find_latest_keeps_first_marker_on_equal_timestamps() -> None:
    """Ties should keep the marker listed first."""
    client = _FakeClient([_page([_object("jobs/a/_metadata", 5), _object("jobs/b/_metadata", 5)])])

    result = ObjectStoreBackend(client=client).find_latest(_LOCATION)

    assert result == "s3://savepoints/jobs/a/_metadata"


def test_find_latest_consumes_every_page_with_stubbed_client() -> None:
    """The globally newest marker should win even when it is on a later page."""
    client = _stubbed_client()
    stubber = Stubber(client)
    stubber.add_response(
        "list_objects_v2",
        _page([_object("jobs/a/_metadata", 10), _object("jobs/a/state-0", 30)], "token-1"),
    )
    stubber.add_response(
        "list_objects_v2",
        _page([_object("jobs/b/_metadata", 5)], "token-2"),
    )
    stubber.add_response(
        "list_objects_v2",
        _page([_object("jobs/c/_metadata", 20)]),
    )

    with stubber:
        result = ObjectStoreBackend(client=client).find_latest(_LOCATION)

    stubber.assert_no_pending_responses()
    assert result == "s3://savepoints/jobs/c/_metadata"


def test_find_latest_wraps_listing_failures() -> None:
    """Listing errors should surface as SavepointListingError with the cause."""
    client = _stubbed_client()
    stubber = Stubber(client)
    stubber.add_client_error(
        "list_objects_v2",
        service_error_code="NoSuchBucket",
        service_message="The specified bucket does not exist",
        http_status_code=404,
    )

    with stubber, pytest.raises(SavepointListingError, match="listing S3 objects") as error_info:
        ObjectStoreBackend(client=client).find_latest(_LOCATION)

    assert error_info.value.__cause__ is not None


def test_find_latest_is_idempotent() -> None:
    """Repeated lookups over the same listing should agree."""
    pages = [_page([_object("jobs/a/_metadata", 1)], "t"), _page([_object("jobs/b/_metadata", 2)])]
    backend = ObjectStoreBackend(client=_FakeClient(pages))

    assert backend.find_latest(_LOCATION) == backend.find_latest(_LOCATION)


def test_create_s3_client_uses_endpoint_override() -> None:
    """Local S3-compatible endpoints should be passed to the client."""
    config = ObjectStoreConfig(
        region="us-east-1",
        endpoint_url="http://localhost:9000",
        use_ssl=False,
        force_path_style=True,
        access_key_id="minio",
        secret_access_key="minio-secret",
    )

    client = create_s3_client(config)

    assert client.meta.endpoint_url == "http://localhost:9000"


def test_create_s3_client_wraps_construction_failures() -> None:
    """Client construction errors should surface as SavepointConnectionError."""
    config = ObjectStoreConfig(region="us-east-1", endpoint_url="not a url")

    with pytest.raises(SavepointConnectionError, match="creating S3 session"):
        create_s3_client(config)


def test_find_latest_returns_exact_key_with_leading_slashes() -> None:
    """A winning key starting with '//' should be addressed unchanged."""
    client = _stubbed_client()
    stubber = Stubber(client)
    stubber.add_response("list_objects_v2", _page([_object("//x/_metadata", 1)]))
    location = ObjectStoreLocation(scheme="s3", bucket="b", prefix=None)

    with stubber:
        result = ObjectStoreBackend(client=client).find_latest(location)

    assert result == "s3://b//x/_metadata"


def test_find_latest_listing_error_names_caller_scheme() -> None:
    """Listing errors should quote the scheme alias the caller used."""
    client = _stubbed_client()
    stubber = Stubber(client)
    stubber.add_client_error("list_objects_v2", service_error_code="AccessDenied")
    location = ObjectStoreLocation(scheme="s3a", bucket="savepoints", prefix="jobs")

    with stubber, pytest.raises(SavepointListingError, match="s3a://savepoints/jobs"):
        ObjectStoreBackend(client=client).find_latest(location)
