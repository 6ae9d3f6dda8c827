"""Fixtures for integration tests using respx mocking."""

import pytest

from ..conftest import STORAGE_HOST, TEST_BUCKET


def object_metadata(name: str, token: str | None = "download-token", **extra) -> dict:
    """Object resource as returned by the storage service."""
    data = {
        "name": name,
        "bucket": TEST_BUCKET,
        "generation": "1714558830123456",
        "metageneration": "1",
        "contentType": "application/json",
        "timeCreated": "2024-05-01T10:20:30.123Z",
        "updated": "2024-05-01T10:20:30.123Z",
        "storageClass": "STANDARD",
        "size": "8",
        "md5Hash": "CY9rzUYh03PK3k6DJie09g==",
        "contentEncoding": "identity",
        "contentDisposition": "inline; filename*=utf-8''file",
        "crc32c": "u8b2iw==",
        "etag": "CMDu+8DA/4UDEAE=",
    }
    if token is not None:
        data["downloadTokens"] = token
    data.update(extra)
    return data


def listing(prefixes: list[str] | None = None, items: list[str] | None = None) -> dict:
    return {
        "kind": "storage#objects",
        "prefixes": prefixes or [],
        "items": [object_metadata(name) for name in items or []],
    }


@pytest.fixture
def storage_host() -> str:
    return STORAGE_HOST


@pytest.fixture
def mock_upload_response() -> dict:
    """Mock response for an upload of root/test.json."""
    return object_metadata("root/test.json", token="upload-token")
