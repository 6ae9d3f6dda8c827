"""Fixtures for live API tests.

These tests require real credentials set via environment variables:
- FIREBASE_ID_TOKEN: id token of a signed in user
- FIREBASE_PROJECT_ID: Firebase project id
- FIREBASE_API_KEY: Web API key of the project (optional)
- FIREBASE_STORAGE_BUCKET: bucket to use (optional)
"""

import os
import time
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from fbstorage import EnvAuthenticationClient, StorageClient


def has_firebase_credentials() -> bool:
    """Check if Firebase credentials are available."""
    return bool(os.getenv("FIREBASE_ID_TOKEN") and os.getenv("FIREBASE_PROJECT_ID"))


# Skip marker for live tests
requires_firebase_credentials = pytest.mark.skipif(
    not has_firebase_credentials(),
    reason="Requires FIREBASE_ID_TOKEN and FIREBASE_PROJECT_ID environment variables",
)


@pytest.fixture
def unique_folder() -> str:
    """Generate a unique folder for testing.

    Format: fbstorage-test/{timestamp}-{uuid}
    """
    timestamp = int(time.time())
    unique_id = uuid.uuid4().hex[:8]
    return f"fbstorage-test/{timestamp}-{unique_id}"


@pytest_asyncio.fixture
async def live_storage() -> AsyncGenerator[StorageClient, None]:
    """Storage client for the configured bucket."""
    async with StorageClient(EnvAuthenticationClient()) as client:
        yield client


@pytest_asyncio.fixture
async def cleanup_paths(live_storage: StorageClient) -> AsyncGenerator[list[str], None]:
    """Object paths appended to this list are deleted after the test."""
    paths: list[str] = []
    yield paths
    for path in paths:
        await live_storage.resource(path).delete()
