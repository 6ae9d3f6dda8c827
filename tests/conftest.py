"""Shared fixtures for all tests."""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from fbstorage import AuthConfiguration, StorageClient

STORAGE_ENDPOINT = "https://firebasestorage.googleapis.com/v0"
STORAGE_HOST = "firebasestorage.googleapis.com"
TEST_BUCKET = "test-project.appspot.com"
BUCKET_URL = f"{STORAGE_ENDPOINT}/b/{TEST_BUCKET}/o"


class FakeAuthClient:
    """Authentication client stub that counts token requests."""

    def __init__(
        self,
        token: str | None = "test-id-token",
        project_id: str | None = "test-project",
        api_key: str | None = "test-api-key",
    ) -> None:
        self.configuration = AuthConfiguration(project_id=project_id, api_key=api_key)
        self.token = token
        self.calls = 0

    async def get_id_token(self) -> str | None:
        self.calls += 1
        return self.token


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all Firebase-related environment variables for testing.

    This ensures tests don't accidentally use real credentials from the environment.
    """
    env_vars_to_clear = [
        "FIREBASE_ID_TOKEN",
        "FIREBASE_PROJECT_ID",
        "FIREBASE_API_KEY",
        "FIREBASE_STORAGE_BUCKET",
        "FIREBASE_STORAGE_ENDPOINT",
        "DEBUG",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest_asyncio.fixture
async def storage(mock_env_clear, auth_client: FakeAuthClient) -> AsyncGenerator[StorageClient, None]:
    """Storage client with a fast progress sampler."""
    async with StorageClient(auth_client, progress_interval=0.01) as client:
        yield client
