from __future__ import annotations

import httpx

NOT_AVAILABLE = "N/A"


class StorageError(Exception):
    """Base class for storage client errors."""


class StorageAuthError(StorageError):
    """No usable id token could be obtained from the authentication client."""

    def __init__(self, message: str = "Failed to get an id token from the authentication client.") -> None:
        super().__init__(message)


class StorageTransferError(StorageError):
    """A request to the storage service failed."""

    def __init__(
        self,
        url: str,
        response_data: str = NOT_AVAILABLE,
        cause: BaseException | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            f"Exception occurred while processing the request.\nUrl: {url}\nResponse: {response_data}"
        )
        self.request_url = url
        self.response_data = response_data
        self.status_code = status_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class StorageNotFoundError(StorageTransferError):
    """The storage service answered 404 Not Found."""


class UploadCancelledError(StorageError):
    """The caller's cancel event fired while an upload was in flight."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Upload to {url} was cancelled.")
        self.request_url = url


class StorageArgumentError(StorageError, ValueError):
    """A successful response was missing an expected field."""

    def __init__(self, field: str, response_data: str) -> None:
        super().__init__(f"Could not extract {field} property from response!\nResponse: {response_data}")
        self.field = field
        self.response_data = response_data


def map_storage_error(url: str, response: httpx.Response) -> StorageTransferError:
    """Map a failed HTTP response to a transfer error carrying the raw body."""
    status = response.status_code
    cause = httpx.HTTPStatusError(
        f"HTTP {status} for url {url}",
        request=response.request,
        response=response,
    )
    if status == 404:
        return StorageNotFoundError(url, response.text, cause, status_code=status)
    return StorageTransferError(url, response.text, cause, status_code=status)


__all__ = [
    "NOT_AVAILABLE",
    "StorageError",
    "StorageAuthError",
    "StorageTransferError",
    "StorageNotFoundError",
    "UploadCancelledError",
    "StorageArgumentError",
    "map_storage_error",
]
