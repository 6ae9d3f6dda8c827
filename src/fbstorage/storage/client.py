from __future__ import annotations

import asyncio
import mimetypes
import os
from os import PathLike
from typing import Any

import httpx

from .._http import DEFAULT_TIMEOUT, AsyncTransport, HTTPConfig, RequestBody, get_storage_endpoint
from .auth import AuthenticationClient, AuthHeaderProvider
from .errors import StorageError, StorageTransferError, map_storage_error
from .paths import DEFAULT_DELIMITER, ResourcePath
from .progress import DEFAULT_PROGRESS_INTERVAL
from .registry import ResourceRegistry
from .resource import StorageResource
from .types import ListPrefixPolicy, OnUploadProgressCallback
from .urls import RequestBuilder
from .utils import debug

STREAMING_MIME_TYPE = "application/octet-stream"


def resolve_storage_bucket(
    authentication_client: AuthenticationClient,
    storage_bucket: str | None = None,
) -> str:
    bucket = storage_bucket or os.getenv("FIREBASE_STORAGE_BUCKET")
    if bucket:
        return bucket
    project_id = authentication_client.configuration.project_id
    if not project_id:
        raise StorageError(
            "No storage bucket found. Pass `storage_bucket`, set `FIREBASE_STORAGE_BUCKET`, "
            "or configure a project id on the authentication client."
        )
    return f"{project_id}.appspot.com"


def guess_mime_type(file_name: str) -> str:
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or STREAMING_MIME_TYPE


class StorageClient:
    """Asynchronous client for a Firebase Storage bucket.

    All requests share one httpx.AsyncClient. The id token is fetched from
    the authentication client for every request.

    Args:
        authentication_client: Supplies id tokens, the project id and API key.
        storage_bucket: Bucket name. Defaults to ``FIREBASE_STORAGE_BUCKET`` or
            ``{project_id}.appspot.com``.
        endpoint: REST endpoint. Defaults to ``FIREBASE_STORAGE_ENDPOINT`` or
            the public Firebase Storage endpoint.
        timeout: Request timeout in seconds.
        progress_interval: Seconds between upload progress samples.
        list_prefix_policy: ``"resource"`` scopes listings without an explicit
            prefix to the resource's children; ``"explicit"`` only sends a
            prefix when one is passed.
        client: Optional httpx.AsyncClient to send requests with. It is not
            closed by ``aclose``.
    """

    def __init__(
        self,
        authentication_client: AuthenticationClient,
        storage_bucket: str | None = None,
        *,
        endpoint: str | None = None,
        timeout: float | None = None,
        progress_interval: float = DEFAULT_PROGRESS_INTERVAL,
        list_prefix_policy: ListPrefixPolicy = "resource",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if progress_interval <= 0:
            raise StorageError("progress_interval must be positive")
        if list_prefix_policy not in ("resource", "explicit"):
            raise StorageError(f"unknown list_prefix_policy: {list_prefix_policy!r}")

        self._auth = AuthHeaderProvider(authentication_client)
        self._storage_bucket = resolve_storage_bucket(authentication_client, storage_bucket)
        self._config = HTTPConfig(
            endpoint=get_storage_endpoint(endpoint),
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
        self._transport = AsyncTransport(self._config, client)
        self._urls = RequestBuilder(self._config.endpoint, self._storage_bucket)
        self._registry = ResourceRegistry()
        self._top_level = StorageResource(self, ResourcePath.parse(""))
        self.progress_interval = progress_interval
        self.list_prefix_policy: ListPrefixPolicy = list_prefix_policy

    @property
    def storage_bucket(self) -> str:
        return self._storage_bucket

    @property
    def urls(self) -> RequestBuilder:
        return self._urls

    @property
    def api_key(self) -> str | None:
        return self._auth.configuration.api_key

    def resource(self, name: str, delimiter: str = DEFAULT_DELIMITER) -> StorageResource:
        """Address a folder, file name or full path in the bucket.

        ``storage.resource("some/path/to/file.png")``
        """
        path = ResourcePath.parse(name, delimiter)
        return self._registry.get_or_create(
            (path.delimiter, path.canonical),
            lambda: StorageResource(self, path),
        )

    async def list_items(self, recursive: bool = False, **kwargs: Any) -> list[StorageResource]:
        """List the top level resources of the bucket."""
        return await self._top_level.list_items(recursive, **kwargs)

    async def upload_file(
        self,
        local_path: str | PathLike[str],
        remote_path: str,
        mime_type: str | None = None,
        on_progress: OnUploadProgressCallback | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Upload a local file into the ``remote_path`` folder.

        The object keeps the file's base name. Returns its download url.
        """
        if not local_path:
            raise StorageError("local_path is required")
        if not os.path.isfile(os.fspath(local_path)):
            raise StorageError("local_path is not a file")

        file_name = os.path.basename(os.fspath(local_path))
        if not mime_type or not mime_type.strip():
            mime_type = guess_mime_type(file_name)

        target = self.resource(str(ResourcePath.parse(remote_path).child(file_name)))
        with open(os.fspath(local_path), "rb") as f:
            return await target.upload(f, mime_type, on_progress, cancel_event=cancel_event)

    async def _authorization_headers(self) -> dict[str, str]:
        return {"authorization": await self._auth.get_authorization_header()}

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        body: RequestBody = None,
    ) -> httpx.Response:
        debug(f"{method} {url}")
        try:
            response = await self._transport.send(method, url, body=body, headers=headers)
        except httpx.HTTPError as exc:
            raise StorageTransferError(url, cause=exc) from exc
        if response.is_error:
            raise map_storage_error(url, response)
        return response

    async def _request(self, method: str, url: str, *, body: RequestBody = None) -> httpx.Response:
        headers = await self._authorization_headers()
        return await self._send(method, url, headers=headers, body=body)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> StorageClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


__all__ = ["StorageClient", "resolve_storage_bucket", "guess_mime_type", "STREAMING_MIME_TYPE"]
