from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Coroutine, Mapping
from typing import IO, TYPE_CHECKING, Any, TypeVar

import httpx

from .._http import RawBody
from .errors import (
    NOT_AVAILABLE,
    StorageArgumentError,
    StorageAuthError,
    StorageNotFoundError,
    StorageTransferError,
    UploadCancelledError,
)
from .paths import ResourcePath
from .progress import iter_stream, report_progress_loop, stop_task, stream_length
from .registry import RegistryKey
from .types import ListingPage, ObjectMetadata, OnUploadProgressCallback
from .utils import debug

if TYPE_CHECKING:
    from .client import StorageClient

DOWNLOAD_TOKENS_FIELD = "downloadTokens"

_T = TypeVar("_T")


def decode_json_object(url: str, response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise StorageTransferError(url, response.text, exc, status_code=response.status_code) from exc
    if not isinstance(data, dict):
        raise StorageTransferError(
            url,
            response.text,
            TypeError(f"expected a JSON object, got {type(data).__name__}"),
            status_code=response.status_code,
        )
    return data


def decode_model(url: str, response: httpx.Response, parse: Callable[[dict[str, Any]], _T]) -> _T:
    """Decode a JSON object response into a model, failing as a transfer error."""
    data = decode_json_object(url, response)
    try:
        return parse(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise StorageTransferError(url, response.text, exc, status_code=response.status_code) from exc


async def _send_unless_cancelled(
    send: Coroutine[Any, Any, httpx.Response],
    cancel_event: asyncio.Event | None,
    url: str,
) -> httpx.Response:
    if cancel_event is None:
        return await send

    send_task = asyncio.ensure_future(send)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({send_task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (send_task, waiter):
            if not task.done():
                task.cancel()
        await asyncio.gather(send_task, waiter, return_exceptions=True)

    if send_task.cancelled():
        raise UploadCancelledError(url)
    return send_task.result()


class StorageResource:
    """An addressable object or prefix in the bucket.

    Obtain instances through ``StorageClient.resource``; equal canonical
    paths resolve to the same cached instance.
    """

    def __init__(self, client: StorageClient, path: ResourcePath) -> None:
        self._client = client
        self._path = path

    @property
    def path(self) -> ResourcePath:
        return self._path

    @property
    def delimiter(self) -> str:
        return self._path.delimiter

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def is_root(self) -> bool:
        return self._path.is_root

    @property
    def registry_key(self) -> RegistryKey:
        return (self._path.delimiter, self._path.canonical)

    @property
    def resource_url(self) -> str:
        """The full escaped resource url."""
        return self._client.urls.resource_url(self._path)

    @property
    def upload_url(self) -> str:
        return self._client.urls.upload_url(self._path)

    def child(self, name: str) -> StorageResource:
        """Return the resource for ``name`` below this one.

        ``storage.resource("some").child("path").child("to/file.png")``
        addresses the same object as ``storage.resource("some/path/to/file.png")``.
        """
        return self._client.resource(self._path.child(name).canonical, self.delimiter)

    def extend(self, name: str) -> StorageResource:
        """Append ``name`` to this resource's own path and return it.

        Equality and hashing follow the path, so do not extend a resource
        while it is held in a set or used as a dict key.
        """
        old_key = self.registry_key
        self._path = self._path.child(name)
        self._client._registry.rekey(self, old_key)
        return self

    async def upload(
        self,
        stream: IO[bytes],
        mime_type: str | None = None,
        on_progress: OnUploadProgressCallback | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
        report_speed: bool = True,
    ) -> str:
        """Upload a seekable binary stream to this resource.

        Returns the public download url of the uploaded object. Setting
        ``cancel_event`` while the request is in flight aborts it with
        ``UploadCancelledError``. Errors raised by ``on_progress`` are
        re-raised once the transfer has finished.
        """
        headers = await self._client._authorization_headers()
        total = stream_length(stream)
        # whole stream is sent, progress is measured from its start
        stream.seek(0)

        sampler: asyncio.Task[None] | None = None
        if on_progress is not None:
            sampler = asyncio.create_task(
                report_progress_loop(
                    stream,
                    on_progress,
                    total=total,
                    interval=self._client.progress_interval,
                    report_speed=report_speed,
                )
            )

        try:
            download_url = await self._send_upload(stream, total, mime_type, headers, cancel_event)
        finally:
            if sampler is not None:
                await stop_task(sampler)

        if sampler is not None and not sampler.cancelled():
            error = sampler.exception()
            if error is not None:
                raise error
        return download_url

    async def _send_upload(
        self,
        stream: IO[bytes],
        total: int,
        mime_type: str | None,
        headers: dict[str, str],
        cancel_event: asyncio.Event | None,
    ) -> str:
        url = self.upload_url
        body = RawBody(iter_stream(stream), content_type=mime_type or None, length=total)
        response_data = NOT_AVAILABLE
        try:
            response = await _send_unless_cancelled(
                self._client._send("POST", url, headers=headers, body=body),
                cancel_event,
                url,
            )
            response_data = response.text
            data = decode_json_object(url, response)
            return await self.get_download_url(data)
        except (StorageAuthError, StorageTransferError, UploadCancelledError):
            raise
        except Exception as exc:
            raise StorageTransferError(url, response_data, exc) from exc

    async def get_metadata(self) -> ObjectMetadata:
        url = self.resource_url
        response = await self._client._request("GET", url)
        return decode_model(url, response, ObjectMetadata.from_dict)

    async def get_download_url(
        self,
        metadata: ObjectMetadata | Mapping[str, Any] | None = None,
    ) -> str:
        """Public download url of this object.

        Fetches the metadata when none is given. Returns an empty string if
        the object does not exist.
        """
        if metadata is None:
            try:
                metadata = await self.get_metadata()
            except StorageNotFoundError:
                return ""
        elif not isinstance(metadata, ObjectMetadata):
            metadata = ObjectMetadata.from_dict(metadata)

        token = metadata.download_token
        if token is None:
            raise StorageArgumentError(DOWNLOAD_TOKENS_FIELD, json.dumps(metadata.raw, default=str))
        return self._client.urls.download_url(self._path, token)

    async def delete(self) -> None:
        """Delete this object. Deleting a missing object is a no-op."""
        try:
            await self._client._request("DELETE", self.resource_url)
        except StorageNotFoundError:
            debug(f"{self} already deleted")

    def _default_prefix(self) -> str | None:
        if self._client.list_prefix_policy == "resource":
            return self._path.listing_prefix
        return None

    async def list_page(
        self,
        prefix: str | None = None,
        match_glob: str | None = None,
        max_results: int | None = None,
        start_offset: str | None = None,
        end_offset: str | None = None,
        page_token: str | None = None,
    ) -> ListingPage:
        """Fetch one page of the listing below this resource."""
        url = self._client.urls.list_url(
            delimiter=self.delimiter,
            prefix=prefix if prefix and prefix.strip() else self._default_prefix(),
            match_glob=match_glob,
            max_results=max_results,
            start_offset=start_offset,
            end_offset=end_offset,
            page_token=page_token,
            api_key=self._client.api_key,
        )
        response = await self._client._request("GET", url)
        return decode_model(url, response, ListingPage.from_dict)

    async def list_items(
        self,
        recursive: bool = False,
        prefix: str | None = None,
        match_glob: str | None = None,
        max_results: int | None = None,
        start_offset: str | None = None,
        end_offset: str | None = None,
        page_token: str | None = None,
    ) -> list[StorageResource]:
        """List folders, then objects, in the order the service returns them.

        With ``recursive`` each folder is followed by its own listing. A folder
        whose listing fails is skipped and the rest of the tree is still
        returned.
        """
        page = await self.list_page(
            prefix=prefix,
            match_glob=match_glob,
            max_results=max_results,
            start_offset=start_offset,
            end_offset=end_offset,
            page_token=page_token,
        )

        result: list[StorageResource] = []
        for folder_prefix in page.prefixes:
            folder = self._client.resource(folder_prefix, self.delimiter)
            result.append(folder)
            if not recursive:
                continue
            try:
                result.extend(
                    await folder.list_items(
                        recursive,
                        prefix=folder_prefix,
                        match_glob=match_glob,
                        max_results=max_results,
                        start_offset=start_offset,
                        end_offset=end_offset,
                    )
                )
            except StorageTransferError as exc:
                debug(f"Failed to get {folder} items!", str(exc))

        for item in page.items:
            # folder placeholder objects are already listed as prefixes
            if item.name in page.prefixes:
                continue
            result.append(self._client.resource(item.name, self.delimiter))
        return result

    def __str__(self) -> str:
        return self._path.canonical

    def __repr__(self) -> str:
        return f"StorageResource({self._path.canonical!r}, bucket={self._client.storage_bucket!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorageResource):
            return NotImplemented
        return (
            self._client.storage_bucket == other._client.storage_bucket
            and self.registry_key == other.registry_key
        )

    def __hash__(self) -> int:
        return hash((self._client.storage_bucket,) + self.registry_key)


__all__ = ["StorageResource", "decode_json_object", "decode_model"]
