"""HTTP transport used by the storage client."""

from __future__ import annotations

from collections.abc import AsyncIterable
from dataclasses import dataclass

import httpx

from .clients import create_base_async_client
from .config import HTTPConfig


@dataclass(frozen=True, slots=True)
class RawBody:
    """Streamed request body with optional content type and length."""

    data: AsyncIterable[bytes] | bytes
    content_type: str | None = None
    length: int | None = None


RequestBody = RawBody | None


class AsyncTransport:
    """Asynchronous HTTP transport sharing one httpx.AsyncClient.

    Headers are built per request from the config plus the caller's headers;
    nothing request-specific is stored on the shared client.
    """

    def __init__(self, config: HTTPConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> HTTPConfig:
        return self._config

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = create_base_async_client(timeout=self._config.timeout)
            self._owns_client = True
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        body: RequestBody = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send an asynchronous HTTP request and read the full response."""
        request_headers = self._config.get_headers()
        if headers:
            request_headers.update(headers)

        content: AsyncIterable[bytes] | bytes | None = None
        if body is not None:
            content = body.data
            if body.content_type:
                request_headers["content-type"] = body.content_type
            if body.length is not None:
                request_headers["content-length"] = str(body.length)

        return await self._get_client().request(
            method,
            url,
            content=content,
            headers=request_headers,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


__all__ = ["AsyncTransport", "RawBody", "RequestBody"]
