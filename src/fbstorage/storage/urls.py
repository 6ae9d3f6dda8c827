from __future__ import annotations

from typing import Any
from urllib.parse import quote

from .errors import StorageError
from .paths import ResourcePath

MAX_LIST_RESULTS = 1000


def escape_query_value(value: Any) -> str:
    return quote(str(value), safe="")


def encode_query(params: dict[str, Any]) -> str:
    return "&".join(f"{key}={escape_query_value(value)}" for key, value in params.items())


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def build_list_params(
    *,
    delimiter: str,
    prefix: str | None = None,
    match_glob: str | None = None,
    max_results: int | None = None,
    start_offset: str | None = None,
    end_offset: str | None = None,
    page_token: str | None = None,
    api_key: str | None = None,
) -> dict[str, Any]:
    params: dict[str, Any] = {"delimiter": delimiter, "includeTrailingDelimiter": "true"}
    if _present(prefix):
        params["prefix"] = prefix
    if _present(start_offset):
        params["startOffset"] = start_offset
    if _present(end_offset):
        params["endOffset"] = end_offset
    if _present(match_glob):
        params["matchGlob"] = match_glob
    if max_results is not None:
        if int(max_results) < 1:
            raise StorageError("max_results must be a positive integer")
        params["maxResults"] = min(int(max_results), MAX_LIST_RESULTS)
    if _present(page_token):
        params["pageToken"] = page_token
    if api_key:
        params["key"] = api_key
    return params


class RequestBuilder:
    """Builds the REST URLs for one bucket."""

    def __init__(self, endpoint: str, bucket: str) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.bucket = bucket

    @property
    def bucket_url(self) -> str:
        return f"{self.endpoint}/b/{quote(self.bucket, safe='')}/o"

    def upload_url(self, path: ResourcePath) -> str:
        return f"{self.bucket_url}?name={path.escaped}"

    def resource_url(self, path: ResourcePath) -> str:
        return f"{self.bucket_url}/{path.escaped}"

    def download_url(self, path: ResourcePath, download_token: str) -> str:
        return f"{self.resource_url(path)}?alt=media&token={escape_query_value(download_token)}"

    def list_url(self, **kwargs: Any) -> str:
        return f"{self.bucket_url}?{encode_query(build_list_params(**kwargs))}"


__all__ = [
    "MAX_LIST_RESULTS",
    "RequestBuilder",
    "build_list_params",
    "encode_query",
    "escape_query_value",
]
