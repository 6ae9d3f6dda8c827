"""Shared HTTP infrastructure for the storage client."""

from .clients import create_base_async_client
from .config import DEFAULT_STORAGE_ENDPOINT, DEFAULT_TIMEOUT, HTTPConfig, get_storage_endpoint
from .transport import AsyncTransport, RawBody, RequestBody

__all__ = [
    "DEFAULT_STORAGE_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "HTTPConfig",
    "get_storage_endpoint",
    "AsyncTransport",
    "RawBody",
    "RequestBody",
    "create_base_async_client",
]
