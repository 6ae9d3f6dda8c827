"""Client factory functions for creating pre-configured httpx clients."""

from __future__ import annotations

import httpx

from .config import DEFAULT_TIMEOUT


def create_base_async_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth).

    Auth is attached per request by the storage layer, never as a client
    default, so one client can be shared by concurrent operations.

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.

    Returns:
        An httpx.AsyncClient with basic configuration.
    """
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.AsyncClient(timeout=httpx.Timeout(effective_timeout))


__all__ = ["create_base_async_client"]
