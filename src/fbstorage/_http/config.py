"""HTTP configuration for Firebase Storage clients."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_STORAGE_ENDPOINT = "https://firebasestorage.googleapis.com/v0"
DEFAULT_TIMEOUT = 60.0


def get_storage_endpoint(endpoint: str | None = None) -> str:
    """Resolve the REST endpoint from argument or environment."""
    resolved = endpoint or os.getenv("FIREBASE_STORAGE_ENDPOINT") or DEFAULT_STORAGE_ENDPOINT
    return resolved.rstrip("/")


@dataclass
class HTTPConfig:
    """Configuration for HTTP requests to the storage service."""

    endpoint: str = DEFAULT_STORAGE_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    default_headers: dict[str, str] = field(default_factory=dict)

    def get_headers(self) -> dict[str, str]:
        """Build the headers shared by every request."""
        return {"accept": "application/json", **self.default_headers}


__all__ = ["HTTPConfig", "DEFAULT_STORAGE_ENDPOINT", "DEFAULT_TIMEOUT", "get_storage_endpoint"]
