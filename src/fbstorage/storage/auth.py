from __future__ import annotations

import os
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol

from .errors import StorageAuthError
from .utils import await_if_necessary

AUTH_SCHEME = "Firebase"


@dataclass
class AuthConfiguration:
    project_id: str | None = None
    api_key: str | None = None


class AuthenticationClient(Protocol):
    """Source of id tokens and project settings.

    ``get_id_token`` may be a plain or a coroutine function. Whatever it
    raises reaches the storage caller unchanged.
    """

    @property
    def configuration(self) -> AuthConfiguration: ...

    def get_id_token(self) -> str | None | Awaitable[str | None]: ...


class EnvAuthenticationClient:
    """Authentication client backed by environment variables.

    Reads ``FIREBASE_ID_TOKEN`` on every call so a refreshed token is picked
    up, plus ``FIREBASE_PROJECT_ID`` and ``FIREBASE_API_KEY``.
    """

    def __init__(
        self,
        *,
        id_token: str | None = None,
        project_id: str | None = None,
        api_key: str | None = None,
    ) -> None:
        self._id_token = id_token
        self._configuration = AuthConfiguration(
            project_id=project_id or os.getenv("FIREBASE_PROJECT_ID"),
            api_key=api_key or os.getenv("FIREBASE_API_KEY"),
        )

    @property
    def configuration(self) -> AuthConfiguration:
        return self._configuration

    def get_id_token(self) -> str:
        token = self._id_token or os.getenv("FIREBASE_ID_TOKEN")
        if not token:
            raise StorageAuthError(
                "No id token found. Either configure the `FIREBASE_ID_TOKEN` environment "
                "variable, or pass `id_token` to EnvAuthenticationClient."
            )
        return token


class AuthHeaderProvider:
    """Fetches a fresh id token for every request."""

    def __init__(self, authentication_client: AuthenticationClient) -> None:
        self._auth = authentication_client

    @property
    def configuration(self) -> AuthConfiguration:
        return self._auth.configuration

    async def get_authorization_header(self) -> str:
        token = await await_if_necessary(self._auth.get_id_token())
        if not token:
            raise StorageAuthError()
        return f"{AUTH_SCHEME} {token}"


__all__ = [
    "AUTH_SCHEME",
    "AuthConfiguration",
    "AuthenticationClient",
    "EnvAuthenticationClient",
    "AuthHeaderProvider",
]
