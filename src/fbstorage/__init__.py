"""Firebase Storage REST client."""

from .storage import (
    AuthConfiguration,
    EnvAuthenticationClient,
    ListingPage,
    ObjectMetadata,
    ResourcePath,
    StorageArgumentError,
    StorageAuthError,
    StorageClient,
    StorageError,
    StorageNotFoundError,
    StorageResource,
    StorageTransferError,
    UploadCancelledError,
    UploadProgress,
)

__version__ = "0.1.0"

__all__ = [
    "StorageClient",
    "StorageResource",
    "ResourcePath",
    "AuthConfiguration",
    "EnvAuthenticationClient",
    "UploadProgress",
    "ObjectMetadata",
    "ListingPage",
    "StorageError",
    "StorageAuthError",
    "StorageTransferError",
    "StorageNotFoundError",
    "UploadCancelledError",
    "StorageArgumentError",
]
