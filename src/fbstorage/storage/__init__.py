from .auth import AuthConfiguration, AuthenticationClient, AuthHeaderProvider, EnvAuthenticationClient
from .client import StorageClient
from .errors import (
    StorageArgumentError,
    StorageAuthError,
    StorageError,
    StorageNotFoundError,
    StorageTransferError,
    UploadCancelledError,
)
from .paths import DEFAULT_DELIMITER, ResourcePath
from .registry import ResourceRegistry
from .resource import StorageResource
from .types import ListingPage, ObjectMetadata, OnUploadProgressCallback, UploadProgress
from .urls import MAX_LIST_RESULTS, RequestBuilder

__all__ = [
    # errors
    "StorageError",
    "StorageAuthError",
    "StorageTransferError",
    "StorageNotFoundError",
    "UploadCancelledError",
    "StorageArgumentError",
    # auth
    "AuthConfiguration",
    "AuthenticationClient",
    "AuthHeaderProvider",
    "EnvAuthenticationClient",
    # addressing
    "DEFAULT_DELIMITER",
    "ResourcePath",
    "RequestBuilder",
    "MAX_LIST_RESULTS",
    "ResourceRegistry",
    # client
    "StorageClient",
    "StorageResource",
    # types
    "UploadProgress",
    "OnUploadProgressCallback",
    "ObjectMetadata",
    "ListingPage",
]
