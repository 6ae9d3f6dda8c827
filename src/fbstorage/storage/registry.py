from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resource import StorageResource

RegistryKey = tuple[str, str]


class ResourceRegistry:
    """Per-client cache of resources keyed by delimiter and canonical path."""

    def __init__(self) -> None:
        self._resources: dict[RegistryKey, StorageResource] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        key: RegistryKey,
        factory: Callable[[], StorageResource],
    ) -> StorageResource:
        with self._lock:
            resource = self._resources.get(key)
            if resource is None:
                resource = factory()
                self._resources[key] = resource
            return resource

    def rekey(self, resource: StorageResource, old_key: RegistryKey) -> None:
        """Move a resource whose path was extended in place to its new key.

        An instance already cached under the new key keeps its entry.
        """
        with self._lock:
            if self._resources.get(old_key) is resource:
                del self._resources[old_key]
            self._resources.setdefault(resource.registry_key, resource)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._resources

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)


__all__ = ["RegistryKey", "ResourceRegistry"]
