from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from .utils import parse_datetime, parse_int

SpeedUnit = Literal["b", "kb", "mb", "gb", "tb"]
ListPrefixPolicy = Literal["resource", "explicit"]


def compute_percentage(position: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(100, position * 100 // length))


@dataclass(frozen=True, slots=True)
class UploadProgress:
    bytes_transferred: int
    total_bytes: int
    percentage: int
    speed: float | None = None
    unit: SpeedUnit | None = None

    @classmethod
    def from_position(
        cls,
        position: int,
        length: int,
        speed: float | None = None,
        unit: SpeedUnit | None = None,
    ) -> UploadProgress:
        return cls(
            bytes_transferred=position,
            total_bytes=length,
            percentage=compute_percentage(position, length),
            speed=speed,
            unit=unit,
        )

    @property
    def avg_speed(self) -> str | None:
        if self.speed is None or self.unit is None:
            return None
        return f"{self.speed:g} {self.unit}/s"


OnUploadProgressCallback = (
    Callable[[UploadProgress], None] | Callable[[UploadProgress], Awaitable[None]]
)

_METADATA_FIELDS = {
    "name": "name",
    "bucket": "bucket",
    "kind": "kind",
    "id": "id",
    "selfLink": "self_link",
    "mediaLink": "media_link",
    "contentType": "content_type",
    "size": "size",
    "timeCreated": "time_created",
    "updated": "updated",
    "md5Hash": "md5_hash",
    "contentEncoding": "content_encoding",
    "contentDisposition": "content_disposition",
    "downloadTokens": "download_tokens",
}


@dataclass(slots=True)
class ObjectMetadata:
    """Object attributes as returned by the storage service.

    Known fields are typed; anything else the service sends is kept in
    ``extra``. ``raw`` holds the decoded response unchanged.
    """

    name: str = ""
    bucket: str | None = None
    kind: str | None = None
    id: str | None = None
    self_link: str | None = None
    media_link: str | None = None
    content_type: str | None = None
    size: int | None = None
    time_created: datetime | None = None
    updated: datetime | None = None
    md5_hash: str | None = None
    content_encoding: str | None = None
    content_disposition: str | None = None
    download_tokens: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectMetadata:
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            attr = _METADATA_FIELDS.get(key)
            if attr is None:
                extra[key] = value
            else:
                known[attr] = value

        if "size" in known:
            known["size"] = parse_int(known["size"])
        for attr in ("time_created", "updated"):
            if isinstance(known.get(attr), str):
                known[attr] = parse_datetime(known[attr])
        if known.get("name") is None:
            known["name"] = ""
        if known.get("download_tokens") is not None:
            known["download_tokens"] = str(known["download_tokens"])

        return cls(**known, extra=extra, raw=dict(data))

    @property
    def download_token(self) -> str | None:
        """First download token; the service may return a comma-separated list."""
        if not self.download_tokens:
            return None
        token = self.download_tokens.split(",")[0].strip()
        return token or None


@dataclass(slots=True)
class ListingPage:
    kind: str | None
    prefixes: list[str]
    items: list[ObjectMetadata]
    next_page_token: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ListingPage:
        return cls(
            kind=data.get("kind"),
            prefixes=[str(prefix) for prefix in data.get("prefixes") or []],
            items=[ObjectMetadata.from_dict(item) for item in data.get("items") or []],
            next_page_token=data.get("nextPageToken"),
        )


__all__ = [
    "SpeedUnit",
    "ListPrefixPolicy",
    "UploadProgress",
    "OnUploadProgressCallback",
    "ObjectMetadata",
    "ListingPage",
    "compute_percentage",
]
