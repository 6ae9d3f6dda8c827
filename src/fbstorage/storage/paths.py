from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

DEFAULT_DELIMITER = "/"


@dataclass(frozen=True, slots=True)
class ResourcePath:
    """Hierarchical path of a storage object or prefix.

    ``root`` is the first path component and ``segments`` the remaining ones.
    Empty components are dropped on construction, so ``"a//b/"`` and ``"a/b"``
    are the same path. The bucket top level has an empty ``root`` and no
    segments.
    """

    root: str = ""
    segments: tuple[str, ...] = ()
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter must not be empty")
        if not self.root and self.segments:
            raise ValueError("segments require a root component")
        if any(not segment for segment in self.segments):
            raise ValueError("segments must not contain empty components")

    @classmethod
    def parse(cls, path: str, delimiter: str = DEFAULT_DELIMITER) -> ResourcePath:
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        if not path or not path.strip():
            return cls("", (), delimiter)
        parts = [part for part in path.split(delimiter) if part]
        if not parts:
            return cls("", (), delimiter)
        return cls(parts[0], tuple(parts[1:]), delimiter)

    @property
    def is_root(self) -> bool:
        return not self.root

    @property
    def canonical(self) -> str:
        if self.segments:
            return self.root + self.delimiter + self.delimiter.join(self.segments)
        return self.root

    @property
    def name(self) -> str:
        """Last component of the path, empty for the bucket top level."""
        return self.segments[-1] if self.segments else self.root

    @property
    def escaped(self) -> str:
        """Canonical path percent-encoded as one opaque URL component.

        Used both as the ``name`` query value of uploads and as the object
        segment of resource URLs; the delimiter is encoded too.
        """
        return quote(self.canonical, safe="")

    @property
    def listing_prefix(self) -> str | None:
        """Prefix that scopes a listing to this path's children."""
        if self.is_root:
            return None
        return self.canonical + self.delimiter

    def child(self, name: str) -> ResourcePath:
        """Return a new path with ``name`` appended.

        ``name`` may itself contain delimiters (``"to/file.png"``).
        """
        extra = ResourcePath.parse(name, self.delimiter)
        if extra.is_root:
            return self
        if self.is_root:
            return extra
        return ResourcePath(
            self.root,
            self.segments + (extra.root,) + extra.segments,
            self.delimiter,
        )

    def __str__(self) -> str:
        return self.canonical


__all__ = ["DEFAULT_DELIMITER", "ResourcePath"]
