"""Snapshot of an object's HEAD response."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

__all__ = ["ObjectMetadata"]


@dataclass(frozen=True)
class ObjectMetadata:
    """File-like metadata for a remote object, captured once at open time.

    Attributes:
        size: Content length in bytes.
        last_modified: Modification time reported by the store, if any.
        etag: Entity tag with surrounding quotes stripped, if any.
        content_type: MIME type reported by the store, if any.
    """

    size: int
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    content_type: Optional[str] = None

    @classmethod
    def from_head(cls, response: Mapping[str, Any]) -> ObjectMetadata:
        """Build metadata from a raw ``head_object`` response.

        Parameters:
            response: The dict returned by ``head_object``.

        Returns:
            ObjectMetadata with ``size`` taken from ``ContentLength``.

        Raises:
            KeyError: If the response carries no ``ContentLength``.
        """
        etag = response.get("ETag")
        return cls(
            size=int(response["ContentLength"]),
            last_modified=response.get("LastModified"),
            etag=etag.strip('"') if etag else None,
            content_type=response.get("ContentType"),
        )

    @property
    def readonly(self) -> bool:
        """Objects are only ever opened for reading."""
        return True

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False

    def is_symlink(self) -> bool:
        return False
