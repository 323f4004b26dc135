"""
Object Storage Adapter Interface.

Protocol-based interface for object storage operations.
Implementations: Local filesystem (dev, single server), S3-compatible.

Profile images are written under keys derived by the upload handler and
served from a content-delivery domain in front of the bucket.

Invariants:
- Keys once written cannot be overwritten
- sha256 stored equals sha256 of the bytes written
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class StoredObject:
    """Metadata for a stored object."""

    key: str
    size_bytes: int
    content_type: str
    sha256: str
    etag: str


class StoragePort(Protocol):
    """
    Object storage port interface.

    Provides immutable blob storage under caller-chosen keys.
    """

    def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        """
        Store object bytes under the given key.

        Args:
            key: Storage key (must be unique and immutable once written)
            data: Object bytes
            content_type: MIME type

        Returns:
            StoredObject with metadata including computed sha256

        Raises:
            KeyExistsError: If key already exists
            StorageError: If the backend fails
        """
        ...


class StorageError(Exception):
    """Base class for storage errors."""


class KeyExistsError(StorageError):
    """Raised when attempting to write to an existing key (immutability violation)."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key already exists (immutable): {key}")

