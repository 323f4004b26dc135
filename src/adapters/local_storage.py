"""
Local Filesystem Storage Adapter.

Implements the StoragePort interface using the local filesystem.
Used in development and single-server deployments, where a static file
server (or CDN origin pull) exposes the storage directory.

Invariants:
- Keys once written cannot be overwritten
- sha256 in metadata equals sha256 of the stored bytes
"""

from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path

from src.core.ports.storage import (
    KeyExistsError,
    StorageError,
    StoredObject,
)


class LocalFileStorage:
    """
    Local filesystem implementation of StoragePort.

    Stores objects as files with accompanying metadata JSON.
    Example key: "<hex digest>" -> {base_path}/<hex digest>.bin + .meta.json
    """

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path)

        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_to_paths(self, key: str) -> tuple[Path, Path]:
        """Convert storage key to file paths (data and metadata)."""
        # No directory traversal out of base_path
        safe_key = key.replace("..", "").lstrip("/")
        if not safe_key:
            raise StorageError("Storage key is empty")
        data_path = self.base_path / f"{safe_key}.bin"
        meta_path = self.base_path / f"{safe_key}.meta.json"
        return data_path, meta_path

    @staticmethod
    def _compute_etag(sha256_hex: str) -> str:
        return f'"{sha256_hex[:32]}"'

    def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        """
        Store object bytes under the given key.

        Raises KeyExistsError if key already exists.
        """
        data_path, meta_path = self._key_to_paths(key)

        if data_path.exists():
            raise KeyExistsError(key)

        sha256_hex = hashlib.sha256(data).hexdigest()
        metadata = StoredObject(
            key=key,
            size_bytes=len(data),
            content_type=content_type,
            sha256=sha256_hex,
            etag=self._compute_etag(sha256_hex),
        )

        try:
            data_path.parent.mkdir(parents=True, exist_ok=True)
            # "xb" fails if a concurrent writer created the file first
            with open(data_path, "xb") as f:
                f.write(data)
            with open(meta_path, "w") as f:
                json.dump(
                    {
                        "key": metadata.key,
                        "size_bytes": metadata.size_bytes,
                        "content_type": metadata.content_type,
                        "sha256": metadata.sha256,
                        "etag": metadata.etag,
                    },
                    f,
                )
        except FileExistsError as e:
            raise KeyExistsError(key) from e
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

        return metadata


def create_local_storage(
    base_path: str | Path | None = None,
    *,
    env_var: str = "LINKHUB_ASSETS_DIR",
    default_path: str = "./data/assets",
) -> LocalFileStorage:
    """
    Factory function to create LocalFileStorage from config.

    Uses base_path if given, otherwise the env_var environment variable,
    otherwise default_path.
    """
    path = base_path or os.environ.get(env_var) or default_path
    return LocalFileStorage(path)
