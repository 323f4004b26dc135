"""
S3-compatible Storage Adapter.

Implements the StoragePort interface on top of an S3 bucket (AWS S3,
Cloudflare R2, MinIO). Objects are written with a conditional put so an
existing key is never overwritten.
"""

from __future__ import annotations

import hashlib
import logging
import os
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.core.ports.storage import (
    KeyExistsError,
    StorageError,
    StoredObject,
)

logger = logging.getLogger(__name__)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3Storage:
    """S3 implementation of StoragePort."""

    def __init__(
        self,
        bucket: str,
        *,
        client: Any | None = None,
        endpoint_url: str | None = None,
        region_name: str | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("S3 bucket name is required")
        self.bucket = bucket
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url or None,
            region_name=region_name or None,
        )

    def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        sha256_hex = hashlib.sha256(data).hexdigest()
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
            "IfNoneMatch": "*",
            "Metadata": {"sha256": sha256_hex},
        }
        try:
            response = self._client.put_object(**params)
        except ClientError as e:
            if _error_code(e) in {"PreconditionFailed", "ConditionalRequestConflict"}:
                raise KeyExistsError(key) from e
            raise StorageError(f"S3 put_object failed for {key}: {_error_code(e)}") from e
        except BotoCoreError as e:
            raise StorageError(f"S3 put_object failed for {key}: {e}") from e

        logger.debug("Stored s3://%s/%s (%d bytes)", self.bucket, key, len(data))
        return StoredObject(
            key=key,
            size_bytes=len(data),
            content_type=content_type,
            sha256=sha256_hex,
            etag=str(response.get("ETag", "")),
        )


def create_s3_storage(
    bucket: str | None = None,
    *,
    endpoint_url: str | None = None,
) -> S3Storage:
    """Create S3Storage from PROFILE_IMAGES_BUCKET_NAME / S3_ENDPOINT_URL."""
    return S3Storage(
        bucket or os.environ.get("PROFILE_IMAGES_BUCKET_NAME", ""),
        endpoint_url=endpoint_url or os.environ.get("S3_ENDPOINT_URL"),
        region_name=os.environ.get("AWS_REGION"),
    )
