"""
S3 storage adapter tests.

Uses a fake boto3 client; no network.
"""

from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from src.adapters.s3_storage import S3Storage
from src.core.ports.storage import KeyExistsError, StorageError


def client_error(code: str, operation: str = "PutObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """Subset of the boto3 S3 client honouring IfNoneMatch='*'."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self.put_calls: list[dict[str, Any]] = []

    def put_object(self, **params: Any) -> dict[str, Any]:
        self.put_calls.append(params)
        if params.get("IfNoneMatch") == "*" and params["Key"] in self.objects:
            raise client_error("PreconditionFailed")
        self.objects[params["Key"]] = params
        return {"ETag": '"etag-1"'}


class FailingS3Client(FakeS3Client):
    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error

    def put_object(self, **params: Any) -> dict[str, Any]:
        raise self.error


@pytest.fixture
def client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def storage(client: FakeS3Client) -> S3Storage:
    return S3Storage("profile-images", client=client)


class TestS3Storage:
    def test_put_is_conditional(self, storage: S3Storage, client: FakeS3Client) -> None:
        meta = storage.put("abc", b"bytes", "image/png")

        call = client.put_calls[0]
        assert call["Bucket"] == "profile-images"
        assert call["IfNoneMatch"] == "*"
        assert call["ContentType"] == "image/png"
        assert call["Metadata"]["sha256"] == meta.sha256
        assert meta.etag == '"etag-1"'

    def test_existing_key(self, storage: S3Storage) -> None:
        storage.put("abc", b"one", "image/png")

        with pytest.raises(KeyExistsError):
            storage.put("abc", b"two", "image/png")

    def test_access_denied_is_storage_error(self) -> None:
        storage = S3Storage("b", client=FailingS3Client(client_error("AccessDenied")))

        with pytest.raises(StorageError) as exc_info:
            storage.put("abc", b"x", "image/png")

        assert not isinstance(exc_info.value, KeyExistsError)

    def test_connection_error_is_storage_error(self) -> None:
        error = EndpointConnectionError(endpoint_url="https://s3.example.com")
        storage = S3Storage("b", client=FailingS3Client(error))

        with pytest.raises(StorageError):
            storage.put("abc", b"x", "image/png")

    def test_bucket_required(self, client: FakeS3Client) -> None:
        with pytest.raises(ValueError):
            S3Storage("", client=client)
