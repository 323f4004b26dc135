"""
Assets component - Profile image upload.

Stores the uploaded bytes in object storage under a SHA-512 hex key and
returns the CDN URL for it. Updating bioInfo.imageUrl is left to the caller.

Invariants:
- I1: Empty or missing bytes are rejected before any storage write
- I2: The key digests owner, page id and upload time, not the file bytes,
  so every upload attempt gets a fresh key
- I3: URL is https://<cdn domain>/<percent-encoded key>
"""

from __future__ import annotations

import hashlib
import logging
from datetime import UTC, datetime
from urllib.parse import quote

from src.components.pages import dependency_guard
from src.core.ports.storage import KeyExistsError
from src.domain.errors import ConflictError, InvalidArgumentError, PageError
from src.domain.page_id import ensure_valid_page_id

from .models import ProfileImageConfig, UploadOutput, UploadProfileImageInput
from .ports import ClockPort, StoragePort

logger = logging.getLogger(__name__)

# --- Helper Functions ---


def format_upload_time(uploaded_at: datetime) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    if uploaded_at.tzinfo is None:
        uploaded_at = uploaded_at.replace(tzinfo=UTC)
    return uploaded_at.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def derive_object_key(owner: str, page_id: str, uploaded_at: datetime) -> str:
    """Hex SHA-512 of '<owner>-<page id>-<upload time>'."""
    seed = f"{owner}-{page_id}-{format_upload_time(uploaded_at)}"
    return hashlib.sha512(seed.encode("utf-8")).hexdigest()


def build_public_url(cdn_domain: str, key: str) -> str:
    """CDN URL for an object key."""
    domain = cdn_domain.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
    return f"https://{domain}/{quote(key, safe='')}"


# --- Component Entry Points ---


def upload_profile_image(
    owner: str,
    page_id: str,
    data: bytes | None,
    content_type: str | None = None,
    *,
    storage: StoragePort,
    clock: ClockPort,
    config: ProfileImageConfig,
) -> tuple[str, str]:
    """
    Store a profile image.

    Returns:
        Tuple of (image_url, key)

    Raises:
        InvalidArgumentError: empty upload or bad page id
        ConflictError: key collision with a simultaneous upload
        DependencyFailureError: object storage failed
    """
    if not data:
        raise InvalidArgumentError("file_empty", "File is empty", "file")
    ensure_valid_page_id(page_id, config.page_id_rules, field="pageId")

    key = derive_object_key(owner, page_id, clock.now_utc())

    with dependency_guard("upload_profile_image"):
        try:
            storage.put(key, data, content_type or config.default_content_type)
        except KeyExistsError as e:
            # Same owner, page and millisecond as another upload
            raise ConflictError(
                "upload_key_taken", "Another upload for this page is in progress", "file"
            ) from e

    logger.info("Stored profile image for page %s (%d bytes)", page_id, len(data))
    return build_public_url(config.cdn_domain, key), key


def run_upload_profile_image(
    inp: UploadProfileImageInput,
    *,
    storage: StoragePort,
    clock: ClockPort,
    config: ProfileImageConfig,
) -> UploadOutput:
    """
    Upload a profile image.

    Args:
        inp: Owner, page id and file bytes.
        storage: Object storage port.
        clock: Time source for the key.
        config: CDN domain and defaults.

    Returns:
        UploadOutput with the public URL or errors.
    """
    try:
        image_url, key = upload_profile_image(
            inp.owner,
            inp.page_id,
            inp.data,
            inp.content_type,
            storage=storage,
            clock=clock,
            config=config,
        )
    except PageError as e:
        return UploadOutput(image_url=None, key=None, errors=(e.to_detail(),), success=False)
    return UploadOutput(image_url=image_url, key=key, errors=(), success=True)
