"""
Assets component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.errors import ErrorDetail
from src.rules.models import PageIdRules


@dataclass(frozen=True)
class ProfileImageConfig:
    """Where uploaded profile images are published."""

    cdn_domain: str
    default_content_type: str = "application/octet-stream"
    page_id_rules: PageIdRules = field(default_factory=PageIdRules)


@dataclass(frozen=True)
class UploadProfileImageInput:
    """Input for uploading a profile image."""

    owner: str
    page_id: str
    data: bytes | None
    content_type: str | None = None


@dataclass(frozen=True)
class UploadOutput:
    """Output from upload. image_url is what the caller puts in bioInfo.imageUrl."""

    image_url: str | None
    key: str | None
    errors: tuple[ErrorDetail, ...]
    success: bool
