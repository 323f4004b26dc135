"""
Assets component - Profile image upload to object storage.
"""

from .component import (
    build_public_url,
    derive_object_key,
    format_upload_time,
    run_upload_profile_image,
    upload_profile_image,
)
from .models import ProfileImageConfig, UploadOutput, UploadProfileImageInput
from .ports import ClockPort, StoragePort

__all__ = [
    # Entry points
    "run_upload_profile_image",
    "upload_profile_image",
    # Helpers
    "derive_object_key",
    "build_public_url",
    "format_upload_time",
    # Models
    "ProfileImageConfig",
    "UploadProfileImageInput",
    "UploadOutput",
    # Ports
    "StoragePort",
    "ClockPort",
]
