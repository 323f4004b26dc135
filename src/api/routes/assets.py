"""
Profile image upload route.

Stores the file and returns its CDN URL; the client then saves that URL
through the page info update.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from src.api.deps import (
    get_clock,
    get_current_owner,
    get_profile_image_config,
    get_storage,
)
from src.api.errors import raise_for_errors
from src.api.schemas import ProfileImageResponse
from src.components.assets import (
    ProfileImageConfig,
    UploadProfileImageInput,
    run_upload_profile_image,
)
from src.core.ports.storage import StoragePort
from src.core.ports.time import ClockPort

router = APIRouter()


@router.post("/{page_id}/profile-image", response_model=ProfileImageResponse)
def upload_profile_image(
    page_id: str,
    file: UploadFile | None = File(None),
    owner: str = Depends(get_current_owner),
    storage: StoragePort = Depends(get_storage),
    clock: ClockPort = Depends(get_clock),
    config: ProfileImageConfig = Depends(get_profile_image_config),
) -> ProfileImageResponse:
    """Upload a profile image for one of the caller's pages."""
    content = file.file.read() if file is not None else None

    inp = UploadProfileImageInput(
        owner=owner,
        page_id=page_id,
        data=content,
        content_type=file.content_type if file is not None else None,
    )
    result = run_upload_profile_image(inp, storage=storage, clock=clock, config=config)
    if not result.success or result.image_url is None or result.key is None:
        raise_for_errors(result.errors)
    return ProfileImageResponse(image_url=result.image_url, key=result.key)
