from fastapi import APIRouter, Depends

from src.api.deps import get_page_service
from src.api.errors import raise_for_errors
from src.api.schemas import AvailabilityResponse, PublicPageResponse
from src.components.pages import (
    CheckAvailabilityInput,
    GetPublicPageInput,
    PageDirectoryService,
    run_check_availability,
    run_get_public,
)
router = APIRouter()


@router.get("/pages/{page_id}/availability", response_model=AvailabilityResponse)
def check_availability(
    page_id: str,
    service: PageDirectoryService = Depends(get_page_service),
) -> AvailabilityResponse:
    """Whether a page id can still be claimed."""
    result = run_check_availability(CheckAvailabilityInput(page_id=page_id), service)
    if not result.success or result.available is None:
        raise_for_errors(result.errors)
    return AvailabilityResponse(id=page_id, available=result.available)


@router.get("/public/pages/{page_id}", response_model=PublicPageResponse)
def get_public_page(
    page_id: str,
    service: PageDirectoryService = Depends(get_page_service),
) -> PublicPageResponse:
    """Get a page for the public link-in-bio view."""
    result = run_get_public(GetPublicPageInput(page_id=page_id), service)
    if not result.success or result.page is None:
        raise_for_errors(result.errors)
    return PublicPageResponse.from_page(result.page)
