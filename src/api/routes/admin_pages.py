"""Admin routes for managing the caller's pages."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from src.api.deps import get_current_owner, get_page_service
from src.api.errors import raise_for_errors
from src.api.schemas import (
    BioInfoRequest,
    PageCreateRequest,
    PageListResponse,
    PageRenameRequest,
    RemovedResponse,
)
from src.components.pages import (
    BioInfoInput,
    CreatePageInput,
    GetPageInput,
    ListPagesInput,
    PageDirectoryService,
    RemovePageInput,
    RenamePageInput,
    UpdatePageColorsInput,
    UpdatePageInfoInput,
    run_create,
    run_get,
    run_list,
    run_remove,
    run_rename,
    run_update_colors,
    run_update_info,
)
from src.domain.entities import BioInfo, Page

router = APIRouter()


def _bio_input(req: BioInfoRequest) -> BioInfoInput:
    return BioInfoInput(
        name=req.name,
        description_title=req.description_title,
        image_url=req.image_url,
    )


@router.get("", response_model=PageListResponse)
def list_pages(
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> PageListResponse:
    """List the caller's pages, oldest first."""
    result = run_list(ListPagesInput(owner=owner), service)
    if not result.success:
        raise_for_errors(result.errors)
    return PageListResponse(items=list(result.pages), total=result.total)


@router.post("", response_model=Page, status_code=status.HTTP_201_CREATED)
def create_page(
    req: PageCreateRequest,
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> Page:
    """Claim a page id for the caller."""
    inp = CreatePageInput(page_id=req.id, owner=owner, bio_info=_bio_input(req.bio_info))
    result = run_create(inp, service)
    if not result.success or result.page is None:
        raise_for_errors(result.errors)
    return result.page


@router.get("/{page_id}", response_model=Page)
def get_page(
    page_id: str,
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> Page:
    """Get one of the caller's pages."""
    result = run_get(GetPageInput(page_id=page_id, owner=owner), service)
    if not result.success or result.page is None:
        raise_for_errors(result.errors)
    return result.page


@router.put("/{page_id}/info", response_model=BioInfo)
def update_page_info(
    page_id: str,
    req: BioInfoRequest,
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> BioInfo:
    """Replace the page's bio info."""
    inp = UpdatePageInfoInput(page_id=page_id, owner=owner, bio_info=_bio_input(req))
    result = run_update_info(inp, service)
    if not result.success or result.bio_info is None:
        raise_for_errors(result.errors)
    return result.bio_info


@router.put("/{page_id}/colors", response_model=dict[str, str])
def update_page_colors(
    page_id: str,
    colors: dict[str, Any] = Body(...),
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> dict[str, str]:
    """Replace the page's color map. Body is the map itself."""
    inp = UpdatePageColorsInput(page_id=page_id, owner=owner, colors=colors)
    result = run_update_colors(inp, service)
    if not result.success or result.colors is None:
        raise_for_errors(result.errors)
    return result.colors


@router.delete("/{page_id}", response_model=RemovedResponse)
def remove_page(
    page_id: str,
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> RemovedResponse:
    """Delete one of the caller's pages."""
    result = run_remove(RemovePageInput(page_id=page_id, owner=owner), service)
    if not result.success:
        raise_for_errors(result.errors)
    return RemovedResponse(removed=result.removed)


@router.post("/{page_id}/rename", response_model=Page)
def rename_page(
    page_id: str,
    req: PageRenameRequest,
    owner: str = Depends(get_current_owner),
    service: PageDirectoryService = Depends(get_page_service),
) -> Page:
    """Move a page to a new id, keeping its contents."""
    inp = RenamePageInput(page_id=page_id, owner=owner, new_page_id=req.new_id)
    result = run_rename(inp, service)
    if not result.success or result.page is None:
        raise_for_errors(result.errors)
    return result.page
