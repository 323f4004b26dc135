"""Admin routes for a page's ordered links and social links."""

from fastapi import APIRouter, Body, Depends, status

from src.api.deps import get_current_owner, get_link_service, get_social_link_service
from src.api.errors import raise_for_errors
from src.api.schemas import (
    LinkCreateRequest,
    LinkListResponse,
    LinkUpdateRequest,
    RemovedResponse,
    SocialLinkCreateRequest,
    SocialLinkListResponse,
    SocialLinkUpdateRequest,
)
from src.components.links import (
    AddLinkInput,
    AddSocialLinkInput,
    LinkService,
    ListItemsInput,
    RemoveItemInput,
    ReorderInput,
    SocialLinkService,
    UpdateLinkInput,
    UpdateSocialLinkInput,
    run_add,
    run_list,
    run_remove,
    run_reorder,
    run_update,
)
from src.domain.entities import Link, SocialLink

router = APIRouter()


# --- Links ---


@router.get("/{page_id}/links", response_model=LinkListResponse)
def list_links(
    page_id: str,
    owner: str = Depends(get_current_owner),
    service: LinkService = Depends(get_link_service),
) -> LinkListResponse:
    """List the page's links in display order."""
    result = run_list(ListItemsInput(page_id=page_id, owner=owner), service)
    if not result.success:
        raise_for_errors(result.errors)
    return LinkListResponse(items=list(result.items), total=result.total)  # type: ignore[arg-type]


@router.post("/{page_id}/links", response_model=Link, status_code=status.HTTP_201_CREATED)
def add_link(
    page_id: str,
    req: LinkCreateRequest,
    owner: str = Depends(get_current_owner),
    service: LinkService = Depends(get_link_service),
) -> Link:
    """Append a link."""
    inp = AddLinkInput(page_id=page_id, owner=owner, url=req.url, name=req.name)
    result = run_add(inp, service)
    if not result.success or result.item is None:
        raise_for_errors(result.errors)
    return result.item  # type: ignore[return-value]


@router.post("/{page_id}/links/reorder", response_model=LinkListResponse)
def reorder_links(
    page_id: str,
    ordered_ids: list[str] = Body(...),
    owner: str = Depends(get_current_owner),
    service: LinkService = Depends(get_link_service),
) -> LinkListResponse:
    """Reorder links. Body is the full list of link ids in the new order."""
    inp = ReorderInput(page_id=page_id, owner=owner, ordered_ids=tuple(ordered_ids))
    result = run_reorder(inp, service)
    if not result.success:
        raise_for_errors(result.errors)
    return LinkListResponse(items=list(result.items), total=result.total)  # type: ignore[arg-type]


@router.put("/{page_id}/links/{link_id}", response_model=Link)
def update_link(
    page_id: str,
    link_id: str,
    req: LinkUpdateRequest,
    owner: str = Depends(get_current_owner),
    service: LinkService = Depends(get_link_service),
) -> Link:
    """Update a link's name and/or url."""
    inp = UpdateLinkInput(
        page_id=page_id, owner=owner, item_id=link_id, url=req.url, name=req.name
    )
    result = run_update(inp, service)
    if not result.success or result.item is None:
        raise_for_errors(result.errors)
    return result.item  # type: ignore[return-value]


@router.delete("/{page_id}/links/{link_id}", response_model=RemovedResponse)
def remove_link(
    page_id: str,
    link_id: str,
    owner: str = Depends(get_current_owner),
    service: LinkService = Depends(get_link_service),
) -> RemovedResponse:
    """Remove a link."""
    result = run_remove(RemoveItemInput(page_id=page_id, owner=owner, item_id=link_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    return RemovedResponse(removed=result.removed)


# --- Social links ---


@router.get("/{page_id}/social-links", response_model=SocialLinkListResponse)
def list_social_links(
    page_id: str,
    owner: str = Depends(get_current_owner),
    service: SocialLinkService = Depends(get_social_link_service),
) -> SocialLinkListResponse:
    """List the page's social links in display order."""
    result = run_list(ListItemsInput(page_id=page_id, owner=owner), service)
    if not result.success:
        raise_for_errors(result.errors)
    return SocialLinkListResponse(items=list(result.items), total=result.total)  # type: ignore[arg-type]


@router.post(
    "/{page_id}/social-links", response_model=SocialLink, status_code=status.HTTP_201_CREATED
)
def add_social_link(
    page_id: str,
    req: SocialLinkCreateRequest,
    owner: str = Depends(get_current_owner),
    service: SocialLinkService = Depends(get_social_link_service),
) -> SocialLink:
    """Append a social link."""
    result = run_add(AddSocialLinkInput(page_id=page_id, owner=owner, url=req.url), service)
    if not result.success or result.item is None:
        raise_for_errors(result.errors)
    return result.item  # type: ignore[return-value]


@router.post("/{page_id}/social-links/reorder", response_model=SocialLinkListResponse)
def reorder_social_links(
    page_id: str,
    ordered_ids: list[str] = Body(...),
    owner: str = Depends(get_current_owner),
    service: SocialLinkService = Depends(get_social_link_service),
) -> SocialLinkListResponse:
    """Reorder social links. Body is the full list of ids in the new order."""
    inp = ReorderInput(page_id=page_id, owner=owner, ordered_ids=tuple(ordered_ids))
    result = run_reorder(inp, service)
    if not result.success:
        raise_for_errors(result.errors)
    return SocialLinkListResponse(items=list(result.items), total=result.total)  # type: ignore[arg-type]


@router.put("/{page_id}/social-links/{link_id}", response_model=SocialLink)
def update_social_link(
    page_id: str,
    link_id: str,
    req: SocialLinkUpdateRequest,
    owner: str = Depends(get_current_owner),
    service: SocialLinkService = Depends(get_social_link_service),
) -> SocialLink:
    """Update a social link's url."""
    inp = UpdateSocialLinkInput(page_id=page_id, owner=owner, item_id=link_id, url=req.url)
    result = run_update(inp, service)
    if not result.success or result.item is None:
        raise_for_errors(result.errors)
    return result.item  # type: ignore[return-value]


@router.delete("/{page_id}/social-links/{link_id}", response_model=RemovedResponse)
def remove_social_link(
    page_id: str,
    link_id: str,
    owner: str = Depends(get_current_owner),
    service: SocialLinkService = Depends(get_social_link_service),
) -> RemovedResponse:
    """Remove a social link."""
    result = run_remove(RemoveItemInput(page_id=page_id, owner=owner, item_id=link_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    return RemovedResponse(removed=result.removed)
