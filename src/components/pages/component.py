"""
Pages component - Page directory entry points.

Shell Layer - calls the service and converts PageError into output errors.
"""

from __future__ import annotations

from src.domain.errors import PageError

from ._impl import PageDirectoryService
from .models import (
    AvailabilityOutput,
    CheckAvailabilityInput,
    CreatePageInput,
    GetPageInput,
    GetPublicPageInput,
    ListPagesInput,
    PageColorsOutput,
    PageInfoOutput,
    PageListOutput,
    PageOutput,
    RemovePageInput,
    RemovePageOutput,
    RenamePageInput,
    UpdatePageColorsInput,
    UpdatePageInfoInput,
)


def run_create(input_data: CreatePageInput, service: PageDirectoryService) -> PageOutput:
    """Create a new page."""
    try:
        page = service.create(input_data.page_id, input_data.owner, input_data.bio_info)
    except PageError as e:
        return PageOutput(page=None, errors=(e.to_detail(),), success=False)
    return PageOutput(page=page, errors=(), success=True)


def run_check_availability(
    input_data: CheckAvailabilityInput,
    service: PageDirectoryService,
) -> AvailabilityOutput:
    """Check whether a page id is free."""
    try:
        available = service.check_availability(input_data.page_id)
    except PageError as e:
        return AvailabilityOutput(available=None, errors=(e.to_detail(),), success=False)
    return AvailabilityOutput(available=available, errors=(), success=True)


def run_get(input_data: GetPageInput, service: PageDirectoryService) -> PageOutput:
    """Get one of the owner's pages."""
    try:
        page = service.get(input_data.page_id, input_data.owner)
    except PageError as e:
        return PageOutput(page=None, errors=(e.to_detail(),), success=False)
    return PageOutput(page=page, errors=(), success=True)


def run_get_public(input_data: GetPublicPageInput, service: PageDirectoryService) -> PageOutput:
    """Get a page for the public renderer."""
    try:
        page = service.get_public(input_data.page_id)
    except PageError as e:
        return PageOutput(page=None, errors=(e.to_detail(),), success=False)
    return PageOutput(page=page, errors=(), success=True)


def run_update_info(
    input_data: UpdatePageInfoInput,
    service: PageDirectoryService,
) -> PageInfoOutput:
    """Replace a page's bio info."""
    try:
        info = service.update_info(input_data.page_id, input_data.owner, input_data.bio_info)
    except PageError as e:
        return PageInfoOutput(bio_info=None, errors=(e.to_detail(),), success=False)
    return PageInfoOutput(bio_info=info, errors=(), success=True)


def run_update_colors(
    input_data: UpdatePageColorsInput,
    service: PageDirectoryService,
) -> PageColorsOutput:
    """Replace a page's colors."""
    try:
        colors = service.update_colors(input_data.page_id, input_data.owner, input_data.colors)
    except PageError as e:
        return PageColorsOutput(colors=None, errors=(e.to_detail(),), success=False)
    return PageColorsOutput(colors=colors, errors=(), success=True)


def run_list(input_data: ListPagesInput, service: PageDirectoryService) -> PageListOutput:
    """List the owner's pages."""
    try:
        pages = service.list(input_data.owner)
    except PageError as e:
        return PageListOutput(pages=(), total=0, errors=(e.to_detail(),), success=False)
    return PageListOutput(pages=tuple(pages), total=len(pages))


def run_remove(input_data: RemovePageInput, service: PageDirectoryService) -> RemovePageOutput:
    """Delete a page."""
    try:
        removed = service.remove(input_data.page_id, input_data.owner)
    except PageError as e:
        return RemovePageOutput(removed=False, errors=(e.to_detail(),), success=False)
    return RemovePageOutput(removed=removed, errors=(), success=True)


def run_rename(input_data: RenamePageInput, service: PageDirectoryService) -> PageOutput:
    """Move a page to a new id."""
    try:
        page = service.rename(input_data.page_id, input_data.owner, input_data.new_page_id)
    except PageError as e:
        return PageOutput(page=None, errors=(e.to_detail(),), success=False)
    return PageOutput(page=page, errors=(), success=True)
