"""
Links component - Link and social link collection entry points.

Each run_* takes the manager for the collection it works on
(LinkService or SocialLinkService).

Shell Layer - handles error conversion.
"""

from __future__ import annotations

from src.domain.errors import PageError

from ._impl import OrderedLinkCollection
from .models import (
    AddLinkInput,
    AddSocialLinkInput,
    ItemListOutput,
    ItemOutput,
    ListItemsInput,
    RemoveItemInput,
    RemoveItemOutput,
    ReorderInput,
    UpdateLinkInput,
    UpdateSocialLinkInput,
)


def run_list(input_data: ListItemsInput, service: OrderedLinkCollection) -> ItemListOutput:
    """List a page's collection in order."""
    try:
        items = service.list(input_data.page_id, input_data.owner)
    except PageError as e:
        return ItemListOutput(items=(), total=0, errors=(e.to_detail(),), success=False)
    return ItemListOutput(items=tuple(items), total=len(items))


def run_add(
    input_data: AddLinkInput | AddSocialLinkInput,
    service: OrderedLinkCollection,
) -> ItemOutput:
    """Append an entry."""
    name = input_data.name if isinstance(input_data, AddLinkInput) else None
    try:
        item = service.add(input_data.page_id, input_data.owner, input_data.url, name)
    except PageError as e:
        return ItemOutput(item=None, errors=(e.to_detail(),), success=False)
    return ItemOutput(item=item, errors=(), success=True)


def run_update(
    input_data: UpdateLinkInput | UpdateSocialLinkInput,
    service: OrderedLinkCollection,
) -> ItemOutput:
    """Update an entry's fields."""
    name = input_data.name if isinstance(input_data, UpdateLinkInput) else None
    try:
        item = service.update(
            input_data.page_id,
            input_data.owner,
            input_data.item_id,
            url=input_data.url,
            name=name,
        )
    except PageError as e:
        return ItemOutput(item=None, errors=(e.to_detail(),), success=False)
    return ItemOutput(item=item, errors=(), success=True)


def run_remove(input_data: RemoveItemInput, service: OrderedLinkCollection) -> RemoveItemOutput:
    """Remove an entry."""
    try:
        removed = service.remove(input_data.page_id, input_data.owner, input_data.item_id)
    except PageError as e:
        return RemoveItemOutput(removed=False, errors=(e.to_detail(),), success=False)
    return RemoveItemOutput(removed=removed, errors=(), success=True)


def run_reorder(input_data: ReorderInput, service: OrderedLinkCollection) -> ItemListOutput:
    """Replace the order of a collection."""
    try:
        items = service.reorder(input_data.page_id, input_data.owner, input_data.ordered_ids)
    except PageError as e:
        return ItemListOutput(items=(), total=0, errors=(e.to_detail(),), success=False)
    return ItemListOutput(items=tuple(items), total=len(items))
