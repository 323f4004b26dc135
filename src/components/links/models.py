"""
Links component - Data models.

The same models serve both collections; inputs that carry a name only
apply to links, social links have a url only.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import Link, SocialLink
from src.domain.errors import ErrorDetail

CollectionItem = Link | SocialLink

# --- Input Models ---


@dataclass(frozen=True)
class ListItemsInput:
    """Input for reading a collection."""

    page_id: str
    owner: str


@dataclass(frozen=True)
class AddLinkInput:
    """Input for appending a link."""

    page_id: str
    owner: str
    url: str
    name: str


@dataclass(frozen=True)
class AddSocialLinkInput:
    """Input for appending a social link."""

    page_id: str
    owner: str
    url: str


@dataclass(frozen=True)
class UpdateLinkInput:
    """Input for updating a link. None fields are left as they are."""

    page_id: str
    owner: str
    item_id: str
    url: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class UpdateSocialLinkInput:
    """Input for updating a social link."""

    page_id: str
    owner: str
    item_id: str
    url: str | None = None


@dataclass(frozen=True)
class RemoveItemInput:
    """Input for removing an entry from either collection."""

    page_id: str
    owner: str
    item_id: str


@dataclass(frozen=True)
class ReorderInput:
    """Input for reordering a collection. Must be a permutation of current ids."""

    page_id: str
    owner: str
    ordered_ids: tuple[str, ...]


# --- Output Models ---


@dataclass(frozen=True)
class ItemOutput:
    """Output from add/update."""

    item: CollectionItem | None
    errors: tuple[ErrorDetail, ...]
    success: bool


@dataclass(frozen=True)
class ItemListOutput:
    """Output from list/reorder."""

    items: tuple[CollectionItem, ...]
    total: int
    errors: tuple[ErrorDetail, ...] = ()
    success: bool = True


@dataclass(frozen=True)
class RemoveItemOutput:
    """Output from remove."""

    removed: bool
    errors: tuple[ErrorDetail, ...]
    success: bool
