"""
Pages component - Data models.

Inputs are validated value types built by the HTTP shell from request
bodies; outputs carry either a result or the errors that stopped it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import BioInfo, Page
from src.domain.errors import ErrorDetail

# --- Input Models ---


@dataclass(frozen=True)
class BioInfoInput:
    """Bio fields supplied on create and info update."""

    name: str
    description_title: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class CreatePageInput:
    """Input for creating a page."""

    page_id: str
    owner: str
    bio_info: BioInfoInput


@dataclass(frozen=True)
class CheckAvailabilityInput:
    """Input for checking whether a page id is free."""

    page_id: str


@dataclass(frozen=True)
class GetPageInput:
    """Input for reading one of the owner's pages."""

    page_id: str
    owner: str


@dataclass(frozen=True)
class GetPublicPageInput:
    """Input for reading a page as the public renderer does."""

    page_id: str


@dataclass(frozen=True)
class UpdatePageInfoInput:
    """Input for replacing a page's bio info."""

    page_id: str
    owner: str
    bio_info: BioInfoInput


@dataclass(frozen=True)
class UpdatePageColorsInput:
    """Input for replacing a page's color map."""

    page_id: str
    owner: str
    colors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ListPagesInput:
    """Input for listing an owner's pages."""

    owner: str


@dataclass(frozen=True)
class RemovePageInput:
    """Input for deleting a page."""

    page_id: str
    owner: str


@dataclass(frozen=True)
class RenamePageInput:
    """Input for moving a page to a new id."""

    page_id: str
    owner: str
    new_page_id: str


# --- Output Models ---


@dataclass(frozen=True)
class PageOutput:
    """Output from operations returning a page."""

    page: Page | None
    errors: tuple[ErrorDetail, ...]
    success: bool


@dataclass(frozen=True)
class PageInfoOutput:
    """Output from info update."""

    bio_info: BioInfo | None
    errors: tuple[ErrorDetail, ...]
    success: bool


@dataclass(frozen=True)
class PageColorsOutput:
    """Output from colors update."""

    colors: dict[str, str] | None
    errors: tuple[ErrorDetail, ...]
    success: bool


@dataclass(frozen=True)
class AvailabilityOutput:
    """Output from availability check."""

    available: bool | None
    errors: tuple[ErrorDetail, ...]
    success: bool


@dataclass(frozen=True)
class PageListOutput:
    """Output from list operation."""

    pages: tuple[Page, ...]
    total: int
    errors: tuple[ErrorDetail, ...] = ()
    success: bool = True


@dataclass(frozen=True)
class RemovePageOutput:
    """Output from remove operation."""

    removed: bool
    errors: tuple[ErrorDetail, ...]
    success: bool
