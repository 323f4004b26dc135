"""
Pages component - Page directory.

Creation, lookup, availability, info/color updates, listing, rename and
removal of link-in-bio pages.
"""

from ._impl import PageDirectoryService, validate_bio_info, validate_page_colors
from ._writes import dependency_guard, load_owned_page, update_owned_page
from .component import (
    run_check_availability,
    run_create,
    run_get,
    run_get_public,
    run_list,
    run_remove,
    run_rename,
    run_update_colors,
    run_update_info,
)
from .models import (
    AvailabilityOutput,
    BioInfoInput,
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
from .ports import ClockPort, PageRepoPort

__all__ = [
    # Entry points
    "run_create",
    "run_check_availability",
    "run_get",
    "run_get_public",
    "run_update_info",
    "run_update_colors",
    "run_list",
    "run_remove",
    "run_rename",
    # Input models
    "BioInfoInput",
    "CreatePageInput",
    "CheckAvailabilityInput",
    "GetPageInput",
    "GetPublicPageInput",
    "UpdatePageInfoInput",
    "UpdatePageColorsInput",
    "ListPagesInput",
    "RemovePageInput",
    "RenamePageInput",
    # Output models
    "PageOutput",
    "PageInfoOutput",
    "PageColorsOutput",
    "AvailabilityOutput",
    "PageListOutput",
    "RemovePageOutput",
    # Ports
    "PageRepoPort",
    "ClockPort",
    # Service
    "PageDirectoryService",
    "validate_bio_info",
    "validate_page_colors",
    # Shared store access
    "dependency_guard",
    "load_owned_page",
    "update_owned_page",
]
