"""
Links component - Ordered link and social link collections.

Both collections are embedded in the page; one manager class handles
add/remove/reorder/update for either.
"""

from ._impl import (
    LINKS,
    SOCIAL_LINKS,
    CollectionKind,
    LinkService,
    OrderedLinkCollection,
    SocialLinkService,
    reorder_items,
    validate_link_data,
    validate_permutation,
)
from .component import (
    run_add,
    run_list,
    run_remove,
    run_reorder,
    run_update,
)
from .models import (
    AddLinkInput,
    AddSocialLinkInput,
    CollectionItem,
    ItemListOutput,
    ItemOutput,
    ListItemsInput,
    RemoveItemInput,
    RemoveItemOutput,
    ReorderInput,
    UpdateLinkInput,
    UpdateSocialLinkInput,
)
from .ports import PageRepoPort

__all__ = [
    # Entry points
    "run_list",
    "run_add",
    "run_update",
    "run_remove",
    "run_reorder",
    # Input models
    "ListItemsInput",
    "AddLinkInput",
    "AddSocialLinkInput",
    "UpdateLinkInput",
    "UpdateSocialLinkInput",
    "RemoveItemInput",
    "ReorderInput",
    # Output models
    "CollectionItem",
    "ItemOutput",
    "ItemListOutput",
    "RemoveItemOutput",
    # Ports
    "PageRepoPort",
    # Services
    "CollectionKind",
    "LINKS",
    "SOCIAL_LINKS",
    "OrderedLinkCollection",
    "LinkService",
    "SocialLinkService",
    "validate_link_data",
    "validate_permutation",
    "reorder_items",
]
