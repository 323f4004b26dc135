"""
Ordered link collections - links and social links embedded in a page.

One manager, instantiated per collection. Every mutation re-reads the page,
applies a pure transformation of the list, and writes the whole page back
with compare-and-swap, so concurrent edits never lose each other.

Functional Core - validation and list transformations are pure.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar
from uuid import uuid4

from src.components.pages import dependency_guard, load_owned_page, update_owned_page
from src.domain.entities import Link, Page, SocialLink
from src.domain.errors import ErrorDetail, InvalidArgumentError, NotFoundError
from src.rules.models import ConcurrencyRules, LinkRules, Rules

from .models import CollectionItem
from .ports import PageRepoPort


@dataclass(frozen=True)
class CollectionKind:
    """Which page collection a manager works on."""

    field: str
    label: str
    named: bool
    limit_rule: str


LINKS = CollectionKind(field="links", label="link", named=True, limit_rule="max_links")
SOCIAL_LINKS = CollectionKind(
    field="social_media_links",
    label="social_link",
    named=False,
    limit_rule="max_social_links",
)

# --- Validation Functions ---


def validate_link_data(
    url: str | None = None,
    name: str | None = None,
    rules: LinkRules | None = None,
) -> list[ErrorDetail]:
    """Validate link fields. None means the field was not supplied."""
    rules = rules or LinkRules()
    errors: list[ErrorDetail] = []

    if name is not None:
        if not name.strip():
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="name_required",
                    message="Name is required",
                    field="name",
                )
            )
        elif len(name) > rules.name_max:
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="name_too_long",
                    message=f"Name must be {rules.name_max} characters or less",
                    field="name",
                )
            )

    if url is not None:
        prefixes = tuple(f"{protocol}://" for protocol in rules.allowed_protocols)
        if not url.strip():
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="url_required",
                    message="URL is required",
                    field="url",
                )
            )
        elif len(url) > rules.url_max:
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="url_too_long",
                    message=f"URL must be {rules.url_max} characters or less",
                    field="url",
                )
            )
        elif not url.strip().lower().startswith(prefixes):
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="url_invalid_scheme",
                    message=f"URL must start with {' or '.join(prefixes)}",
                    field="url",
                )
            )

    return errors


def validate_permutation(
    current_ids: Sequence[str],
    ordered_ids: Sequence[str],
) -> list[ErrorDetail]:
    """Check ordered_ids is exactly a reordering of current_ids."""
    seen: set[str] = set()
    for item_id in ordered_ids:
        if item_id in seen:
            return [
                ErrorDetail(
                    kind="invalid_argument",
                    code="reorder_duplicate_id",
                    message=f"Id '{item_id}' appears more than once",
                    field="orderedIds",
                )
            ]
        seen.add(item_id)

    current = set(current_ids)
    unknown = [item_id for item_id in ordered_ids if item_id not in current]
    if unknown:
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="reorder_unknown_id",
                message=f"Id '{unknown[0]}' is not in the collection",
                field="orderedIds",
            )
        ]

    missing = [item_id for item_id in current_ids if item_id not in seen]
    if missing:
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="reorder_missing_id",
                message=f"Id '{missing[0]}' is missing from the new order",
                field="orderedIds",
            )
        ]

    return []


def reorder_items(
    items: Sequence[CollectionItem],
    ordered_ids: Sequence[str],
) -> list[CollectionItem]:
    """Return items in the order of ordered_ids. Caller validates the permutation."""
    by_id = {item.id: item for item in items}
    return [by_id[item_id] for item_id in ordered_ids]


def _raise_first(errors: list[ErrorDetail]) -> None:
    if errors:
        err = errors[0]
        raise InvalidArgumentError(err.code, err.message, err.field)


# --- Collection Manager ---


class OrderedLinkCollection:
    """
    Ordered collection manager.

    Subclasses pick the collection via `kind`.
    """

    kind: ClassVar[CollectionKind]

    def __init__(
        self,
        repo: PageRepoPort,
        rules: Rules | None = None,
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._repo = repo
        self._rules = rules.links if rules else LinkRules()
        concurrency = rules.concurrency if rules else ConcurrencyRules()
        self._max_attempts = concurrency.max_write_attempts
        self._new_id = id_factory or (lambda: uuid4().hex)

    # --- page access ---

    def _items(self, page: Page) -> list[CollectionItem]:
        return list(getattr(page, self.kind.field))

    def _with_items(self, page: Page, items: list[CollectionItem]) -> Page:
        return page.model_copy(update={self.kind.field: items})

    def _find(self, page: Page, item_id: str) -> CollectionItem:
        for item in self._items(page):
            if item.id == item_id:
                return item
        raise NotFoundError(
            f"{self.kind.label}_not_found",
            f"{self.kind.label.replace('_', ' ').capitalize()} '{item_id}' not found",
            "id",
        )

    def _build(self, item_id: str, url: str, name: str | None) -> CollectionItem:
        if self.kind.named:
            return Link(id=item_id, url=url.strip(), name=(name or "").strip())
        return SocialLink(id=item_id, url=url.strip())

    def _check_fields(self, url: str | None, name: str | None) -> None:
        if name is not None and not self.kind.named:
            raise InvalidArgumentError(
                "name_not_supported", "Social links do not have a name", "name"
            )
        _raise_first(validate_link_data(url=url, name=name, rules=self._rules))

    def _mutate(
        self,
        operation: str,
        page_id: str,
        owner: str,
        mutate: Callable[[Page], Page],
    ) -> Page:
        with dependency_guard(f"{operation}_{self.kind.label}"):
            return update_owned_page(
                self._repo, page_id, owner, mutate, max_attempts=self._max_attempts
            )

    # --- operations ---

    def list(self, page_id: str, owner: str) -> list[CollectionItem]:
        """Current collection, in order."""
        with dependency_guard(f"list_{self.kind.label}"):
            page = load_owned_page(self._repo, page_id, owner, max_attempts=self._max_attempts)
        return self._items(page)

    def add(self, page_id: str, owner: str, url: str, name: str | None = None) -> CollectionItem:
        """Append an entry with a freshly generated id."""
        if self.kind.named and name is None:
            name = ""
        self._check_fields(url, name)
        limit: int = getattr(self._rules, self.kind.limit_rule)
        created: list[CollectionItem] = []

        def mutate(page: Page) -> Page:
            items = self._items(page)
            if len(items) >= limit:
                raise InvalidArgumentError(
                    f"too_many_{self.kind.label}s",
                    f"A page can hold at most {limit} entries here",
                    self.kind.field,
                )
            existing = {item.id for item in items}
            item_id = self._new_id()
            while item_id in existing:
                item_id = self._new_id()
            item = self._build(item_id, url, name)
            created[:] = [item]
            return self._with_items(page, [*items, item])

        self._mutate("add", page_id, owner, mutate)
        return created[0]

    def remove(self, page_id: str, owner: str, item_id: str) -> bool:
        """Remove an entry; the others keep their relative order."""

        def mutate(page: Page) -> Page:
            self._find(page, item_id)
            return self._with_items(
                page, [item for item in self._items(page) if item.id != item_id]
            )

        self._mutate("remove", page_id, owner, mutate)
        return True

    def reorder(
        self,
        page_id: str,
        owner: str,
        ordered_ids: Sequence[str],
    ) -> list[CollectionItem]:
        """Replace the order. ordered_ids must be a permutation of the current ids."""
        if isinstance(ordered_ids, str) or not all(isinstance(i, str) for i in ordered_ids):
            raise InvalidArgumentError(
                "reorder_invalid", "Ordered ids must be a list of ids", "orderedIds"
            )
        wanted = list(ordered_ids)

        def mutate(page: Page) -> Page:
            items = self._items(page)
            _raise_first(validate_permutation([item.id for item in items], wanted))
            return self._with_items(page, reorder_items(items, wanted))

        stored = self._mutate("reorder", page_id, owner, mutate)
        return self._items(stored)

    def update(
        self,
        page_id: str,
        owner: str,
        item_id: str,
        *,
        url: str | None = None,
        name: str | None = None,
    ) -> CollectionItem:
        """Merge supplied fields into an entry. The entry id never changes."""
        self._check_fields(url, name)
        changes: dict[str, str] = {}
        if url is not None:
            changes["url"] = url.strip()
        if name is not None:
            changes["name"] = name.strip()

        def mutate(page: Page) -> Page:
            target = self._find(page, item_id)
            merged = target.model_copy(update=changes)
            return self._with_items(
                page,
                [merged if item.id == item_id else item for item in self._items(page)],
            )

        stored = self._mutate("update", page_id, owner, mutate)
        return self._find(stored, item_id)


class LinkService(OrderedLinkCollection):
    """Outbound links (name + url)."""

    kind = LINKS


class SocialLinkService(OrderedLinkCollection):
    """Social-media links (url only)."""

    kind = SOCIAL_LINKS
