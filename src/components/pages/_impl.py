"""
PageDirectoryService - page identity, ownership and page-level fields.

Functional Core - validation is pure; all store access goes through the
PageRepoPort and the helpers in _writes.
"""

from __future__ import annotations

import logging
import re

from src.domain.entities import COLOR_ROLES, BioInfo, Page
from src.domain.errors import (
    ConflictError,
    ErrorDetail,
    InvalidArgumentError,
)
from src.domain.page_id import ensure_valid_page_id
from src.rules.models import BioRules, ConcurrencyRules, PageIdRules, Rules

from ._writes import (
    commit_move,
    dependency_guard,
    finish_move,
    is_claimed_copy,
    load_owned_page,
    page_not_found,
    rename_copy,
    resolve_page,
    update_owned_page,
    write_conflict,
)
from .models import BioInfoInput
from .ports import ClockPort, PageRepoPort

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# --- Validation Functions ---


def validate_bio_info(
    bio_info: BioInfoInput,
    rules: BioRules | None = None,
) -> list[ErrorDetail]:
    """Validate bio fields."""
    rules = rules or BioRules()
    errors: list[ErrorDetail] = []

    if not isinstance(bio_info.name, str) or not bio_info.name.strip():
        errors.append(
            ErrorDetail(
                kind="invalid_argument",
                code="name_required",
                message="Name is required",
                field="bioInfo.name",
            )
        )
    elif len(bio_info.name) > rules.name_max:
        errors.append(
            ErrorDetail(
                kind="invalid_argument",
                code="name_too_long",
                message=f"Name must be {rules.name_max} characters or less",
                field="bioInfo.name",
            )
        )

    if len(bio_info.description_title or "") > rules.description_title_max:
        errors.append(
            ErrorDetail(
                kind="invalid_argument",
                code="description_title_too_long",
                message=(
                    f"Description title must be {rules.description_title_max} characters or less"
                ),
                field="bioInfo.descriptionTitle",
            )
        )

    image_url = (bio_info.image_url or "").strip()
    if image_url:
        if len(image_url) > rules.image_url_max:
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="image_url_too_long",
                    message=f"Image URL must be {rules.image_url_max} characters or less",
                    field="bioInfo.imageUrl",
                )
            )
        elif not image_url.startswith(("http://", "https://")):
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="image_url_invalid_scheme",
                    message="Image URL must start with http:// or https://",
                    field="bioInfo.imageUrl",
                )
            )

    return errors


def validate_page_colors(colors: object) -> list[ErrorDetail]:
    """Validate a color map: known roles only, hex values only."""
    if not isinstance(colors, dict):
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="colors_invalid",
                message="Colors must be a mapping of color role to hex value",
                field="pageColors",
            )
        ]

    errors: list[ErrorDetail] = []
    for role, value in colors.items():
        if role not in COLOR_ROLES:
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="color_role_unknown",
                    message=f"Unknown color role '{role}'",
                    field=f"pageColors.{role}",
                )
            )
        elif not isinstance(value, str) or not HEX_COLOR.match(value):
            errors.append(
                ErrorDetail(
                    kind="invalid_argument",
                    code="color_value_invalid",
                    message=f"Color for '{role}' must be a hex value like #1a2b3c",
                    field=f"pageColors.{role}",
                )
            )
    return errors


def _raise_first(errors: list[ErrorDetail]) -> None:
    if errors:
        err = errors[0]
        raise InvalidArgumentError(err.code, err.message, err.field)


def _to_bio_info(bio_info: BioInfoInput) -> BioInfo:
    return BioInfo(
        name=bio_info.name.strip(),
        description_title=(bio_info.description_title or "").strip(),
        image_url=(bio_info.image_url or "").strip(),
    )


# --- Page Directory Service ---


class PageDirectoryService:
    """
    Page directory.

    Owns page id uniqueness (across all owners) and ownership checks.
    """

    def __init__(
        self,
        repo: PageRepoPort,
        clock: ClockPort,
        rules: Rules | None = None,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._page_id_rules = rules.page_id if rules else PageIdRules()
        self._bio_rules = rules.bio if rules else BioRules()
        concurrency = rules.concurrency if rules else ConcurrencyRules()
        self._max_attempts = concurrency.max_write_attempts

    def create(self, page_id: str, owner: str, bio_info: BioInfoInput) -> Page:
        """
        Create a page with empty link collections.

        Raises:
            InvalidArgumentError: bad id syntax or bio fields
            ConflictError: id already taken by any owner
        """
        ensure_valid_page_id(page_id, self._page_id_rules)
        _raise_first(validate_bio_info(bio_info, self._bio_rules))

        page = Page(
            id=page_id,
            owner=owner,
            bio_info=_to_bio_info(bio_info),
            links=[],
            social_media_links=[],
            created_at=self._clock.now_utc(),
            verified=False,
        )

        with dependency_guard("create_page"):
            # A stale record left by an interrupted rename must not block the id
            resolve_page(self._repo, page_id, max_attempts=self._max_attempts)
            if not self._repo.insert(page):
                raise ConflictError("page_exists", f"Page '{page_id}' already exists", "id")

        logger.info("Created page %s for owner %s", page_id, owner)
        return page

    def check_availability(self, page_id: str) -> bool:
        """True iff no page holds this id. Absence is not an error."""
        ensure_valid_page_id(page_id, self._page_id_rules)
        with dependency_guard("check_availability"):
            return resolve_page(self._repo, page_id, max_attempts=self._max_attempts) is None

    def get(self, page_id: str, owner: str) -> Page:
        """Get one of the owner's pages."""
        with dependency_guard("get_page"):
            return load_owned_page(self._repo, page_id, owner, max_attempts=self._max_attempts)

    def get_public(self, page_id: str) -> Page:
        """Get a page by id for public display."""
        with dependency_guard("get_public_page"):
            page = resolve_page(self._repo, page_id, max_attempts=self._max_attempts)
        if page is None:
            raise page_not_found(page_id)
        return page

    def update_info(self, page_id: str, owner: str, bio_info: BioInfoInput) -> BioInfo:
        """Replace the page's bio info; other fields untouched."""
        _raise_first(validate_bio_info(bio_info, self._bio_rules))
        new_info = _to_bio_info(bio_info)

        with dependency_guard("update_page_info"):
            stored = update_owned_page(
                self._repo,
                page_id,
                owner,
                lambda page: page.model_copy(update={"bio_info": new_info}),
                max_attempts=self._max_attempts,
            )
        return stored.bio_info

    def update_colors(self, page_id: str, owner: str, colors: dict[str, str]) -> dict[str, str]:
        """Replace the page's color map."""
        _raise_first(validate_page_colors(colors))
        new_colors = dict(colors)

        with dependency_guard("update_page_colors"):
            stored = update_owned_page(
                self._repo,
                page_id,
                owner,
                lambda page: page.model_copy(update={"page_colors": new_colors}),
                max_attempts=self._max_attempts,
            )
        return dict(stored.page_colors or {})

    def list(self, owner: str) -> list[Page]:
        """List the owner's pages in store order."""
        with dependency_guard("list_pages"):
            pages = self._repo.list_by_owner(owner)
            pending = [p for p in pages if p.moved or p.renamed_from is not None]
            if pending:
                for page in pending:
                    resolve_page(self._repo, page.id, max_attempts=self._max_attempts)
                pages = self._repo.list_by_owner(owner)
        return [p for p in pages if not p.moved and p.renamed_from is None]

    def remove(self, page_id: str, owner: str) -> bool:
        """
        Delete the owner's page.

        Not idempotent: deleting a page that does not exist (or is not
        owned by this owner) raises NotFoundError.
        """
        with dependency_guard("remove_page"):
            for _ in range(self._max_attempts):
                page = load_owned_page(
                    self._repo, page_id, owner, max_attempts=self._max_attempts
                )
                if self._repo.delete(page_id, owner, expected_version=page.version):
                    break
            else:
                logger.warning("Remove retries exhausted on page %s", page_id)
                raise write_conflict()

        logger.info("Removed page %s for owner %s", page_id, owner)
        return True

    def rename(self, page_id: str, owner: str, new_page_id: str) -> Page:
        """
        Move a page to a new id.

        The store has no multi-key transaction, so each phase is a single
        conditional write:
        1. claim: set renaming_to=new_page_id on the page
        2. copy: insert the page under new_page_id, marked renamed_from
        3. commit: set moved on the page, only if it still has the claimed version
        4. finish: clear the copy's marker, then delete the old record

        Only one rename can commit from a given version of the page. A rename
        that loses the commit discards its copy and retries from the current
        state, so concurrent writes are kept and concurrent renames cannot
        leave two live pages. A crash after any phase is settled by retrying
        the rename or by any read of either id.

        Raises:
            InvalidArgumentError: bad new id, or new id equals old id
            NotFoundError: page missing or not owned
            ConflictError: new id held by another page, or contention persisted
        """
        ensure_valid_page_id(new_page_id, self._page_id_rules, field="newId")
        if new_page_id == page_id:
            raise InvalidArgumentError(
                "page_id_unchanged", "New page id must differ from the current id", "newId"
            )

        with dependency_guard("rename_page"):
            for _ in range(self._max_attempts):
                source = self._claim(page_id, owner, new_page_id)
                if source is None:
                    continue
                if source.moved:
                    renamed = finish_move(self._repo, source, max_attempts=self._max_attempts)
                else:
                    renamed = self._copy_and_commit(source, new_page_id)
                if renamed is not None:
                    break
            else:
                logger.warning("Rename retries exhausted on page %s", page_id)
                raise write_conflict()

        logger.info("Renamed page %s -> %s for owner %s", page_id, new_page_id, owner)
        return renamed

    def _claim(self, page_id: str, owner: str, new_page_id: str) -> Page | None:
        """Return the page claimed for new_page_id, or None if the claim lost a race."""
        current = self._repo.get_owned(page_id, owner)
        if current is not None and current.renaming_to == new_page_id:
            # Claimed (or committed) by an earlier attempt at this same rename
            return current

        # Settles any other rename in flight; a stale claim is taken over
        page = load_owned_page(self._repo, page_id, owner, max_attempts=self._max_attempts)
        return self._repo.compare_and_swap(
            page.model_copy(update={"renaming_to": new_page_id}), page.version
        )

    def _copy_and_commit(self, source: Page, new_page_id: str) -> Page | None:
        """Place the copy and commit. None means retry from the current state."""
        copy = rename_copy(source, new_page_id)
        if not self._repo.insert(copy):
            holder = self._repo.get(new_page_id)
            if holder is None:
                return None
            if not is_claimed_copy(holder, source):
                taken = resolve_page(self._repo, new_page_id, max_attempts=self._max_attempts)
                if taken is not None:
                    # Give up the claim so the page stays writable
                    self._repo.compare_and_swap(
                        source.model_copy(update={"renaming_to": None}), source.version
                    )
                    raise ConflictError(
                        "page_exists", f"Page '{new_page_id}' already exists", "newId"
                    )
                return None

        moved = commit_move(self._repo, source)
        if moved is None:
            moved = self._repo.get_owned(source.id, source.owner)
            if moved is None:
                return self._renamed_by_reader(copy)
            if not (
                moved.moved
                and moved.renaming_to == new_page_id
                and moved.version == source.version + 1
            ):
                # A write landed or another rename took the claim
                self._repo.delete(new_page_id, copy.owner, expected_version=copy.version)
                return None

        return finish_move(self._repo, moved, max_attempts=self._max_attempts)

    def _renamed_by_reader(self, copy: Page) -> Page | None:
        """The old record is gone: either a read finished this rename, or it lost."""
        holder = self._repo.get_owned(copy.id, copy.owner)
        if holder is None:
            return None
        if holder.renamed_from is None and holder.created_at == copy.created_at:
            return holder
        if holder.renamed_from == copy.renamed_from and holder.version == copy.version:
            self._repo.delete(copy.id, copy.owner, expected_version=copy.version)
        return None
