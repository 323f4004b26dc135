"""
Pages component unit tests.

Tests for page creation, availability, ownership, updates, removal and rename.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_repos import InMemoryPageRepo
from src.components.pages import (
    BioInfoInput,
    CheckAvailabilityInput,
    CreatePageInput,
    GetPageInput,
    GetPublicPageInput,
    ListPagesInput,
    PageDirectoryService,
    RemovePageInput,
    RenamePageInput,
    UpdatePageColorsInput,
    UpdatePageInfoInput,
    run_check_availability,
    run_create,
    run_get,
    run_get_public,
    run_list,
    run_remove,
    run_rename,
    run_update_colors,
    run_update_info,
    validate_bio_info,
    validate_page_colors,
)
from src.core.ports.db import PageStoreError
from src.domain.entities import BioInfo, Page
from src.domain.errors import GENERIC_FAILURE_MESSAGE, ConflictError, NotFoundError
from src.rules.models import PageIdRules, ProjectRules, Rules

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def repo() -> InMemoryPageRepo:
    return InMemoryPageRepo()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def service(repo: InMemoryPageRepo, clock: FixedClock) -> PageDirectoryService:
    return PageDirectoryService(repo=repo, clock=clock)


def create(service: PageDirectoryService, page_id: str, owner: str = "alice") -> Page:
    result = run_create(
        CreatePageInput(page_id=page_id, owner=owner, bio_info=BioInfoInput(name="Alice")),
        service,
    )
    assert result.success, result.errors
    assert result.page is not None
    return result.page


class FailingRepo:
    """Page store whose every call fails."""

    def __getattr__(self, name: str):
        def fail(*args, **kwargs):
            raise PageStoreError("disk I/O error at /var/lib/pages.db")

        return fail


class InterleavingRepo(InMemoryPageRepo):
    """In-memory store that runs a callback just before inserting a given id."""

    def __init__(self) -> None:
        super().__init__()
        self.before_insert: dict[str, Callable[[], object]] = {}

    def insert(self, page: Page) -> bool:
        hook = self.before_insert.pop(page.id, None)
        if hook is not None:
            hook()
        return super().insert(page)


def claim_with_copy(repo: InMemoryPageRepo, page: Page, new_page_id: str) -> Page:
    """Leave page the way a rename that stopped after placing its copy does."""
    claimed = repo.compare_and_swap(
        page.model_copy(update={"renaming_to": new_page_id}), page.version
    )
    assert claimed is not None
    copy = claimed.model_copy(
        update={"id": new_page_id, "renaming_to": None, "renamed_from": page.id}
    )
    assert repo.insert(copy)
    return claimed


# --- Validation Tests ---


class TestValidateBioInfo:
    """Test bio info validation."""

    def test_valid_bio(self) -> None:
        assert validate_bio_info(BioInfoInput(name="Alice")) == []

    def test_name_required(self) -> None:
        errors = validate_bio_info(BioInfoInput(name="   "))
        assert errors[0].code == "name_required"
        assert errors[0].field == "bioInfo.name"

    def test_name_too_long(self) -> None:
        errors = validate_bio_info(BioInfoInput(name="x" * 101))
        assert errors[0].code == "name_too_long"

    def test_image_url_scheme(self) -> None:
        errors = validate_bio_info(BioInfoInput(name="A", image_url="ftp://x/y.png"))
        assert errors[0].code == "image_url_invalid_scheme"

    def test_empty_image_url_allowed(self) -> None:
        assert validate_bio_info(BioInfoInput(name="A", image_url="")) == []


class TestValidatePageColors:
    """Test color map validation."""

    def test_valid_colors(self) -> None:
        assert validate_page_colors({"backgroundColor": "#fff", "textColor": "#1a2B3c"}) == []

    def test_unknown_role(self) -> None:
        errors = validate_page_colors({"borderColor": "#ffffff"})
        assert errors[0].code == "color_role_unknown"

    def test_bad_value(self) -> None:
        errors = validate_page_colors({"buttonColor": "red"})
        assert errors[0].code == "color_value_invalid"
        assert errors[0].field == "pageColors.buttonColor"

    def test_not_a_mapping(self) -> None:
        errors = validate_page_colors(["#ffffff"])
        assert errors[0].code == "colors_invalid"


# --- Creation Tests ---


class TestCreatePage:
    """Test page creation."""

    def test_create_success(self, service: PageDirectoryService) -> None:
        """New page has empty collections, is unverified and stamped with now."""
        page = create(service, "alice")

        assert page.id == "alice"
        assert page.owner == "alice"
        assert page.bio_info == BioInfo(name="Alice", image_url="", description_title="")
        assert page.links == []
        assert page.social_media_links == []
        assert page.verified is False
        assert page.created_at == NOW

    def test_create_duplicate_conflicts(self, service: PageDirectoryService) -> None:
        """Second create of the same id fails, whoever asks."""
        create(service, "alice")
        result = run_create(
            CreatePageInput(page_id="alice", owner="bob", bio_info=BioInfoInput(name="Bob")),
            service,
        )

        assert result.success is False
        assert result.errors[0].kind == "conflict"
        assert result.errors[0].code == "page_exists"

    def test_create_invalid_id(self, service: PageDirectoryService) -> None:
        result = run_create(
            CreatePageInput(page_id="Bad Id!", owner="alice", bio_info=BioInfoInput(name="A")),
            service,
        )

        assert result.success is False
        assert result.errors[0].kind == "invalid_argument"
        assert result.errors[0].code == "page_id_invalid"

    def test_create_reserved_id(self, repo: InMemoryPageRepo, clock: FixedClock) -> None:
        rules = Rules(
            project=ProjectRules(slug="test", rules_version="1"),
            page_id=PageIdRules(reserved=["admin"]),
        )
        service = PageDirectoryService(repo=repo, clock=clock, rules=rules)
        result = run_create(
            CreatePageInput(page_id="admin", owner="alice", bio_info=BioInfoInput(name="A")),
            service,
        )

        assert result.errors[0].code == "page_id_reserved"

    def test_create_missing_name_writes_nothing(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        result = run_create(
            CreatePageInput(page_id="alice", owner="alice", bio_info=BioInfoInput(name="")),
            service,
        )

        assert result.errors[0].code == "name_required"
        assert repo.get("alice") is None


# --- Availability Tests ---


class TestCheckAvailability:
    """Test page id availability."""

    def test_available_when_absent(self, service: PageDirectoryService) -> None:
        result = run_check_availability(CheckAvailabilityInput(page_id="fresh"), service)

        assert result.success is True
        assert result.available is True

    def test_unavailable_when_taken(self, service: PageDirectoryService) -> None:
        create(service, "taken")
        result = run_check_availability(CheckAvailabilityInput(page_id="taken"), service)

        assert result.available is False

    def test_invalid_id(self, service: PageDirectoryService) -> None:
        result = run_check_availability(CheckAvailabilityInput(page_id="ab"), service)

        assert result.success is False
        assert result.errors[0].code == "page_id_length"


# --- Read Tests ---


class TestGetPage:
    """Test owner and public reads."""

    def test_owner_can_read(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_get(GetPageInput(page_id="alice", owner="alice"), service)

        assert result.success is True
        assert result.page is not None
        assert result.page.id == "alice"

    def test_other_owner_sees_not_found(self, service: PageDirectoryService) -> None:
        """Ownership mismatch is indistinguishable from absence."""
        create(service, "alice")
        result = run_get(GetPageInput(page_id="alice", owner="mallory"), service)

        assert result.success is False
        assert result.errors[0].kind == "not_found"
        assert result.errors[0].code == "page_not_found"

    def test_public_read_hides_storage_fields(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_get_public(GetPublicPageInput(page_id="alice"), service)

        assert result.page is not None
        dumped = result.page.model_dump(by_alias=True)
        assert "version" not in dumped
        assert "renamedFrom" not in dumped
        assert dumped["bioInfo"]["name"] == "Alice"

    def test_public_read_missing(self, service: PageDirectoryService) -> None:
        result = run_get_public(GetPublicPageInput(page_id="nobody"), service)

        assert result.errors[0].kind == "not_found"


# --- Update Tests ---


class TestUpdatePageInfo:
    """Test bio info replacement."""

    def test_update_replaces_info_only(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_update_info(
            UpdatePageInfoInput(
                page_id="alice",
                owner="alice",
                bio_info=BioInfoInput(
                    name="Alice B",
                    description_title="Designer",
                    image_url="https://cdn.example.com/abc",
                ),
            ),
            service,
        )

        assert result.success is True
        assert result.bio_info == BioInfo(
            name="Alice B",
            description_title="Designer",
            image_url="https://cdn.example.com/abc",
        )
        page = run_get(GetPageInput(page_id="alice", owner="alice"), service).page
        assert page is not None
        assert page.bio_info.name == "Alice B"
        assert page.created_at == NOW

    def test_update_not_owned(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_update_info(
            UpdatePageInfoInput(page_id="alice", owner="bob", bio_info=BioInfoInput(name="B")),
            service,
        )

        assert result.errors[0].kind == "not_found"

    def test_update_invalid_info(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_update_info(
            UpdatePageInfoInput(page_id="alice", owner="alice", bio_info=BioInfoInput(name="")),
            service,
        )

        assert result.errors[0].kind == "invalid_argument"


class TestUpdatePageColors:
    """Test color map replacement."""

    def test_update_colors(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        colors = {"backgroundColor": "#000000", "buttonHoverColor": "#abc"}
        result = run_update_colors(
            UpdatePageColorsInput(page_id="alice", owner="alice", colors=colors), service
        )

        assert result.success is True
        assert result.colors == colors

    def test_colors_replace_previous_map(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        run_update_colors(
            UpdatePageColorsInput(
                page_id="alice", owner="alice", colors={"textColor": "#111111"}
            ),
            service,
        )
        result = run_update_colors(
            UpdatePageColorsInput(
                page_id="alice", owner="alice", colors={"buttonColor": "#222222"}
            ),
            service,
        )

        assert result.colors == {"buttonColor": "#222222"}

    def test_bad_color_rejected(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_update_colors(
            UpdatePageColorsInput(page_id="alice", owner="alice", colors={"textColor": "blue"}),
            service,
        )

        assert result.errors[0].code == "color_value_invalid"


# --- List / Remove Tests ---


class TestListPages:
    """Test listing by owner."""

    def test_lists_only_owner_pages(self, service: PageDirectoryService) -> None:
        create(service, "alice-one")
        create(service, "alice-two")
        create(service, "bob-page", owner="bob")

        result = run_list(ListPagesInput(owner="alice"), service)

        assert result.total == 2
        assert {p.id for p in result.pages} == {"alice-one", "alice-two"}

    def test_empty_list(self, service: PageDirectoryService) -> None:
        result = run_list(ListPagesInput(owner="nobody"), service)

        assert result.success is True
        assert result.pages == ()


class TestRemovePage:
    """Test page removal."""

    def test_remove_then_id_is_free(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_remove(RemovePageInput(page_id="alice", owner="alice"), service)

        assert result.success is True
        assert result.removed is True
        availability = run_check_availability(CheckAvailabilityInput(page_id="alice"), service)
        assert availability.available is True

    def test_remove_missing_is_not_found(self, service: PageDirectoryService) -> None:
        result = run_remove(RemovePageInput(page_id="ghost", owner="alice"), service)

        assert result.success is False
        assert result.errors[0].kind == "not_found"

    def test_remove_twice(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        run_remove(RemovePageInput(page_id="alice", owner="alice"), service)
        result = run_remove(RemovePageInput(page_id="alice", owner="alice"), service)

        assert result.errors[0].kind == "not_found"

    def test_remove_other_owner_keeps_page(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        create(service, "alice")
        result = run_remove(RemovePageInput(page_id="alice", owner="bob"), service)

        assert result.errors[0].kind == "not_found"
        assert repo.get("alice") is not None


# --- Rename Tests ---


class TestRenamePage:
    """Test moving a page to a new id."""

    def test_rename_moves_contents(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        original = create(service, "alice")
        result = run_rename(
            RenamePageInput(page_id="alice", owner="alice", new_page_id="alice-b"), service
        )

        assert result.success is True
        assert result.page is not None
        assert result.page.id == "alice-b"
        assert result.page.bio_info == original.bio_info
        assert result.page.created_at == original.created_at
        assert result.page.renamed_from is None
        assert repo.get("alice") is None

    def test_rename_to_taken_id(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        create(service, "bobs", owner="bob")
        result = run_rename(
            RenamePageInput(page_id="alice", owner="alice", new_page_id="bobs"), service
        )

        assert result.errors[0].kind == "conflict"

    def test_rename_same_id(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_rename(
            RenamePageInput(page_id="alice", owner="alice", new_page_id="alice"), service
        )

        assert result.errors[0].code == "page_id_unchanged"

    def test_rename_not_owned(self, service: PageDirectoryService) -> None:
        create(service, "alice")
        result = run_rename(
            RenamePageInput(page_id="alice", owner="bob", new_page_id="stolen"), service
        )

        assert result.errors[0].kind == "not_found"

    def test_rename_resumes_after_interrupt(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        """A rename that stopped after placing its copy is finished by a retry."""
        claim_with_copy(repo, create(service, "alice"), "alice-b")

        result = run_rename(
            RenamePageInput(page_id="alice", owner="alice", new_page_id="alice-b"), service
        )

        assert result.success is True
        assert repo.get("alice") is None
        stored = repo.get("alice-b")
        assert stored is not None
        assert stored.renamed_from is None

    def test_read_of_old_id_reconciles(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        """Reading the old id after an interrupted rename releases it."""
        claim_with_copy(repo, create(service, "alice"), "alice-b")

        availability = run_check_availability(CheckAvailabilityInput(page_id="alice"), service)

        assert availability.available is True
        assert repo.get("alice") is None
        stored = repo.get("alice-b")
        assert stored is not None
        assert stored.renamed_from is None

    def test_read_of_new_id_finishes_committed_rename(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        claimed = claim_with_copy(repo, create(service, "alice"), "alice-b")
        assert repo.compare_and_swap(claimed.model_copy(update={"moved": True}), 2)

        page = service.get("alice-b", "alice")

        assert page.renamed_from is None
        assert repo.get("alice") is None

    def test_orphaned_copy_is_discarded(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        """A copy whose source never claimed it does not hold the new id."""
        original = create(service, "alice")
        repo.insert(original.model_copy(update={"id": "alice-b", "renamed_from": "alice"}))

        assert service.check_availability("alice-b") is True
        assert repo.get("alice-b") is None
        assert service.get("alice", "alice") == original

    def test_claim_without_copy_keeps_page_live(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        original = create(service, "alice")
        assert repo.compare_and_swap(original.model_copy(update={"renaming_to": "alice-x"}), 1)

        assert service.get("alice", "alice").bio_info == original.bio_info
        assert service.check_availability("alice-x") is True

    def test_rename_takes_over_stale_claim(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        original = create(service, "alice")
        assert repo.compare_and_swap(original.model_copy(update={"renaming_to": "alice-x"}), 1)

        renamed = service.rename("alice", "alice", "alice-b")

        assert renamed.id == "alice-b"
        assert [p.id for p in service.list("alice")] == ["alice-b"]

    def test_list_settles_interrupted_rename(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        claim_with_copy(repo, create(service, "alice"), "alice-b")

        assert [p.id for p in service.list("alice")] == ["alice-b"]

    def test_rename_to_taken_id_releases_claim(
        self, service: PageDirectoryService, repo: InMemoryPageRepo
    ) -> None:
        create(service, "alice")
        create(service, "bobs", owner="bob")

        with pytest.raises(ConflictError):
            service.rename("alice", "alice", "bobs")

        stored = repo.get("alice")
        assert stored is not None
        assert stored.renaming_to is None


class TestConcurrentRename:
    """Renames interleaved with other operations on the same page."""

    @pytest.fixture
    def repo(self) -> InterleavingRepo:
        return InterleavingRepo()

    def test_competing_rename_leaves_one_page(
        self, service: PageDirectoryService, repo: InterleavingRepo
    ) -> None:
        """A rename that completes while another is placing its copy wins outright."""
        create(service, "alice")
        repo.before_insert["alice-b"] = lambda: service.rename("alice", "alice", "alice-c")

        result = run_rename(
            RenamePageInput(page_id="alice", owner="alice", new_page_id="alice-b"), service
        )

        assert result.errors[0].kind == "not_found"
        assert [p.id for p in service.list("alice")] == ["alice-c"]
        assert repo.get("alice") is None
        assert repo.get("alice-b") is None

    def test_write_during_rename_is_kept(
        self, service: PageDirectoryService, repo: InterleavingRepo
    ) -> None:
        create(service, "alice")
        repo.before_insert["alice-b"] = lambda: service.update_info(
            "alice", "alice", BioInfoInput(name="Alice Updated")
        )

        renamed = service.rename("alice", "alice", "alice-b")

        assert renamed.bio_info.name == "Alice Updated"
        assert [p.id for p in service.list("alice")] == ["alice-b"]

    def test_remove_during_rename(
        self, service: PageDirectoryService, repo: InterleavingRepo
    ) -> None:
        create(service, "alice")
        repo.before_insert["alice-b"] = lambda: service.remove("alice", "alice")

        with pytest.raises(NotFoundError):
            service.rename("alice", "alice", "alice-b")

        assert service.list("alice") == []
        assert repo.get("alice-b") is None


# --- Dependency Failure Tests ---


class TestDependencyFailure:
    """Store failures surface as a generic dependency failure."""

    def test_store_error_is_opaque(self, clock: FixedClock) -> None:
        service = PageDirectoryService(repo=FailingRepo(), clock=clock)  # type: ignore[arg-type]
        result = run_get(GetPageInput(page_id="alice", owner="alice"), service)

        assert result.success is False
        assert result.errors[0].kind == "dependency_failure"
        assert result.errors[0].message == GENERIC_FAILURE_MESSAGE
        assert "disk" not in result.errors[0].message

    def test_store_error_on_create(self, clock: FixedClock) -> None:
        service = PageDirectoryService(repo=FailingRepo(), clock=clock)  # type: ignore[arg-type]
        result = run_create(
            CreatePageInput(page_id="alice", owner="alice", bio_info=BioInfoInput(name="A")),
            service,
        )

        assert result.errors[0].kind == "dependency_failure"
