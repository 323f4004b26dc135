"""
Page store access shared by the pages and links components.

- dependency_guard: turns store failures into DependencyFailureError
- resolve_page / load_owned_page: reads that settle renames in flight
- update_owned_page: read, transform, compare-and-swap, bounded retry
- commit_move / finish_move: the last two phases of a rename

Rename state lives on the records themselves:

    source  renaming_to=X              claimed, still the live page
    source  renaming_to=X, moved=True  committed, waiting to be dropped
    copy    id=X, renamed_from=source  not live until its marker is cleared

A copy is only valid while its version equals the version of the claim it
was made from. Committing is a compare-and-swap on the source, so at most
one copy can ever be committed from a given source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import cast

from src.core.ports.db import PageRepoPort, PageStoreError
from src.core.ports.storage import StorageError
from src.domain.entities import Page
from src.domain.errors import ConflictError, DependencyFailureError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WRITE_ATTEMPTS = 5


@contextmanager
def dependency_guard(operation: str) -> Iterator[None]:
    """Log store/object-storage failures in full, re-raise them as opaque errors."""
    try:
        yield
    except (PageStoreError, StorageError) as e:
        logger.exception("Dependency failure during %s", operation)
        raise DependencyFailureError() from e


def page_not_found(page_id: str) -> NotFoundError:
    return NotFoundError("page_not_found", f"Page '{page_id}' not found", "id")


def write_conflict() -> ConflictError:
    return ConflictError("write_conflict", "Page was modified concurrently, please retry", "id")


def is_copy_of(copy: Page, source: Page) -> bool:
    return (
        copy.renamed_from == source.id
        and copy.owner == source.owner
        and copy.created_at == source.created_at
    )


def is_claimed_copy(copy: Page, source: Page) -> bool:
    """copy was made from source's current, uncommitted claim."""
    return (
        is_copy_of(copy, source)
        and source.renaming_to == copy.id
        and not source.moved
        and copy.version == source.version
    )


def rename_copy(source: Page, new_page_id: str) -> Page:
    """The record a claimed rename places under the new id."""
    return source.model_copy(
        update={
            "id": new_page_id,
            "renaming_to": None,
            "moved": False,
            "renamed_from": source.id,
        },
        deep=True,
    )


def commit_move(repo: PageRepoPort, source: Page) -> Page | None:
    """Mark a claimed source as moved. None if it changed since it was read."""
    return repo.compare_and_swap(source.model_copy(update={"moved": True}), source.version)


def finish_move(
    repo: PageRepoPort,
    moved: Page,
    *,
    max_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS,
) -> Page | None:
    """
    Unmark the copy of a committed rename, then drop the old record.

    Safe to run more than once and from several callers at the same time.

    Returns:
        The renamed page, or None if it was deleted in the meantime
    """
    target = cast(str, moved.renaming_to)

    renamed: Page | None = None
    for _ in range(max_attempts):
        current = repo.get_owned(target, moved.owner)
        if current is None or current.created_at != moved.created_at:
            break
        if current.renamed_from is None:
            renamed = current
            break
        renamed = repo.compare_and_swap(
            current.model_copy(update={"renamed_from": None}), current.version
        )
        if renamed is not None:
            break
    else:
        logger.warning("Could not clear rename marker on page %s", target)
        raise write_conflict()

    repo.delete(moved.id, moved.owner, expected_version=moved.version)
    return renamed


def resolve_page(
    repo: PageRepoPort,
    page_id: str,
    *,
    max_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS,
) -> Page | None:
    """
    Get the live page holding an id, settling any rename it is part of.

    - a moved record is dropped and the id reported free
    - a claimed record whose copy is in place is committed, the id is freed
    - a copy is unmarked once its source has moved to it, committed if its
      source still claims it, and discarded otherwise
    """
    for _ in range(max_attempts):
        page = repo.get(page_id)
        if page is None:
            return None

        if page.moved:
            finish_move(repo, page, max_attempts=max_attempts)
            return None

        if page.renamed_from is not None:
            source = repo.get_owned(page.renamed_from, page.owner)
            if source is not None and source.moved and is_copy_of(page, source):
                if source.renaming_to == page.id:
                    return finish_move(repo, source, max_attempts=max_attempts)
            elif source is not None and is_claimed_copy(page, source):
                logger.warning("Completing interrupted rename %s -> %s", source.id, page_id)
                moved = commit_move(repo, source)
                if moved is None:
                    continue
                return finish_move(repo, moved, max_attempts=max_attempts)

            logger.warning("Discarding orphaned rename copy %s", page_id)
            if repo.delete(page.id, page.owner, expected_version=page.version):
                return None
            continue

        if page.renaming_to is not None:
            copy = repo.get_owned(page.renaming_to, page.owner)
            if copy is not None and is_claimed_copy(copy, page):
                logger.warning("Completing interrupted rename %s -> %s", page_id, copy.id)
                moved = commit_move(repo, page)
                if moved is None:
                    continue
                finish_move(repo, moved, max_attempts=max_attempts)
                return None

        return page

    logger.warning("Could not settle rename state of page %s", page_id)
    raise write_conflict()


def load_owned_page(
    repo: PageRepoPort,
    page_id: str,
    owner: str,
    *,
    max_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS,
) -> Page:
    """Get a page the owner holds. Other owners' pages are reported as missing."""
    page = resolve_page(repo, page_id, max_attempts=max_attempts)
    if page is None or page.owner != owner:
        raise page_not_found(page_id)
    return page


def update_owned_page(
    repo: PageRepoPort,
    page_id: str,
    owner: str,
    mutate: Callable[[Page], Page],
    *,
    max_attempts: int = DEFAULT_MAX_WRITE_ATTEMPTS,
) -> Page:
    """
    Apply mutate to the owner's page with optimistic concurrency.

    mutate receives a fresh copy on each attempt and may raise PageError to
    abort without writing. It must not change id or owner.

    Raises:
        NotFoundError: page missing or not owned
        ConflictError: version changed on every attempt
    """
    for attempt in range(1, max_attempts + 1):
        current = load_owned_page(repo, page_id, owner, max_attempts=max_attempts)
        stored = repo.compare_and_swap(mutate(current), current.version)
        if stored is not None:
            return stored
        logger.debug(
            "Version conflict on page %s (attempt %d/%d)", page_id, attempt, max_attempts
        )

    logger.warning("Write retries exhausted on page %s", page_id)
    raise write_conflict()
