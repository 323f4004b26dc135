"""
Page store interface.

Protocol-based interface over a persistent keyed store.
Implementations: in-memory (tests, dev), SQLite.

Pages are keyed by (owner, id); id is additionally unique across owners.
Links and social links are embedded in the page record, so every page write
replaces the whole record.

Invariants:
- insert() is insert-if-absent on id: two concurrent inserts of the same id
  cannot both succeed
- compare_and_swap() writes only if the stored version equals the expected
  version, and bumps the version by one
- delete() with expected_version is the same condition applied to removal
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import Page


class PageRepoPort(Protocol):
    """Repository for Page aggregates."""

    def get(self, page_id: str) -> Page | None:
        """Get page by id regardless of owner."""
        ...

    def get_owned(self, page_id: str, owner: str) -> Page | None:
        """Get page by (id, owner). None if absent or owned by someone else."""
        ...

    def insert(self, page: Page) -> bool:
        """
        Insert page if no page with the same id exists.

        Returns:
            True if inserted, False if the id is already taken
        """
        ...

    def compare_and_swap(self, page: Page, expected_version: int) -> Page | None:
        """
        Replace the stored (page.id, page.owner) record if its version is
        expected_version.

        Returns:
            The stored page (version expected_version + 1), or None if the
            record changed or disappeared since it was read
        """
        ...

    def delete(self, page_id: str, owner: str, expected_version: int | None = None) -> bool:
        """
        Delete page by (id, owner), optionally only at expected_version.

        Returns:
            True if a record was deleted, False if none matched
        """
        ...

    def list_by_owner(self, owner: str) -> list[Page]:
        """List all pages of an owner in the store's natural order."""
        ...


class PageStoreError(Exception):
    """Raised by page store adapters when the underlying store fails."""
