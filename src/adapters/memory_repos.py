"""
In-memory page store.

Thread-safe implementation of PageRepoPort for tests and local development.
A single lock guards the id index so insert-if-absent and compare-and-swap
behave like the SQLite conditional statements.
"""

from __future__ import annotations

import threading

from src.domain.entities import Page


class InMemoryPageRepo:
    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _copy(page: Page) -> Page:
        # Callers must never hold a reference into the store
        return page.model_copy(deep=True)

    def get(self, page_id: str) -> Page | None:
        with self._lock:
            page = self._pages.get(page_id)
            return self._copy(page) if page else None

    def get_owned(self, page_id: str, owner: str) -> Page | None:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None or page.owner != owner:
                return None
            return self._copy(page)

    def insert(self, page: Page) -> bool:
        with self._lock:
            if page.id in self._pages:
                return False
            self._pages[page.id] = self._copy(page)
            return True

    def compare_and_swap(self, page: Page, expected_version: int) -> Page | None:
        with self._lock:
            current = self._pages.get(page.id)
            if current is None or current.owner != page.owner:
                return None
            if current.version != expected_version:
                return None
            stored = page.model_copy(update={"version": expected_version + 1}, deep=True)
            self._pages[page.id] = stored
            return self._copy(stored)

    def delete(self, page_id: str, owner: str, expected_version: int | None = None) -> bool:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None or page.owner != owner:
                return False
            if expected_version is not None and page.version != expected_version:
                return False
            del self._pages[page_id]
            return True

    def list_by_owner(self, owner: str) -> list[Page]:
        with self._lock:
            return [self._copy(p) for p in self._pages.values() if p.owner == owner]
