import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_repos import InMemoryPageRepo
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLitePageRepo
from src.components.links import LinkService, SocialLinkService
from src.components.pages import PageDirectoryService
from src.rules.loader import load_rules
from src.rules.models import Rules

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    # Tests run from the project root
    rules_path = Path("rules.yaml").resolve()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def memory_repo() -> InMemoryPageRepo:
    return InMemoryPageRepo()


@pytest.fixture
def sqlite_repo(tmp_path) -> SQLitePageRepo:
    """SQLitePageRepo on a freshly migrated temporary database."""
    db_path = os.path.join(str(tmp_path), "linkhub.db")
    SQLiteMigrator(db_path, "migrations").run_migrations()
    return SQLitePageRepo(db_path)


@pytest.fixture
def page_service(memory_repo, clock, rules) -> PageDirectoryService:
    return PageDirectoryService(repo=memory_repo, clock=clock, rules=rules)


@pytest.fixture
def link_service(memory_repo, rules) -> LinkService:
    return LinkService(repo=memory_repo, rules=rules)


@pytest.fixture
def social_link_service(memory_repo, rules) -> SocialLinkService:
    return SocialLinkService(repo=memory_repo, rules=rules)
