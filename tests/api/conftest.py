"""
Shared fixtures for HTTP tests.

Builds an app with the page, link, upload and public routers, backed by
the in-memory store, local file storage and a fixed clock.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.adapters.local_storage import LocalFileStorage
from src.adapters.memory_repos import InMemoryPageRepo
from src.api import deps
from src.api.auth_utils import create_access_token
from src.api.routes import admin_links, admin_pages, assets, public
from src.components.assets import ProfileImageConfig

API_NOW = datetime(2025, 3, 1, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def api_repo() -> InMemoryPageRepo:
    return InMemoryPageRepo()


@pytest.fixture
def api_storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(tmp_path / "assets")


@pytest.fixture
def api_clock() -> FixedClock:
    return FixedClock(API_NOW)


@pytest.fixture
def app(api_repo, api_storage, api_clock, rules) -> FastAPI:
    """Test FastAPI app with page routes and in-memory adapters."""
    app = FastAPI()
    app.include_router(admin_pages.router, prefix="/api/admin/pages")
    app.include_router(admin_links.router, prefix="/api/admin/pages")
    app.include_router(assets.router, prefix="/api/admin/pages")
    app.include_router(public.router, prefix="/api")

    app.dependency_overrides[deps.get_page_repo] = lambda: api_repo
    app.dependency_overrides[deps.get_storage] = lambda: api_storage
    app.dependency_overrides[deps.get_clock] = lambda: api_clock
    app.dependency_overrides[deps.get_rules] = lambda: rules
    app.dependency_overrides[deps.get_profile_image_config] = lambda: ProfileImageConfig(
        cdn_domain="cdn.example.com",
        page_id_rules=rules.page_id,
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def bearer(owner: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': owner})}"}


@pytest.fixture
def alice() -> dict[str, str]:
    return bearer("alice")


@pytest.fixture
def bob() -> dict[str, str]:
    return bearer("bob")


@pytest.fixture
def alice_page(client: TestClient, alice: dict[str, str]) -> dict:
    response = client.post(
        "/api/admin/pages",
        json={"id": "alice", "bioInfo": {"name": "Alice"}},
        headers=alice,
    )
    assert response.status_code == 201, response.text
    return response.json()
