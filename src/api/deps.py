import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from src.adapters.clock import SystemClock
from src.adapters.local_storage import LocalFileStorage
from src.adapters.memory_repos import InMemoryPageRepo
from src.adapters.s3_storage import S3Storage, create_s3_storage
from src.adapters.sqlite.repos import SQLitePageRepo
from src.api.auth_utils import owner_from_token

# Components are stateless; dependencies are injected as ports/repos/adapters.
from src.components.assets import ProfileImageConfig
from src.components.links import LinkService, SocialLinkService
from src.components.pages import PageDirectoryService
from src.core.ports.db import PageRepoPort
from src.core.ports.storage import StoragePort
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        data_dir = os.environ.get("LINKHUB_DATA_DIR", "./data")
        self.db_path = f"{data_dir}/linkhub.db"
        self.assets_dir = Path(f"{data_dir}/assets")
        self.rules_path = Path(os.environ.get("LINKHUB_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = self.base_dir / "migrations"
        # "sqlite" or "memory"
        self.page_store = os.environ.get("LINKHUB_STORE", "sqlite")
        # "local" or "s3"
        self.asset_store = os.environ.get("LINKHUB_ASSET_STORE", "local")
        self.cdn_domain = os.environ.get("CDN_DOMAIN_NAME", "cdn.localhost")
        self.images_bucket = os.environ.get("PROFILE_IMAGES_BUCKET_NAME", "")
        self.s3_endpoint_url = os.environ.get("S3_ENDPOINT_URL")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Stores ---
_memory_repo_instance: InMemoryPageRepo | None = None


def get_page_repo(settings: Settings = Depends(get_settings)) -> PageRepoPort:
    global _memory_repo_instance
    if settings.page_store == "memory":
        if _memory_repo_instance is None:
            _memory_repo_instance = InMemoryPageRepo()
        return _memory_repo_instance
    return SQLitePageRepo(settings.db_path)


_s3_storage_instance: S3Storage | None = None


def get_storage(settings: Settings = Depends(get_settings)) -> StoragePort:
    global _s3_storage_instance
    if settings.asset_store == "s3":
        if _s3_storage_instance is None:
            _s3_storage_instance = create_s3_storage(
                settings.images_bucket, endpoint_url=settings.s3_endpoint_url
            )
        return _s3_storage_instance
    return LocalFileStorage(settings.assets_dir)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Component Services ---
def get_page_service(
    repo: PageRepoPort = Depends(get_page_repo),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> PageDirectoryService:
    """Get page directory service."""
    return PageDirectoryService(repo=repo, clock=clock, rules=rules)


def get_link_service(
    repo: PageRepoPort = Depends(get_page_repo),
    rules: Rules = Depends(get_rules),
) -> LinkService:
    """Get link collection service."""
    return LinkService(repo=repo, rules=rules)


def get_social_link_service(
    repo: PageRepoPort = Depends(get_page_repo),
    rules: Rules = Depends(get_rules),
) -> SocialLinkService:
    """Get social link collection service."""
    return SocialLinkService(repo=repo, rules=rules)


def get_profile_image_config(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> ProfileImageConfig:
    return ProfileImageConfig(
        cdn_domain=settings.cdn_domain,
        default_content_type=rules.uploads.default_content_type,
        page_id_rules=rules.page_id,
    )


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


async def get_current_owner(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str:
    """
    Resolve the owner identity from a verified bearer token.

    The token is issued by the identity provider; its "sub" claim is the
    owner string used by every page operation.
    """
    # 1. Cookie first (HttpOnly), then Authorization header
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ")[1]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # 2. Verify
    owner = owner_from_token(token)
    if owner is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return owner
