from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities import BioInfo, CamelModel, Link, Page, SocialLink


class CamelRequest(BaseModel):
    """Request bodies use camelCase keys; unknown keys are rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# --- Pages ---
class BioInfoRequest(CamelRequest):
    name: str
    image_url: str = ""
    description_title: str = ""


class PageCreateRequest(CamelRequest):
    id: str
    bio_info: BioInfoRequest


class PageRenameRequest(CamelRequest):
    new_id: str


class PageListResponse(BaseModel):
    items: list[Page]
    total: int


class PublicPageResponse(CamelModel):
    """A page as anonymous visitors see it. The owner identity is not exposed."""

    id: str
    bio_info: BioInfo
    links: list[Link]
    social_media_links: list[SocialLink]
    page_colors: dict[str, str] | None = None
    created_at: datetime
    verified: bool = False

    @classmethod
    def from_page(cls, page: Page) -> "PublicPageResponse":
        return cls(
            id=page.id,
            bio_info=page.bio_info,
            links=page.links,
            social_media_links=page.social_media_links,
            page_colors=page.page_colors,
            created_at=page.created_at,
            verified=page.verified,
        )


class AvailabilityResponse(BaseModel):
    id: str
    available: bool


class RemovedResponse(BaseModel):
    removed: bool


# --- Links ---
class LinkCreateRequest(CamelRequest):
    name: str
    url: str


class LinkUpdateRequest(CamelRequest):
    name: str | None = None
    url: str | None = None


class SocialLinkCreateRequest(CamelRequest):
    url: str


class SocialLinkUpdateRequest(CamelRequest):
    url: str | None = None


class LinkListResponse(BaseModel):
    items: list[Link]
    total: int


class SocialLinkListResponse(BaseModel):
    items: list[SocialLink]
    total: int


# --- Uploads ---
class ProfileImageResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_url: str
    key: str = Field(description="Object key in the profile image bucket")
