from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
ColorRole = Literal[
    "backgroundColor",
    "textColor",
    "buttonColor",
    "buttonHoverColor",
    "buttonTextColor",
    "buttonLinkIconColor",
    "socialIconsColor",
]

COLOR_ROLES: tuple[str, ...] = (
    "backgroundColor",
    "textColor",
    "buttonColor",
    "buttonHoverColor",
    "buttonTextColor",
    "buttonLinkIconColor",
    "socialIconsColor",
)


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Page contents ---

class BioInfo(CamelModel):
    name: str
    image_url: str = ""
    description_title: str = ""


class Link(CamelModel):
    id: str
    url: str
    name: str


class SocialLink(CamelModel):
    id: str
    url: str


# --- Page aggregate ---

class Page(CamelModel):
    id: str
    owner: str
    bio_info: BioInfo
    # Order of both collections is caller-controlled
    links: list[Link] = Field(default_factory=list)
    social_media_links: list[SocialLink] = Field(default_factory=list)
    page_colors: dict[str, str] | None = None
    created_at: datetime
    verified: bool = False
    # Storage bookkeeping, never serialized
    version: int = Field(default=1, exclude=True)
    # Rename in flight: the source carries renaming_to (and moved once
    # committed), the copy under the new id carries renamed_from
    renaming_to: str | None = Field(default=None, exclude=True)
    moved: bool = Field(default=False, exclude=True)
    renamed_from: str | None = Field(default=None, exclude=True)
