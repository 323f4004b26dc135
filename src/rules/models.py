from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class PageIdRules(BaseModel):
    pattern: str = r"^[a-z0-9](?:[a-z0-9._-]*[a-z0-9])?$"
    min: int = 3
    max: int = 30
    reserved: list[str] = Field(default_factory=list)


class BioRules(BaseModel):
    name_max: int = 100
    description_title_max: int = 200
    image_url_max: int = 2048


class LinkRules(BaseModel):
    max_links: int = 50
    max_social_links: int = 20
    name_max: int = 100
    url_max: int = 2048
    allowed_protocols: list[str] = Field(default_factory=lambda: ["http", "https"])


class UploadsRules(BaseModel):
    default_content_type: str = "application/octet-stream"


class ConcurrencyRules(BaseModel):
    # Compare-and-swap attempts before a write surfaces as a conflict
    max_write_attempts: int = Field(default=5, ge=1)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    page_id: PageIdRules = Field(default_factory=PageIdRules)
    bio: BioRules = Field(default_factory=BioRules)
    links: LinkRules = Field(default_factory=LinkRules)
    uploads: UploadsRules = Field(default_factory=UploadsRules)
    concurrency: ConcurrencyRules = Field(default_factory=ConcurrencyRules)
    ops: OpsRules = Field(default_factory=OpsRules)
