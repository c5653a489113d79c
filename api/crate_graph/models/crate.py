"""crates.io API response models for GET /api/v1/crates/{name} and .../dependencies.

Unknown keys are ignored. Fields the registry has dropped or made optional over
time carry defaults so upstream schema drift does not fail decoding.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

DependencyKind = Literal["normal", "dev", "build"]


class CrateBadgeAttributes(BaseModel):
    service: Optional[str] = None
    repository: Optional[str] = None
    branch: Optional[str] = None


class CrateBadge(BaseModel):
    badge_type: str
    attributes: CrateBadgeAttributes = Field(default_factory=CrateBadgeAttributes)


class CrateLinks(BaseModel):
    version_downloads: Optional[str] = None
    versions: Optional[str] = None
    owners: Optional[str] = None
    owner_team: Optional[str] = None
    owner_user: Optional[str] = None
    reverse_dependencies: Optional[str] = None


class Crate(BaseModel):
    id: str
    name: str
    updated_at: Optional[str] = None
    versions: Optional[list[int]] = None
    keywords: Optional[list[str]] = None
    categories: Optional[list[str]] = None
    badges: list[CrateBadge] = Field(default_factory=list)
    created_at: Optional[str] = None
    downloads: int = 0
    recent_downloads: Optional[int] = None
    max_version: Optional[str] = None
    newest_version: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    documentation: Optional[str] = None
    repository: Optional[str] = None
    links: CrateLinks = Field(default_factory=CrateLinks)
    exact_match: bool = False


class User(BaseModel):
    id: int
    login: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    url: Optional[str] = None


class VersionLinks(BaseModel):
    dependencies: Optional[str] = None
    version_downloads: Optional[str] = None
    authors: Optional[str] = None


class VersionAuditAction(BaseModel):
    action: str
    user: User
    time: str


class Version(BaseModel):
    id: int
    crate: str
    num: str
    dl_path: Optional[str] = None
    readme_path: Optional[str] = None
    updated_at: Optional[str] = None
    created_at: Optional[str] = None
    downloads: int = 0
    features: dict[str, list[str]] = Field(default_factory=dict)
    yanked: bool = False
    license: Optional[str] = None
    links: VersionLinks = Field(default_factory=VersionLinks)
    crate_size: Optional[int] = None
    published_by: Optional[User] = None
    audit_actions: list[VersionAuditAction] = Field(default_factory=list)


class Keyword(BaseModel):
    id: str
    keyword: str
    created_at: Optional[str] = None
    crates_cnt: int = 0


class Category(BaseModel):
    id: str
    category: str
    slug: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    crates_cnt: int = 0


class CrateResponse(BaseModel):
    """Body of GET /api/v1/crates/{name}."""

    crate: Crate
    versions: list[Version] = Field(default_factory=list)
    keywords: list[Keyword] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)


class DependencyResponse(BaseModel):
    """One declared dependency of a crate version."""

    id: int
    version_id: int
    crate_id: str
    req: str
    optional: bool = False
    default_features: bool = True
    features: Optional[list[str]] = None
    target: Optional[str] = None
    kind: DependencyKind = "normal"
    downloads: int = 0


class CrateDependenciesResponse(BaseModel):
    """Body of GET /api/v1/crates/{name}/{version}/dependencies."""

    dependencies: list[DependencyResponse] = Field(default_factory=list)
