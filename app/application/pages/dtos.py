"""
Data Transfer Objects for the pages application layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from app.domain.pages.entities import CreatorPage, PageSection


@dataclass(frozen=True)
class CreatePageCommand:
    creator_id: str
    slug: str
    title: str
    description: Optional[str] = None
    template_id: Optional[str] = None


@dataclass(frozen=True)
class GetPublicPageQuery:
    slug: str


@dataclass(frozen=True)
class GetCreatorPageQuery:
    page_id: str
    creator_id: str


@dataclass(frozen=True)
class ListCreatorPagesQuery:
    creator_id: str


@dataclass(frozen=True)
class UpdatePageSettingsCommand:
    """Only the non-None fields are changed."""

    page_id: str
    creator_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None


@dataclass(frozen=True)
class PageActionCommand:
    """Publish, unpublish and delete only need the page and its owner."""

    page_id: str
    creator_id: str


@dataclass(frozen=True)
class AddSectionCommand:
    page_id: str
    creator_id: str
    type: str
    title: str
    content: dict[str, Any] = field(default_factory=dict)
    position: Optional[int] = None


@dataclass(frozen=True)
class UpdateSectionCommand:
    page_id: str
    creator_id: str
    section_id: str
    title: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    is_visible: Optional[bool] = None


@dataclass(frozen=True)
class RemoveSectionCommand:
    page_id: str
    creator_id: str
    section_id: str


@dataclass(frozen=True)
class ReorderSectionsCommand:
    page_id: str
    creator_id: str
    section_ids: list[str]


@dataclass(frozen=True)
class SectionResult:
    id: str
    type: str
    title: str
    content: dict[str, Any]
    position: int
    is_visible: bool

    @classmethod
    def from_entity(cls, section: PageSection) -> "SectionResult":
        return cls(
            id=section.id,
            type=section.type.value,
            title=section.title,
            content=dict(section.content),
            position=section.position,
            is_visible=section.is_visible,
        )


@dataclass(frozen=True)
class PageResult:
    """A page as seen by its owner, with every section."""

    id: str
    creator_id: str
    slug: str
    title: str
    description: Optional[str]
    template_id: Optional[str]
    status: str
    sections: list[SectionResult]
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, page: CreatorPage) -> "PageResult":
        return cls(
            id=page.id,
            creator_id=page.creator_id,
            slug=page.slug,
            title=page.title,
            description=page.description,
            template_id=page.template_id,
            status=page.status.value,
            sections=[SectionResult.from_entity(s) for s in page.sections],
            published_at=page.published_at,
            created_at=page.created_at,
            updated_at=page.updated_at,
        )


@dataclass(frozen=True)
class PublicPageResult:
    """A published page as shown to visitors: visible sections, no owner id."""

    id: str
    slug: str
    title: str
    description: Optional[str]
    sections: list[SectionResult]
    published_at: Optional[datetime]

    @classmethod
    def from_entity(cls, page: CreatorPage) -> "PublicPageResult":
        return cls(
            id=page.id,
            slug=page.slug,
            title=page.title,
            description=page.description,
            sections=[SectionResult.from_entity(s) for s in page.visible_sections],
            published_at=page.published_at,
        )


@dataclass(frozen=True)
class ReorderSectionsResult:
    page_id: str
    section_ids: list[str]
