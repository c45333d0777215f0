"""
Domain entities for the pages bounded context.

A CreatorPage is the public storefront of a creator. It owns an ordered
list of PageSection children: positions are kept contiguous (0..n-1)
by the aggregate on every add, remove and reorder.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from app.shared.domain import Entity, Result, generate_id, utcnow

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 50
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500


class PageStatus(Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    @classmethod
    def from_value(cls, value: str) -> Result["PageStatus"]:
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Statut de page invalide: {value}")


class SectionType(Enum):
    """Kind of block rendered on a storefront page."""

    HERO = "HERO"
    ABOUT = "ABOUT"
    PRODUCTS_GRID = "PRODUCTS_GRID"
    PRODUCTS_FEATURED = "PRODUCTS_FEATURED"
    BENTO_GRID = "BENTO_GRID"
    TESTIMONIALS = "TESTIMONIALS"
    CONTACT = "CONTACT"
    CUSTOM = "CUSTOM"

    @classmethod
    def from_value(cls, value: str) -> Result["SectionType"]:
        try:
            return Result.ok(cls(value))
        except ValueError:
            return Result.fail(f"Type de section invalide: {value}")


def normalize_slug(raw: Optional[str]) -> Result[str]:
    """Lowercase, trim and validate a page slug."""
    if raw is None or not raw.strip():
        return Result.fail("Le slug est requis")
    slug = raw.strip().lower()
    if len(slug) < SLUG_MIN_LENGTH:
        return Result.fail(f"Le slug doit contenir au moins {SLUG_MIN_LENGTH} caracteres")
    if len(slug) > SLUG_MAX_LENGTH:
        return Result.fail(f"Le slug ne peut pas depasser {SLUG_MAX_LENGTH} caracteres")
    if not SLUG_PATTERN.match(slug):
        return Result.fail(
            "Le slug ne peut contenir que des lettres minuscules, chiffres et tirets"
        )
    return Result.ok(slug)


def _validate_page_title(title: Optional[str]) -> Result[str]:
    if title is None or not title.strip():
        return Result.fail("Le titre de la page est requis")
    if len(title.strip()) > TITLE_MAX_LENGTH:
        return Result.fail(f"Le titre ne peut pas depasser {TITLE_MAX_LENGTH} caracteres")
    return Result.ok(title.strip())


def _validate_description(description: Optional[str]) -> Result[Optional[str]]:
    if description is None:
        return Result.ok(None)
    if len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        return Result.fail(
            f"La description ne peut pas depasser {DESCRIPTION_MAX_LENGTH} caracteres"
        )
    return Result.ok(description.strip() or None)


@dataclass(eq=False)
class PageSection(Entity):
    """A typed, positioned block of a page. ``content`` is free-form JSON."""

    page_id: str
    type: SectionType
    title: str
    position: int
    content: dict[str, Any] = field(default_factory=dict)
    is_visible: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        page_id: str,
        type: SectionType,
        title: str,
        position: int,
        content: Optional[dict[str, Any]] = None,
        is_visible: bool = True,
    ) -> Result["PageSection"]:
        if not page_id:
            return Result.fail("Page ID est requis")
        if position < 0:
            return Result.fail("La position doit etre positive")
        title_value = (title or "").strip()
        if len(title_value) > TITLE_MAX_LENGTH:
            return Result.fail(f"Le titre ne peut pas depasser {TITLE_MAX_LENGTH} caracteres")
        return Result.ok(
            cls(
                id=generate_id(),
                page_id=page_id,
                type=type,
                title=title_value,
                position=position,
                content=dict(content or {}),
                is_visible=is_visible,
            )
        )

    @classmethod
    def reconstitute(cls, *, type: str, **fields: Any) -> Result["PageSection"]:
        type_result = SectionType.from_value(type)
        if type_result.is_failure:
            return Result.fail(type_result.error)
        return Result.ok(cls(type=type_result.value, **fields))

    def update_content(self, content: dict[str, Any]) -> None:
        self.content = dict(content)
        self._touch()

    def update_title(self, title: str) -> Result[None]:
        if not title or not title.strip():
            return Result.fail("Le titre de la section est requis")
        if len(title) > TITLE_MAX_LENGTH:
            return Result.fail(f"Le titre ne peut pas depasser {TITLE_MAX_LENGTH} caracteres")
        self.title = title.strip()
        self._touch()
        return Result.ok()

    def update_position(self, position: int) -> Result[None]:
        if position < 0:
            return Result.fail("La position doit etre positive")
        self.position = position
        self._touch()
        return Result.ok()

    def hide(self) -> None:
        self.is_visible = False
        self._touch()

    def show(self) -> None:
        self.is_visible = True
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()


@dataclass(eq=False)
class CreatorPage(Entity):
    """A creator's storefront page (aggregate root)."""

    creator_id: str
    slug: str
    title: str
    status: PageStatus
    description: Optional[str] = None
    template_id: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    _sections: list[PageSection] = field(default_factory=list, repr=False)

    # ── Factories ────────────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        creator_id: str,
        slug: str,
        title: str,
        description: Optional[str] = None,
        template_id: Optional[str] = None,
    ) -> Result["CreatorPage"]:
        """Validate and create a DRAFT page without sections."""
        if not creator_id or not creator_id.strip():
            return Result.fail("Creator ID est requis")

        slug_result = normalize_slug(slug)
        if slug_result.is_failure:
            return Result.fail(slug_result.error)
        title_result = _validate_page_title(title)
        if title_result.is_failure:
            return Result.fail(title_result.error)
        description_result = _validate_description(description)
        if description_result.is_failure:
            return Result.fail(description_result.error)

        now = utcnow()
        return Result.ok(
            cls(
                id=generate_id(),
                creator_id=creator_id,
                slug=slug_result.value,
                title=title_result.value,
                status=PageStatus.DRAFT,
                description=description_result.value,
                template_id=template_id,
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(
        cls, *, status: str, sections: list[PageSection], **fields: Any
    ) -> Result["CreatorPage"]:
        status_result = PageStatus.from_value(status)
        if status_result.is_failure:
            return Result.fail(status_result.error)
        return Result.ok(
            cls(status=status_result.value, _sections=list(sections), **fields)
        )

    # ── Sections (read) ──────────────────────────────────────────────

    @property
    def sections(self) -> list[PageSection]:
        """Sections ordered by position."""
        return sorted(self._sections, key=lambda s: s.position)

    @property
    def visible_sections(self) -> list[PageSection]:
        return [s for s in self.sections if s.is_visible]

    def get_section(self, section_id: str) -> Optional[PageSection]:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    @property
    def is_published(self) -> bool:
        return self.status is PageStatus.PUBLISHED

    def is_owned_by(self, creator_id: str) -> bool:
        return self.creator_id == creator_id

    # ── Status ───────────────────────────────────────────────────────

    def publish(self) -> Result[None]:
        if self.status is PageStatus.PUBLISHED:
            return Result.fail("La page est deja publiee")
        self.status = PageStatus.PUBLISHED
        self.published_at = utcnow()
        self._touch()
        return Result.ok()

    def unpublish(self) -> Result[None]:
        if self.status is PageStatus.DRAFT:
            return Result.fail("La page est deja en brouillon")
        self.status = PageStatus.DRAFT
        self._touch()
        return Result.ok()

    def update_settings(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> Result[None]:
        """Update the fields that are given; nothing changes on failure."""
        new_title = self.title
        new_description = self.description
        new_slug = self.slug

        if title is not None:
            title_result = _validate_page_title(title)
            if title_result.is_failure:
                return Result.fail(title_result.error)
            new_title = title_result.value
        if description is not None:
            description_result = _validate_description(description)
            if description_result.is_failure:
                return Result.fail(description_result.error)
            new_description = description_result.value
        if slug is not None:
            slug_result = normalize_slug(slug)
            if slug_result.is_failure:
                return Result.fail(slug_result.error)
            new_slug = slug_result.value

        self.title = new_title
        self.description = new_description
        self.slug = new_slug
        self._touch()
        return Result.ok()

    # ── Sections (write) ─────────────────────────────────────────────

    def add_section(
        self,
        type: SectionType,
        title: str,
        content: Optional[dict[str, Any]] = None,
        position: Optional[int] = None,
    ) -> Result[PageSection]:
        """Insert a section; later sections move down by one."""
        target = len(self._sections) if position is None else position
        if target < 0:
            return Result.fail("La position doit etre positive")
        target = min(target, len(self._sections))

        created = PageSection.create(
            page_id=self.id, type=type, title=title, position=target, content=content
        )
        if created.is_failure:
            return created

        for section in self._sections:
            if section.position >= target:
                section.update_position(section.position + 1)
        self._sections.append(created.value)
        self._touch()
        return created

    def remove_section(self, section_id: str) -> Result[None]:
        """Remove a section; later sections move up by one."""
        section = self.get_section(section_id)
        if section is None:
            return Result.fail("Section non trouvee")

        removed_position = section.position
        self._sections = [s for s in self._sections if s.id != section_id]
        for other in self._sections:
            if other.position > removed_position:
                other.update_position(other.position - 1)
        self._touch()
        return Result.ok()

    def reorder_sections(self, section_ids: list[str]) -> Result[None]:
        """Set positions to the index of each id in ``section_ids``."""
        if len(section_ids) != len(self._sections):
            return Result.fail("Le nombre de sections ne correspond pas")
        for section_id in section_ids:
            if self.get_section(section_id) is None:
                return Result.fail(f"Section {section_id} non trouvee")

        for index, section_id in enumerate(section_ids):
            self.get_section(section_id).update_position(index)
        self._touch()
        return Result.ok()

    def _touch(self) -> None:
        self.updated_at = utcnow()
