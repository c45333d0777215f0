"""
Adapter: Creator page repository.

Implements PageRepository port.
Reads/writes the creator_pages and page_sections tables.

A save upserts the page row, deletes the sections that are no longer on
the aggregate and upserts the remaining ones, in a single transaction.
Section content is stored as JSONB.
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, Engine

from app.domain.pages.entities import CreatorPage, PageSection
from app.domain.pages.errors import PageMappingError
from app.domain.pages.ports import PageRepository

logger = logging.getLogger(__name__)

_PAGE_COLUMNS = """
    id, creator_id, slug, title, description, template_id, status,
    published_at, created_at, updated_at
"""

_UPSERT_PAGE = text(
    """
    INSERT INTO creator_pages (
        id, creator_id, slug, title, description, template_id, status,
        published_at, created_at, updated_at
    )
    VALUES (
        :id, :creator_id, :slug, :title, :description, :template_id, :status,
        :published_at, :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        slug = EXCLUDED.slug,
        title = EXCLUDED.title,
        description = EXCLUDED.description,
        template_id = EXCLUDED.template_id,
        status = EXCLUDED.status,
        published_at = EXCLUDED.published_at,
        updated_at = EXCLUDED.updated_at
    """
)

_UPSERT_SECTION = text(
    """
    INSERT INTO page_sections (
        id, page_id, type, title, content, position, is_visible,
        created_at, updated_at
    )
    VALUES (
        :id, :page_id, :type, :title, CAST(:content AS JSONB), :position, :is_visible,
        :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        type = EXCLUDED.type,
        title = EXCLUDED.title,
        content = EXCLUDED.content,
        position = EXCLUDED.position,
        is_visible = EXCLUDED.is_visible,
        updated_at = EXCLUDED.updated_at
    """
)

_DELETE_STALE_SECTIONS = text(
    "DELETE FROM page_sections WHERE page_id = :page_id AND id NOT IN :keep_ids"
).bindparams(bindparam("keep_ids", expanding=True))

_SELECT_SECTIONS = text(
    """
    SELECT id, page_id, type, title, content, position, is_visible,
           created_at, updated_at
    FROM page_sections
    WHERE page_id IN :page_ids
    ORDER BY page_id, position
    """
).bindparams(bindparam("page_ids", expanding=True))


def _load_content(raw: Any) -> dict[str, Any]:
    # psycopg2 decodes JSONB; other drivers may hand back the raw text.
    if raw is None:
        return {}
    if isinstance(raw, str):
        return json.loads(raw) if raw else {}
    return dict(raw)


def _row_to_section(row: Any) -> PageSection:
    m = row._mapping
    result = PageSection.reconstitute(
        id=m["id"],
        page_id=m["page_id"],
        type=m["type"],
        title=m["title"] or "",
        content=_load_content(m["content"]),
        position=m["position"],
        is_visible=m["is_visible"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )
    if result.is_failure:
        raise PageMappingError(m["page_id"], result.error or "unknown")
    return result.value


def _row_to_page(row: Any, sections: list[PageSection]) -> CreatorPage:
    m = row._mapping
    result = CreatorPage.reconstitute(
        id=m["id"],
        creator_id=m["creator_id"],
        slug=m["slug"],
        title=m["title"],
        description=m["description"],
        template_id=m["template_id"],
        status=m["status"],
        sections=sections,
        published_at=m["published_at"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    )
    if result.is_failure:
        raise PageMappingError(m["id"], result.error or "unknown")
    return result.value


class PageRepositoryAdapter(PageRepository):
    """PostgreSQL adapter for the creator_pages and page_sections tables."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ── Writes ───────────────────────────────────────────────────────

    def save(self, page: CreatorPage) -> None:
        sections = page.sections
        with self._engine.begin() as conn:
            conn.execute(
                _UPSERT_PAGE,
                {
                    "id": page.id,
                    "creator_id": page.creator_id,
                    "slug": page.slug,
                    "title": page.title,
                    "description": page.description,
                    "template_id": page.template_id,
                    "status": page.status.value,
                    "published_at": page.published_at,
                    "created_at": page.created_at,
                    "updated_at": page.updated_at,
                },
            )
            if sections:
                conn.execute(
                    _DELETE_STALE_SECTIONS,
                    {"page_id": page.id, "keep_ids": [s.id for s in sections]},
                )
                conn.execute(
                    _UPSERT_SECTION,
                    [
                        {
                            "id": s.id,
                            "page_id": page.id,
                            "type": s.type.value,
                            "title": s.title,
                            "content": json.dumps(s.content),
                            "position": s.position,
                            "is_visible": s.is_visible,
                            "created_at": s.created_at,
                            "updated_at": s.updated_at,
                        }
                        for s in sections
                    ],
                )
            else:
                conn.execute(
                    text("DELETE FROM page_sections WHERE page_id = :page_id"),
                    {"page_id": page.id},
                )
        logger.debug(
            "Saved page: id=%s slug=%s status=%s sections=%d",
            page.id,
            page.slug,
            page.status.value,
            len(sections),
        )

    def delete(self, page_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM page_sections WHERE page_id = :id"), {"id": page_id})
            conn.execute(text("DELETE FROM creator_pages WHERE id = :id"), {"id": page_id})
        logger.debug("Deleted page: id=%s", page_id)

    # ── Reads ────────────────────────────────────────────────────────

    def _hydrate(self, conn: Connection, rows: list[Any]) -> list[CreatorPage]:
        if not rows:
            return []
        page_ids = [r._mapping["id"] for r in rows]
        sections_by_page: dict[str, list[PageSection]] = {pid: [] for pid in page_ids}
        for section_row in conn.execute(_SELECT_SECTIONS, {"page_ids": page_ids}).fetchall():
            sections_by_page[section_row._mapping["page_id"]].append(
                _row_to_section(section_row)
            )
        return [_row_to_page(r, sections_by_page[r._mapping["id"]]) for r in rows]

    def _find(self, where: str, params: dict[str, Any]) -> list[CreatorPage]:
        query = text(
            f"SELECT {_PAGE_COLUMNS} FROM creator_pages WHERE {where} ORDER BY updated_at DESC"
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query, params).fetchall()
            return self._hydrate(conn, list(rows))

    def find_by_id(self, page_id: str) -> Optional[CreatorPage]:
        pages = self._find("id = :id", {"id": page_id})
        return pages[0] if pages else None

    def find_by_slug(self, slug: str) -> Optional[CreatorPage]:
        pages = self._find("slug = :slug", {"slug": slug})
        return pages[0] if pages else None

    def find_published_by_slug(self, slug: str) -> Optional[CreatorPage]:
        pages = self._find(
            "slug = :slug AND status = :status", {"slug": slug, "status": "PUBLISHED"}
        )
        return pages[0] if pages else None

    def find_by_creator_id(self, creator_id: str) -> list[CreatorPage]:
        return self._find("creator_id = :creator_id", {"creator_id": creator_id})

    def slug_exists(self, slug: str, exclude_page_id: Optional[str] = None) -> bool:
        query = "SELECT 1 FROM creator_pages WHERE slug = :slug"
        params: dict[str, Any] = {"slug": slug}
        if exclude_page_id:
            query += " AND id <> :exclude_id"
            params["exclude_id"] = exclude_page_id
        with self._engine.connect() as conn:
            row = conn.execute(text(query + " LIMIT 1"), params).fetchone()
        return row is not None
