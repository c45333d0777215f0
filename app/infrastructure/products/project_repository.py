"""
Adapter: Project repository.

Implements ProjectRepository port.
Reads/writes the projects table. Product counts are not stored here;
they are computed from the products table when projects are listed.
"""

import logging
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.domain.products.entities import Project
from app.domain.products.ports import ProjectRepository

logger = logging.getLogger(__name__)

_PROJECT_COLUMNS = "id, creator_id, name, description, cover_image, created_at, updated_at"

_UPSERT_PROJECT = text(
    """
    INSERT INTO projects (
        id, creator_id, name, description, cover_image, created_at, updated_at
    )
    VALUES (
        :id, :creator_id, :name, :description, :cover_image, :created_at, :updated_at
    )
    ON CONFLICT (id)
    DO UPDATE SET
        name = EXCLUDED.name,
        description = EXCLUDED.description,
        cover_image = EXCLUDED.cover_image,
        updated_at = EXCLUDED.updated_at
    """
)


def _row_to_project(row: Any) -> Project:
    m = row._mapping
    return Project.reconstitute(
        id=m["id"],
        creator_id=m["creator_id"],
        name=m["name"],
        description=m["description"],
        cover_image=m["cover_image"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
    ).value


class ProjectRepositoryAdapter(ProjectRepository):
    """PostgreSQL adapter for the projects table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_id(self, project_id: str) -> Optional[Project]:
        query = text(f"SELECT {_PROJECT_COLUMNS} FROM projects WHERE id = :id")
        with self._engine.connect() as conn:
            row = conn.execute(query, {"id": project_id}).fetchone()
        return _row_to_project(row) if row else None

    def find_by_creator_id(self, creator_id: str) -> list[Project]:
        query = text(
            f"SELECT {_PROJECT_COLUMNS} FROM projects "
            "WHERE creator_id = :creator_id ORDER BY created_at DESC"
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query, {"creator_id": creator_id}).fetchall()
        return [_row_to_project(r) for r in rows]

    def save(self, project: Project) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                _UPSERT_PROJECT,
                {
                    "id": project.id,
                    "creator_id": project.creator_id,
                    "name": project.name,
                    "description": project.description,
                    "cover_image": project.cover_image,
                    "created_at": project.created_at,
                    "updated_at": project.updated_at,
                },
            )
        logger.debug("Saved project: id=%s", project.id)

    def delete(self, project_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM projects WHERE id = :id"), {"id": project_id})
        logger.debug("Deleted project: id=%s", project_id)
