"""
Use case: Create a project (a collection of products).

Input: CreateProjectCommand (creator_id, name, description?, cover_image?)
Output: Result[ProjectResult]
Side effects: Persists a new empty project.
Failure cases:
    - Missing creator id
    - Empty or too long name, invalid cover image URL
"""

import logging

from app.application.products.dtos import CreateProjectCommand, ProjectResult
from app.domain.products.entities import Project
from app.domain.products.ports import ProjectRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateProjectUseCase:
    def __init__(self, project_repo: ProjectRepository) -> None:
        self._project_repo = project_repo

    def execute(self, command: CreateProjectCommand) -> Result[ProjectResult]:
        created = Project.create(
            creator_id=command.creator_id,
            name=command.name,
            description=command.description,
            cover_image=command.cover_image,
        )
        if created.is_failure:
            return Result.fail(created.error)
        project = created.value

        self._project_repo.save(project)
        logger.info("Created project %s for creator %s", project.id, project.creator_id)
        return Result.ok(ProjectResult.from_entity(project))
