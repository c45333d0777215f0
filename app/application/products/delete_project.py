"""
Use case: Delete a project.

Input: ProjectActionCommand (project_id, creator_id)
Output: Result[DeleteProjectResult]
Side effects: Detaches the project's products, then deletes the project.
    The products themselves are kept.
Failure cases:
    - Missing ids
    - Unknown project, or project owned by another creator
"""

import logging

from app.application.products.common import load_owned_project
from app.application.products.dtos import DeleteProjectResult, ProjectActionCommand
from app.domain.products.ports import ProductRepository, ProjectRepository
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class DeleteProjectUseCase:
    def __init__(
        self, project_repo: ProjectRepository, product_repo: ProductRepository
    ) -> None:
        self._project_repo = project_repo
        self._product_repo = product_repo

    def execute(self, command: ProjectActionCommand) -> Result[DeleteProjectResult]:
        loaded = load_owned_project(self._project_repo, command.project_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        project = loaded.value

        orphaned = self._product_repo.detach_project(project.id)
        self._project_repo.delete(project.id)
        logger.info("Deleted project %s (%d product(s) detached)", project.id, orphaned)
        return Result.ok(DeleteProjectResult(deleted=True, orphaned_products=orphaned))
