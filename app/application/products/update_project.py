"""
Use case: Update a project's name, description or cover image.

Input: UpdateProjectCommand
Output: Result[ProjectResult]
Side effects: Persists the updated project.
Failure cases:
    - Unknown project, or project owned by another creator
    - Empty or too long name, invalid cover image URL
"""

from app.application.products.common import load_owned_project
from app.application.products.dtos import ProjectResult, UpdateProjectCommand
from app.domain.products.ports import ProductRepository, ProjectRepository
from app.shared.domain import Result


class UpdateProjectUseCase:
    def __init__(
        self, project_repo: ProjectRepository, product_repo: ProductRepository
    ) -> None:
        self._project_repo = project_repo
        self._product_repo = product_repo

    def execute(self, command: UpdateProjectCommand) -> Result[ProjectResult]:
        loaded = load_owned_project(self._project_repo, command.project_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        project = loaded.value

        if command.name is not None:
            renamed = project.update_name(command.name)
            if renamed.is_failure:
                return Result.fail(renamed.error)
        if command.description is not None:
            project.update_description(command.description.strip() or None)
        if command.cover_image is not None:
            covered = project.update_cover_image(command.cover_image)
            if covered.is_failure:
                return Result.fail(covered.error)

        self._project_repo.save(project)
        count = self._product_repo.count_by_project_ids([project.id])[project.id]
        return Result.ok(ProjectResult.from_entity(project, count))
