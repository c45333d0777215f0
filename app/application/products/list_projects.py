"""
Use case: List a creator's projects with their product counts.

Input: ListProjectsQuery (creator_id)
Output: Result[ProjectList]
Side effects: None (read-only query).
"""

from app.application.products.dtos import ListProjectsQuery, ProjectList, ProjectResult
from app.domain.products.ports import ProductRepository, ProjectRepository
from app.shared.domain import Result


class ListProjectsUseCase:
    def __init__(
        self, project_repo: ProjectRepository, product_repo: ProductRepository
    ) -> None:
        self._project_repo = project_repo
        self._product_repo = product_repo

    def execute(self, query: ListProjectsQuery) -> Result[ProjectList]:
        if not query.creator_id or not query.creator_id.strip():
            return Result.fail("Creator ID est requis")

        projects = self._project_repo.find_by_creator_id(query.creator_id)
        counts = self._product_repo.count_by_project_ids([p.id for p in projects])
        return Result.ok(
            ProjectList(
                projects=[ProjectResult.from_entity(p, counts[p.id]) for p in projects],
                total=len(projects),
            )
        )
