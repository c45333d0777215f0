"""
Use case: Create a product in a creator's catalog.

Input: CreateProductCommand (creator_id, name, price, description?, project_id?)
Output: Result[ProductResult]
Side effects: Persists a new DRAFT product.
Failure cases:
    - Invalid price (not a number, negative or zero)
    - Missing creator id, empty or too long name
    - Unknown project, or project owned by another creator
"""

import logging

from app.application.products.common import load_owned_project
from app.application.products.dtos import CreateProductCommand, ProductResult
from app.domain.products.entities import Product
from app.domain.products.ports import ProductRepository, ProjectRepository
from app.domain.products.value_objects import Money
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class CreateProductUseCase:
    def __init__(
        self, product_repo: ProductRepository, project_repo: ProjectRepository
    ) -> None:
        self._product_repo = product_repo
        self._project_repo = project_repo

    def execute(self, command: CreateProductCommand) -> Result[ProductResult]:
        price = Money.create(command.price)
        if price.is_failure:
            return Result.fail(price.error)
        if command.project_id:
            project = load_owned_project(
                self._project_repo, command.project_id, command.creator_id
            )
            if project.is_failure:
                return Result.fail(project.error)

        created = Product.create(
            creator_id=command.creator_id,
            name=command.name,
            price=price.value,
            description=command.description,
            project_id=command.project_id,
        )
        if created.is_failure:
            return Result.fail(created.error)
        product = created.value

        self._product_repo.save(product)
        logger.info("Created product %s for creator %s", product.id, product.creator_id)
        return Result.ok(ProductResult.from_entity(product))
