"""
Use case: Update a product's name, description, price or project.

Input: UpdateProductCommand
Output: Result[ProductResult]
Side effects: Persists the updated product.
Failure cases:
    - Unknown product, or product owned by another creator
    - Invalid name or price
    - Unknown project, or project owned by another creator
"""

import logging

from app.application.products.common import load_owned_product, load_owned_project
from app.application.products.dtos import ProductResult, UpdateProductCommand
from app.domain.products.ports import ProductRepository, ProjectRepository
from app.domain.products.value_objects import Money
from app.shared.domain import Result

logger = logging.getLogger(__name__)


class UpdateProductUseCase:
    def __init__(
        self, product_repo: ProductRepository, project_repo: ProjectRepository
    ) -> None:
        self._product_repo = product_repo
        self._project_repo = project_repo

    def execute(self, command: UpdateProductCommand) -> Result[ProductResult]:
        loaded = load_owned_product(self._product_repo, command.product_id, command.creator_id)
        if loaded.is_failure:
            return Result.fail(loaded.error)
        product = loaded.value

        # Validate everything before mutating anything.
        price = None
        if command.price is not None:
            price_result = Money.create(command.price, product.price.currency)
            if price_result.is_failure:
                return Result.fail(price_result.error)
            price = price_result.value
        if command.project_id is not None and not command.remove_project:
            project = load_owned_project(
                self._project_repo, command.project_id, command.creator_id
            )
            if project.is_failure:
                return Result.fail(project.error)

        if command.name is not None:
            renamed = product.update_name(command.name)
            if renamed.is_failure:
                return Result.fail(renamed.error)
        if command.description is not None:
            product.update_description(command.description.strip() or None)
        if price is not None:
            product.update_price(price)
        if command.remove_project:
            product.assign_project(None)
        elif command.project_id is not None:
            product.assign_project(command.project_id)

        self._product_repo.save(product)
        logger.info("Updated product %s", product.id)
        return Result.ok(ProductResult.from_entity(product))
