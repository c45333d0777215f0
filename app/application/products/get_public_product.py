"""
Use case: Show a published product to shoppers.

Input: product_id
Output: Result[PublicProductDetail]
Side effects: None (read-only query).

Only available variants are listed. The gallery holds the product
images in order, followed by the variant images.
"""

from app.application.products.common import PRODUCT_NOT_FOUND
from app.application.products.dtos import PublicProductDetail, PublicVariantResult
from app.domain.products.ports import (
    ProductImageRepository,
    ProductRepository,
    VariantRepository,
)
from app.shared.domain import Result


class GetPublicProductUseCase:
    def __init__(
        self,
        product_repo: ProductRepository,
        variant_repo: VariantRepository,
        image_repo: ProductImageRepository,
    ) -> None:
        self._product_repo = product_repo
        self._variant_repo = variant_repo
        self._image_repo = image_repo

    def execute(self, product_id: str) -> Result[PublicProductDetail]:
        if not product_id or not product_id.strip():
            return Result.fail("Product ID est requis")
        product = self._product_repo.find_by_id(product_id.strip())
        if product is None or not product.is_published:
            return Result.fail(PRODUCT_NOT_FOUND)

        variants = self._variant_repo.find_by_product_id(product.id)
        gallery = [image.url.url for image in self._image_repo.find_by_product_id(product.id)]
        for variant in variants:
            gallery.extend(url for url in variant.images if url not in gallery)

        return Result.ok(
            PublicProductDetail(
                id=product.id,
                name=product.name,
                description=product.description,
                price=product.price.amount,
                currency=product.price.currency,
                formatted_price=product.price.formatted,
                project_id=product.project_id,
                main_image_url=gallery[0] if gallery else None,
                images=gallery,
                variants=[
                    PublicVariantResult(
                        id=v.id,
                        name=v.name,
                        color=v.color,
                        color_code=v.color_code,
                        price_override=v.price_override.amount if v.price_override else None,
                        stock=v.stock,
                        is_available=v.is_available,
                        images=list(v.images),
                    )
                    for v in variants
                    if v.is_available
                ],
                published_at=product.published_at,
            )
        )
