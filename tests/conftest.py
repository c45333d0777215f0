"""
Shared pytest configuration.

Rate limiting is disabled so API tests can hit the heavy endpoints
repeatedly; the limiter itself is covered by slowapi.

The ``api`` fixture wires the FastAPI app to the in-memory adapters and
to mocked Stripe / Cloudinary ports, so API tests never need a database
or network access.
"""

from types import SimpleNamespace
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.domain.products.ports import ImageUploadService
from app.domain.subscriptions.ports import BillingService
from app.infrastructure.orders.in_memory_order_repository import InMemoryOrderRepository
from app.infrastructure.pages.in_memory_page_repository import InMemoryPageRepository
from app.infrastructure.products.in_memory_catalog_repositories import (
    InMemoryProductImageRepository,
    InMemoryProductRepository,
    InMemoryProjectRepository,
    InMemorySkuRepository,
    InMemoryVariantRepository,
)
from app.infrastructure.subscriptions.in_memory_subscription_repository import (
    InMemorySubscriptionRepository,
)
from app.interfaces.orders.dependencies import get_order_repository
from app.interfaces.pages.dependencies import get_page_repository
from app.interfaces.products.dependencies import (
    get_image_upload_service,
    get_product_image_repository,
    get_product_repository,
    get_project_repository,
    get_sku_repository,
    get_variant_repository,
)
from app.interfaces.subscriptions.dependencies import (
    get_billing_service,
    get_subscription_repository,
)
from app.main import app
from app.shared.domain import Result
from app.shared.security.rate_limiting import limiter

limiter.enabled = False


@pytest.fixture
def api() -> Iterator[SimpleNamespace]:
    """TestClient plus the in-memory stores and mocks it is wired to."""
    uploads = MagicMock(spec=ImageUploadService)
    uploads.upload.side_effect = lambda data, filename: Result.ok(
        f"https://res.cloudinary.com/demo/image/upload/v1/kpsull/{filename}"
    )
    uploads.delete.return_value = Result.ok()

    env = SimpleNamespace(
        subscriptions=InMemorySubscriptionRepository(),
        billing=MagicMock(spec=BillingService),
        orders=InMemoryOrderRepository(),
        pages=InMemoryPageRepository(),
        products=InMemoryProductRepository(),
        projects=InMemoryProjectRepository(),
        variants=InMemoryVariantRepository(),
        images=InMemoryProductImageRepository(),
        skus=InMemorySkuRepository(),
        uploads=uploads,
    )
    app.dependency_overrides.update(
        {
            get_subscription_repository: lambda: env.subscriptions,
            get_billing_service: lambda: env.billing,
            get_order_repository: lambda: env.orders,
            get_page_repository: lambda: env.pages,
            get_product_repository: lambda: env.products,
            get_project_repository: lambda: env.projects,
            get_variant_repository: lambda: env.variants,
            get_product_image_repository: lambda: env.images,
            get_sku_repository: lambda: env.skus,
            get_image_upload_service: lambda: env.uploads,
        }
    )
    env.client = TestClient(app)
    try:
        yield env
    finally:
        app.dependency_overrides.clear()
