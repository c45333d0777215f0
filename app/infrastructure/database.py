"""
Database engine and schema management.

Provides the shared SQLAlchemy engine used by every repository adapter
and the idempotent DDL that creates the marketplace tables.

Tables:
    - ``subscriptions``: creator plans and usage counters
    - ``orders`` / ``order_items``: orders and their line items
    - ``creator_pages`` / ``page_sections``: storefront pages
    - ``projects``: product collections
    - ``products``, ``product_variants``, ``product_images``, ``product_skus``

All DDL uses IF NOT EXISTS so ``ensure_schema`` can run at every boot.
"""

import logging
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from app.core.config import settings

logger = logging.getLogger(__name__)

DDL_STATEMENTS: list[str] = [
    # Subscriptions
    """
    CREATE TABLE IF NOT EXISTS subscriptions (
        id                      VARCHAR(36) PRIMARY KEY,
        user_id                 VARCHAR(64) NOT NULL UNIQUE,
        creator_id              VARCHAR(64) NOT NULL UNIQUE,
        plan                    VARCHAR(16) NOT NULL DEFAULT 'FREE',
        status                  VARCHAR(16) NOT NULL DEFAULT 'ACTIVE',
        current_period_start    TIMESTAMPTZ NOT NULL,
        current_period_end      TIMESTAMPTZ NOT NULL,
        products_used           INTEGER     NOT NULL DEFAULT 0,
        sales_used              INTEGER     NOT NULL DEFAULT 0,
        stripe_subscription_id  VARCHAR(255) UNIQUE,
        stripe_customer_id      VARCHAR(255),
        grace_period_start      TIMESTAMPTZ,
        created_at              TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at              TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    # Orders
    """
    CREATE TABLE IF NOT EXISTS orders (
        id                        VARCHAR(36) PRIMARY KEY,
        order_number              VARCHAR(32) NOT NULL UNIQUE,
        creator_id                VARCHAR(64) NOT NULL,
        customer_id               VARCHAR(64) NOT NULL,
        customer_name             VARCHAR(255) NOT NULL,
        customer_email            VARCHAR(255) NOT NULL,
        shipping_street           VARCHAR(255) NOT NULL,
        shipping_city             VARCHAR(128) NOT NULL,
        shipping_postal_code      VARCHAR(16)  NOT NULL,
        shipping_country          VARCHAR(64)  NOT NULL,
        status                    VARCHAR(16)  NOT NULL DEFAULT 'PENDING',
        total_amount              INTEGER      NOT NULL,
        stripe_payment_intent_id  VARCHAR(255),
        stripe_refund_id          VARCHAR(255),
        tracking_number           VARCHAR(128),
        carrier                   VARCHAR(64),
        cancellation_reason       TEXT,
        shipped_at                TIMESTAMPTZ,
        delivered_at              TIMESTAMPTZ,
        shipping_mode             VARCHAR(32),
        relay_point_id            VARCHAR(64),
        relay_point_name          VARCHAR(255),
        shipping_cost             INTEGER,
        created_at                TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at                TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS order_items (
        id            VARCHAR(36) PRIMARY KEY,
        order_id      VARCHAR(36) NOT NULL REFERENCES orders (id) ON DELETE CASCADE,
        product_id    VARCHAR(36) NOT NULL,
        variant_id    VARCHAR(36),
        product_name  VARCHAR(255) NOT NULL,
        variant_info  VARCHAR(255),
        price         INTEGER NOT NULL,
        quantity      INTEGER NOT NULL,
        image         TEXT
    )
    """,
    # Pages
    """
    CREATE TABLE IF NOT EXISTS creator_pages (
        id            VARCHAR(36) PRIMARY KEY,
        creator_id    VARCHAR(64)  NOT NULL,
        slug          VARCHAR(50)  NOT NULL UNIQUE,
        title         VARCHAR(200) NOT NULL,
        description   VARCHAR(500),
        template_id   VARCHAR(64),
        status        VARCHAR(16)  NOT NULL DEFAULT 'DRAFT',
        published_at  TIMESTAMPTZ,
        created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS page_sections (
        id          VARCHAR(36) PRIMARY KEY,
        page_id     VARCHAR(36) NOT NULL REFERENCES creator_pages (id) ON DELETE CASCADE,
        type        VARCHAR(32) NOT NULL,
        title       VARCHAR(200),
        content     JSONB       NOT NULL DEFAULT '{}'::jsonb,
        position    INTEGER     NOT NULL,
        is_visible  BOOLEAN     NOT NULL DEFAULT TRUE,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    # Products
    """
    CREATE TABLE IF NOT EXISTS projects (
        id           VARCHAR(36) PRIMARY KEY,
        creator_id   VARCHAR(64)  NOT NULL,
        name         VARCHAR(100) NOT NULL,
        description  TEXT,
        cover_image  TEXT,
        created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        id            VARCHAR(36) PRIMARY KEY,
        creator_id    VARCHAR(64)  NOT NULL,
        project_id    VARCHAR(36) REFERENCES projects (id) ON DELETE SET NULL,
        name          VARCHAR(200) NOT NULL,
        description   TEXT,
        price         INTEGER      NOT NULL,
        currency      VARCHAR(3)   NOT NULL DEFAULT 'EUR',
        status        VARCHAR(16)  NOT NULL DEFAULT 'DRAFT',
        published_at  TIMESTAMPTZ,
        created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS product_variants (
        id              VARCHAR(36) PRIMARY KEY,
        product_id      VARCHAR(36) NOT NULL REFERENCES products (id) ON DELETE CASCADE,
        name            VARCHAR(100) NOT NULL,
        sku             VARCHAR(64),
        price_override  INTEGER,
        stock           INTEGER NOT NULL DEFAULT 0,
        color           VARCHAR(64),
        color_code      VARCHAR(16),
        images          JSONB   NOT NULL DEFAULT '[]'::jsonb,
        is_active       BOOLEAN NOT NULL DEFAULT TRUE,
        created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS product_images (
        id          VARCHAR(36) PRIMARY KEY,
        product_id  VARCHAR(36) NOT NULL REFERENCES products (id) ON DELETE CASCADE,
        url         TEXT        NOT NULL,
        alt         VARCHAR(255) NOT NULL DEFAULT '',
        position    INTEGER     NOT NULL,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS product_skus (
        id          VARCHAR(36) PRIMARY KEY,
        product_id  VARCHAR(36) NOT NULL REFERENCES products (id) ON DELETE CASCADE,
        variant_id  VARCHAR(36) REFERENCES product_variants (id) ON DELETE CASCADE,
        size        VARCHAR(32),
        stock       INTEGER NOT NULL DEFAULT 0,
        updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    # Indexes for the common lookups
    "CREATE INDEX IF NOT EXISTS idx_orders_creator_created ON orders (creator_id, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_orders_customer_created ON orders (customer_id, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_order_items_order ON order_items (order_id)",
    "CREATE INDEX IF NOT EXISTS idx_pages_creator ON creator_pages (creator_id)",
    "CREATE INDEX IF NOT EXISTS idx_sections_page ON page_sections (page_id, position)",
    "CREATE INDEX IF NOT EXISTS idx_products_creator ON products (creator_id, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_products_project ON products (project_id)",
    "CREATE INDEX IF NOT EXISTS idx_projects_creator ON projects (creator_id)",
    "CREATE INDEX IF NOT EXISTS idx_variants_product ON product_variants (product_id)",
    "CREATE INDEX IF NOT EXISTS idx_images_product ON product_images (product_id, position)",
    (
        "CREATE UNIQUE INDEX IF NOT EXISTS uq_product_skus_key ON product_skus "
        "(product_id, COALESCE(variant_id, ''), COALESCE(size, ''))"
    ),
]


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build (once) the SQLAlchemy engine from application settings."""
    return create_engine(settings.get_database_dsn(), pool_pre_ping=True)


def dispose_engine() -> None:
    """Close the pooled connections, if an engine was ever built."""
    if get_engine.cache_info().currsize == 0:
        return
    get_engine().dispose()
    get_engine.cache_clear()
    logger.info("Database engine disposed.")


def ensure_schema(engine: Engine) -> None:
    """Create missing tables and indexes (idempotent).

    Args:
        engine: Engine bound to the target database.
    """
    with engine.begin() as conn:
        for ddl in DDL_STATEMENTS:
            conn.execute(text(ddl))
    logger.info("Database schema verified/created (%d statements).", len(DDL_STATEMENTS))
