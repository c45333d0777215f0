"""
Kpsull: marketplace backend for independent creators.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - subscriptions: FREE / PRO plans, usage limits, Stripe billing.
    - orders: Order lifecycle and optimistic concurrency.
    - pages: Creator storefront pages and their sections.
    - products: Catalog products, variants, images and SKUs.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (DB, Stripe, Cloudinary) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
