"""
Subscriptions bounded context: infrastructure adapters.

- PostgreSQL repository (SQLAlchemy)
- In-memory repository (tests, local runs)
- Stripe billing service
"""
