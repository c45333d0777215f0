"""
Orders bounded context: infrastructure adapters.

- PostgreSQL repository with optimistic locking (SQLAlchemy)
- In-memory repository (tests, local runs)
"""
