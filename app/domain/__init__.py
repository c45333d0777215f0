"""
Domain layer package.

Entities, value objects and ports (ABCs) of the subscriptions, orders,
pages and products contexts. Business rules report failures as
Results carrying French user-facing messages. No framework imports, no IO.
"""
