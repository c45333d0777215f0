"""
Pages application layer.

Use cases for creating, editing and publishing creator storefront pages.
"""
