"""
Pages bounded context: domain layer.

Creator storefront pages and their ordered, typed sections.
"""
