"""
Products application layer.

Use cases for the catalog: products, variants, SKUs and images.
"""
