"""
Products bounded context: domain layer.

Catalog products, their variants, images and per-size stock (SKUs).
"""
