"""
Shared error handling package.

``exceptions`` holds the errors raised by the interface layer;
``handlers`` turns them, and the per-context domain errors, into
``{"error", "detail"}`` JSON responses.
"""
