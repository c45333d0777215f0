"""
Application layer package.

One use case per module, each a class with a single ``execute``
method returning a Result. Commands, queries and results are frozen
dataclasses in each context's ``dtos.py``. Depends on domain ports only.
"""
