"""
Shared domain building blocks.

Contains the primitives every bounded context builds on:
- Result: success/failure wrapper returned by use cases
- Entity / ValueObject base classes
- Identifier generation
"""

from app.shared.domain.entity import Entity, ValueObject, generate_id, utcnow
from app.shared.domain.result import Result

__all__ = ["Entity", "Result", "ValueObject", "generate_id", "utcnow"]
